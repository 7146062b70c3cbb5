# tcpchat/messages.py

"""
The chat Message value and the text the server puts on the wire.
"""

from dataclasses import dataclass
from datetime import datetime

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

JOINED_TEXT = "has joined our chat..."
LEFT_TEXT = "has left our chat..."
RENAMED_TEXT = "changed their name to {new_name}"

RENAME_COMMAND = "/name "

NAME_PROMPT = "[ENTER YOUR NAME]: "
NAME_TAKEN = "Username {name} is already taken. Please choose another."
NAME_TAKEN_PROMPT = NAME_TAKEN + "\n[ENTER ANOTHER NAME]: "
NAME_LENGTH_ERROR = "Invalid username length. Must be between {low} and {high} characters."

LOGO = (
    "\n"
    "         _nnnn_\n"
    "        dGGGGMMb\n"
    "       @p~qp~~qMb\n"
    "       M|@||@) M|\n"
    "       @,----.JM|\n"
    "      JS^\\__/  qKL\n"
    "     dZP        qKRb\n"
    "    dZP          qKKb\n"
    "   fZP            SMMb\n"
    "   HZM            MMMM\n"
    "   FqM            MMMM\n"
    " __| \".        |\\dS\"qML\n"
    " |    `.       | `' \\Zq\n"
    "_)      \\.___.,|     .'\n"
    "\\____   )MMMMMP|   .'\n"
    "     `-'       `--'\n"
)

WELCOME_BANNER = "Welcome to TCP-Chat!\n" + LOGO + "\n"


@dataclass(frozen=True, eq=False)
class Message:
    """ One broadcast event. The name is a snapshot taken at send time."""
    timestamp: datetime
    name: str
    text: str

    @classmethod
    def create(cls, name: str, text: str) -> "Message":
        return cls(datetime.now(), name, text)

    @classmethod
    def joined(cls, name: str) -> "Message":
        return cls.create(name, JOINED_TEXT)

    @classmethod
    def left(cls, name: str) -> "Message":
        return cls.create(name, LEFT_TEXT)

    @classmethod
    def renamed(cls, old_name: str, new_name: str) -> "Message":
        return cls.create(old_name, RENAMED_TEXT.format(new_name=new_name))

    def same_content(self, other: "Message") -> bool:
        """ True when sender and text match, whatever the timestamps."""
        return other is not None and self.name == other.name and self.text == other.text

    @property
    def is_system_event(self) -> bool:
        return self.text in (JOINED_TEXT, LEFT_TEXT)


def format_timestamped(message: Message) -> str:
    stamp = message.timestamp.strftime(TIMESTAMP_FORMAT)
    return f"[{stamp}][{message.name}]: {message.text}"


def render(message: Message) -> str:
    """ Renders a message as the line a client receives, newline included.

    Join and leave events go out as "<name> <event text>" with no timestamp;
    everything else, renames included, is "[<timestamp>][<name>]: <text>".
    """
    if message.is_system_event:
        return f"{message.name} {message.text}\n"
    return format_timestamped(message) + "\n"
