# tcpchat/names.py

"""
Display name rules.

Join-time names are only trimmed. Rename targets must also be between
NAME_MIN_LENGTH and NAME_MAX_LENGTH characters once trimmed. Whether a name
is free is decided by the Registry when it commits the name.
"""

from .config import NAME_MIN_LENGTH, NAME_MAX_LENGTH
from .messages import NAME_LENGTH_ERROR


class InvalidName(ValueError):
    """Raised for a rename target that breaks the length rule."""


def clean_join_name(raw: str) -> str:
    return raw.strip()


def validate_rename(raw: str, low: int = NAME_MIN_LENGTH, high: int = NAME_MAX_LENGTH) -> str:
    """ Returns the trimmed name, or raises InvalidName with the client-facing error."""
    name = raw.strip()
    if not name or not low <= len(name) <= high:
        raise InvalidName(NAME_LENGTH_ERROR.format(low=low, high=high))
    return name
