# tcpchat/broadcaster.py

"""
Ordered delivery of chat messages: history, transcript and fan-out.
"""

import logging

from .messages import Message, render


class MessageStore:
    """Append-only history of every delivered message, in delivery order."""

    def __init__(self):
        self._messages = []

    def __len__(self):
        return len(self._messages)

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def append(self, message: Message):
        self._messages.append(message)

    def snapshot(self) -> list:
        return list(self._messages)


class Broadcaster:
    """
    Serializes all broadcasts behind the registry lock.

    The duplicate check, history append, transcript write and the writes to
    every peer happen as one step, so every client sees the same order as
    the history. A slow peer therefore holds up every other broadcast.
    """

    def __init__(self, registry, store: MessageStore, transcript):
        self.registry = registry
        self.store = store
        self.transcript = transcript
        self.lock = registry.lock

    def broadcast(self, message: Message) -> bool:
        """ Records and fans out a message. Returns False if it was dropped as a repeat."""
        with self.lock:
            if message.same_content(self.store.last()):
                logging.debug(f"Dropped repeated message from '{message.name}'")
                return False
            self.store.append(message)
            self.transcript.record(message)
            line = render(message)
            for session in self.registry.snapshot():
                self._deliver(session, line)
            return True

    def announce_join(self, session) -> Message:
        """ Broadcasts the join event, then replays history to the new session.

        The replay skips the join record just broadcast.
        """
        joined = Message.joined(session.name)
        with self.lock:
            self.broadcast(joined)
            for message in self.store.snapshot():
                if message is joined:
                    continue
                self._deliver(session, render(message))
        return joined

    def _deliver(self, session, line: str):
        try:
            session.send(line)
        except ConnectionError:
            # The session's own read loop cleans up
            logging.warning(f"Failed to send message to {session.name}. Connection might be closed.")
