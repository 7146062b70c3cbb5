# tcpchat/registry.py

"""
The set of active sessions and the lock that guards all shared chat state.
"""

import threading

from .config import MAX_CLIENTS


class RegistrationError(Exception):
    """Base class for rejected register/rename attempts."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name


class CapacityExceeded(RegistrationError):
    """The registry already holds the maximum number of sessions."""


class NameTaken(RegistrationError):
    """Another active session already uses the requested name."""


class Registry:
    """
    Active sessions keyed by their connection id.

    Every mutation happens under ``lock``. The Broadcaster holds the same
    (re-entrant) lock for a whole broadcast, so membership cannot change in
    the middle of a fan-out.
    """

    def __init__(self, max_sessions: int = MAX_CLIENTS):
        self.max_sessions = max_sessions
        # Store sessions as {session id: session}
        self._sessions = {}
        self.lock = threading.RLock()

    def __len__(self):
        return len(self._sessions)

    def is_full(self) -> bool:
        """ Unlocked best-effort capacity check (see try_register for the real one)."""
        return len(self._sessions) >= self.max_sessions

    def _name_in_use(self, name: str) -> bool:
        return any(s.name == name for s in self._sessions.values())

    def try_register(self, session, name: str):
        """ Checks capacity and name availability, then adds the session under that name."""
        with self.lock:
            if len(self._sessions) >= self.max_sessions:
                raise CapacityExceeded(name)
            if self._name_in_use(name):
                raise NameTaken(name)
            session.name = name
            self._sessions[session.id] = session

    def is_name_taken(self, name: str) -> bool:
        with self.lock:
            return self._name_in_use(name)

    def rename(self, session, new_name: str) -> str:
        """ Renames a registered session and returns its previous name."""
        with self.lock:
            if self._name_in_use(new_name):
                raise NameTaken(new_name)
            old_name = session.name
            session.name = new_name
            return old_name

    def deregister(self, session) -> bool:
        """ Removes the session. Returns False if it was not registered."""
        with self.lock:
            return self._sessions.pop(session.id, None) is not None

    def is_registered(self, session) -> bool:
        with self.lock:
            return session.id in self._sessions

    def snapshot(self) -> list:
        """ The sessions to deliver to, as of this call."""
        with self.lock:
            return list(self._sessions.values())

    def names(self) -> list:
        with self.lock:
            return [s.name for s in self._sessions.values()]
