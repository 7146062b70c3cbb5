# tcpchat/session.py

"""
One Session per accepted connection: handshake, read loop and cleanup.
"""

import enum
import itertools
import logging
import socket
import threading
from datetime import datetime

from . import network_utils as net
from .config import NAME_MIN_LENGTH, NAME_MAX_LENGTH, MAX_LINE_LENGTH
from .messages import (
    Message, WELCOME_BANNER, NAME_PROMPT, NAME_TAKEN, NAME_TAKEN_PROMPT, RENAME_COMMAND
)
from .names import InvalidName, clean_join_name, validate_rename
from .registry import CapacityExceeded, NameTaken

_session_ids = itertools.count(1)


class SessionState(enum.Enum):
    CONNECTING = "connecting"
    AWAITING_NAME = "awaiting_name"
    ACTIVE = "active"
    CLOSED = "closed"


class ClientSession:
    """Server side of one client connection."""

    def __init__(self, sock: socket.socket, address, registry, broadcaster,
                 name_min_length: int = NAME_MIN_LENGTH, name_max_length: int = NAME_MAX_LENGTH,
                 max_line_length: int = MAX_LINE_LENGTH):
        self.id = next(_session_ids)
        self.sock = sock
        self.address = address
        self.registry = registry
        self.broadcaster = broadcaster
        self.name_min_length = name_min_length
        self.name_max_length = name_max_length
        self.max_line_length = max_line_length
        self.name = None
        self.joined_at = datetime.now()
        self.state = SessionState.CONNECTING
        self._reader = net.make_reader(sock)
        # Fan-out and local replies come from different threads
        self._write_lock = threading.Lock()

    def __repr__(self):
        return f"<ClientSession id={self.id} name={self.name!r} state={self.state.value}>"

    def send(self, text: str):
        """ Writes raw text to this client as one unit. Raises ConnectionError on failure."""
        with self._write_lock:
            net.send_text(self.sock, text)

    def run(self):
        """ Thread target: runs the session until the connection ends."""
        try:
            if self._handshake():
                self.broadcaster.announce_join(self)
                self._read_loop()
        except ConnectionError:
            logging.info(f"Connection lost for {self.name or self.address}")
        except Exception:
            logging.exception(f"Error handling client {self.name or self.address}")
        finally:
            self._close()

    def _read_name(self) -> str | None:
        line = net.recv_line(self._reader, self.max_line_length)
        if line is None:
            logging.info(f"Failed to read client name from {self.address}")
            return None
        return clean_join_name(line)

    def _handshake(self) -> bool:
        """ Prompts for a name until one registers. False if the session must end."""
        self.state = SessionState.AWAITING_NAME
        self.send(WELCOME_BANNER + NAME_PROMPT)
        name = self._read_name()
        while name is not None:
            try:
                self.registry.try_register(self, name)
            except NameTaken:
                self.send(NAME_TAKEN_PROMPT.format(name=name))
                name = self._read_name()
                continue
            except CapacityExceeded:
                logging.warning(
                    f"Maximum number of clients ({self.registry.max_sessions}) reached, "
                    f"rejecting {self.address}"
                )
                return False
            self.state = SessionState.ACTIVE
            logging.info(f"{self.address} identified as '{self.name}'")
            return True
        return False

    def _read_loop(self):
        while True:
            line = net.recv_line(self._reader, self.max_line_length)
            if line is None:
                break # Client disconnected

            text = line.strip()
            if not text:
                continue
            if text.startswith(RENAME_COMMAND):
                self._handle_rename(text[len(RENAME_COMMAND):])
            else:
                self.broadcaster.broadcast(Message.create(self.name, text))

    def _handle_rename(self, requested: str):
        try:
            new_name = validate_rename(requested, self.name_min_length, self.name_max_length)
        except InvalidName as e:
            self.send(f"{e}\n")
            return
        try:
            old_name = self.registry.rename(self, new_name)
        except NameTaken:
            self.send(NAME_TAKEN.format(name=new_name) + "\n")
            return
        logging.info(f"'{old_name}' is now '{new_name}'")
        self.broadcaster.broadcast(Message.renamed(old_name, new_name))

    def _close(self):
        """ Deregisters, announces the departure and releases the connection."""
        try:
            if self.registry.deregister(self):
                logging.info(f"'{self.name}' disconnected.")
                self.broadcaster.broadcast(Message.left(self.name))
        finally:
            self.state = SessionState.CLOSED
            try:
                self._reader.close()
            except OSError:
                pass
            net.close_socket(self.sock)
