# tcpchat/server.py

"""
The main TCP Chat Server logic.
"""

import socket
import threading
import logging

from . import network_utils as net
from .broadcaster import Broadcaster, MessageStore
from .config import ServerConfig
from .registry import Registry
from .session import ClientSession
from .transcript import Transcript

# Configure logging
logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(message)s', datefmt='%H:%M:%S')


class ChatServer:
    def __init__(self, config: ServerConfig = None, transcript=None):
        self.config = config or ServerConfig()
        self.registry = Registry(self.config.max_clients)
        self.store = MessageStore()
        # Opens the transcript file; failing here aborts startup
        self.transcript = transcript if transcript is not None else Transcript(self.config.transcript_path)
        self.broadcaster = Broadcaster(self.registry, self.store, self.transcript)
        self.server_socket = None

    @property
    def address(self):
        """ The (host, port) actually bound, useful when port 0 was requested."""
        return self.server_socket.getsockname() if self.server_socket else None

    def listen(self):
        """ Binds the server socket and starts listening. Raises OSError on failure."""
        self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            # Allow reusing the address quickly after server restart
            self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self.server_socket.bind((self.config.host, self.config.port))
            self.server_socket.listen(self.config.listen_backlog)
        except OSError:
            self.server_socket.close()
            self.server_socket = None
            raise
        logging.info(f"Listening on the port :{self.address[1]}")

    def start(self):
        """ Listens and serves until the server socket is closed."""
        self.listen()
        try:
            self.serve_forever()
        finally:
            self.shutdown()

    def serve_forever(self):
        """ Main loop to accept incoming client connections."""
        while True:
            try:
                client_socket, address = self.server_socket.accept()
            except OSError:
                logging.info("Server socket closed, shutting down accept loop.")
                break # Exit loop if server socket is closed

            # Unlocked, best-effort gate; try_register makes the real check
            if self.registry.is_full():
                logging.warning(f"Server is full, rejecting connection from {address}")
                net.close_socket(client_socket)
                continue

            logging.info(f"Accepted connection from {address}")

            session = ClientSession(
                client_socket, address, self.registry, self.broadcaster,
                self.config.name_min_length, self.config.name_max_length, self.config.max_line_length,
            )
            # Start a new thread to handle this client
            thread = threading.Thread(target=session.run, name=f"session-{session.id}", daemon=True)
            thread.start()

    def shutdown(self):
        """ Closes the listening socket, which ends serve_forever."""
        sock, self.server_socket = self.server_socket, None
        if sock is not None:
            net.close_socket(sock)
