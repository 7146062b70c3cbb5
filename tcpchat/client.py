# tcpchat/client.py

"""
A reference line client for the chat server.
"""

import socket
import threading
import logging
import sys

from . import network_utils as net

# Configure logging for client-side messages
logging.basicConfig(level=logging.INFO, format='%(message)s') # Simpler format for client

HELP_TEXT = "Commands:\n  /name <newname> - Change your display name\n  /quit - Disconnect"


class ChatClient:
    def __init__(self, host, port, output=None):
        self.host = host
        self.port = port
        self.output = output or sys.stdout
        self.client_socket = None
        self.receive_thread = None
        self.running = True

    def connect(self):
        """ Establishes connection to the server and starts the receiver."""
        try:
            self.client_socket = socket.create_connection((self.host, self.port))
            logging.info(f"Connected to server at {self.host}:{self.port}")

            # Start the receiving thread
            self.receive_thread = threading.Thread(target=self._receive_messages, daemon=True)
            self.receive_thread.start()
            return True

        except ConnectionRefusedError:
            logging.error("Connection refused. Is the server running?")
            return False
        except OSError as e:
            logging.error(f"Failed to connect: {e}")
            return False

    def _receive_messages(self):
        """ Target function for the thread that prints server output."""
        # Prompts are not newline-terminated, so print chunks as they arrive
        while self.running:
            try:
                data = self.client_socket.recv(4096)
            except OSError:
                if self.running: # Avoid duplicate message if already quitting
                    logging.info("Connection to server lost.")
                break
            if not data:
                if self.running:
                    logging.info("Disconnected from server.")
                break
            self.output.write(data.decode('utf-8', errors='ignore'))
            self.output.flush()
        self.running = False

    def send_text(self, message: str):
        """ Sends one chat line."""
        try:
            net.send_line(self.client_socket, message)
        except ConnectionError:
            logging.error("Cannot send message. Connection lost.")
            self.running = False

    def handle_input(self, message: str) -> bool:
        """ Handles one line typed by the user. Returns False to stop."""
        if message.strip().lower() == '/quit':
            self.running = False
            return False
        if message.strip().lower() == '/help':
            print(HELP_TEXT, file=self.output)
            return True
        self.send_text(message)
        return self.running

    def start_input_loop(self):
        """ Starts the main loop for user input."""
        try:
            while self.running:
                message = input()
                if not self.handle_input(message):
                    break
        except (KeyboardInterrupt, EOFError):
            logging.info("Disconnecting...")
        finally:
            self.close()

    def close(self):
        self.running = False
        if self.client_socket:
            net.close_socket(self.client_socket)
        # Ensure receive thread has finished if still running
        if self.receive_thread and self.receive_thread.is_alive():
            self.receive_thread.join(timeout=1.0)

    def run(self):
        """ Connects and starts the input loop."""
        if self.connect():
            self.start_input_loop()
