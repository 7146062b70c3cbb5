# tcpchat/network_utils.py

"""
Provides utility functions for sending and receiving
newline-terminated text over sockets.
"""

import socket
import logging

from .config import MAX_LINE_LENGTH


def send_text(sock: socket.socket, text: str):
    """ Encodes and sends text exactly as given (no newline is added)."""
    try:
        sock.sendall(text.encode('utf-8'))
    except OSError as e:
        raise ConnectionError("Failed to send message") from e


def send_line(sock: socket.socket, line: str):
    """ Sends one line, appending the terminating newline."""
    send_text(sock, line + "\n")


def make_reader(sock: socket.socket):
    """ Wraps the socket in a text file object for line reads."""
    return sock.makefile('r', encoding='utf-8', errors='replace')


def recv_line(reader, limit: int = MAX_LINE_LENGTH) -> str | None:
    """ Reads one line, without its newline. Returns None on EOF, error,
    or a line longer than limit characters."""
    try:
        line = reader.readline(limit + 1)
    except (ConnectionResetError, OSError, ValueError) as e:
        logging.debug(f"Connection lost during readline: {e}")
        return None
    if not line:
        return None # Connection closed
    if len(line) > limit and not line.endswith("\n"):
        logging.warning(f"Line longer than {limit} characters, dropping connection")
        return None
    return line.rstrip("\r\n")


def close_socket(sock: socket.socket):
    """ Shuts down and closes a socket, ignoring errors from a dead peer."""
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass # Not connected any more
    try:
        sock.close()
    except OSError:
        pass
