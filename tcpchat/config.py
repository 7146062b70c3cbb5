# tcpchat/config.py

"""
Server configuration defaults and the ServerConfig object.
"""

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8989
MAX_CLIENTS = 10
TRANSCRIPT_PATH = 'chat.log'
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 20
LISTEN_BACKLOG = 16
# Longest accepted inbound line, in characters
MAX_LINE_LENGTH = 64 * 1024


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 transcript_path: str = TRANSCRIPT_PATH, max_clients: int = MAX_CLIENTS,
                 name_min_length: int = NAME_MIN_LENGTH, name_max_length: int = NAME_MAX_LENGTH,
                 max_line_length: int = MAX_LINE_LENGTH):
        self.host = host
        self.port = port
        self.transcript_path = transcript_path

        # Capacity
        self.max_clients = max_clients
        self.listen_backlog = LISTEN_BACKLOG

        # Rename rules
        self.name_min_length = name_min_length
        self.name_max_length = name_max_length

        # Inbound lines
        self.max_line_length = max_line_length
