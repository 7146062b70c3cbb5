# run_client.py

"""
Starts the TCP Chat Client.
"""

import argparse

from tcpchat.client import ChatClient
from tcpchat.config import DEFAULT_PORT


def main():
    parser = argparse.ArgumentParser(description="TCP Chat Client")
    parser.add_argument(
        '--host',
        default='127.0.0.1',
        help="Server host address (default: 127.0.0.1)"
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=DEFAULT_PORT,
        help=f"Server port number (default: {DEFAULT_PORT})"
    )
    args = parser.parse_args()

    client = ChatClient(args.host, args.port)
    client.run()


if __name__ == "__main__":
    main()
