# run_server.py

"""
Starts the TCP Chat Server.
"""

import argparse
import logging
import sys

from tcpchat.config import ServerConfig, DEFAULT_HOST, DEFAULT_PORT, TRANSCRIPT_PATH
from tcpchat.server import ChatServer


def build_parser():
    parser = argparse.ArgumentParser(prog="TCPChat", description="TCP Chat Server")
    parser.add_argument(
        'port',
        nargs='?',
        type=int,
        default=DEFAULT_PORT,
        help=f"Port number to listen on (default: {DEFAULT_PORT})"
    )
    parser.add_argument(
        '--host',
        default=DEFAULT_HOST,
        help=f"Host address to bind the server to (default: {DEFAULT_HOST})"
    )
    parser.add_argument(
        '--log-file',
        default=TRANSCRIPT_PATH,
        help=f"Transcript file, appended to (default: {TRANSCRIPT_PATH})"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = ServerConfig(host=args.host, port=args.port, transcript_path=args.log_file)

    try:
        server = ChatServer(config)
    except OSError as e:
        logging.error(f"Failed to open transcript file: {e}")
        return 1

    try:
        server.start()
    except OSError as e:
        logging.error(f"Failed to start server: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nCtrl+C detected. Shutting down server...")
    finally:
        server.shutdown()
        server.transcript.close()
        print("Server shutdown complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
