# tcpchat/transcript.py

"""
The chat transcript: an append-only file with one line per broadcast.
"""

import itertools
import logging

from .messages import Message, format_timestamped

_transcript_ids = itertools.count(1)


class Transcript:
    """Writes broadcast messages to the transcript file through logging."""

    def __init__(self, path: str, logger_name: str = 'tcpchat.transcript'):
        self.path = path
        # One logger per instance so transcripts never share handlers
        self.logger = logging.getLogger(f"{logger_name}.{next(_transcript_ids)}")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        # Opening the file here makes an unwritable path a startup error
        self.handler = logging.FileHandler(path, mode='a', encoding='utf-8')
        self.handler.setFormatter(logging.Formatter(
            '%(asctime)s %(message)s',
            datefmt='%Y/%m/%d %H:%M:%S'
        ))
        self.logger.addHandler(self.handler)

    def record(self, message: Message):
        """Append one message."""
        self.logger.info(format_timestamped(message))

    def close(self):
        self.logger.removeHandler(self.handler)
        self.handler.close()
