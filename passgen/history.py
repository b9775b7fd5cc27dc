"""
Append-only log of generated passphrases.

Each passphrase is written as one line:
    2026-10-19 14:03:27 JST - Alpha-Bravo-0427

The file is opened once per run in append mode and flushed after every
record, so an interrupted run leaves complete lines. A failed write raises
ConfigurationError instead of being reported and skipped like a normal
logging handler would.
"""

import logging

from passgen.errors import ConfigurationError

HISTORY_LOGGER = "passgen.history"
HISTORY_FORMAT = "%(asctime)s - %(message)s"
HISTORY_DATEFMT = "%Y-%m-%d %H:%M:%S %Z"


class HistoryFileHandler(logging.FileHandler):
    """FileHandler that lets write and flush errors propagate to the caller."""

    def handleError(self, record):
        raise


class PassphraseHistory:
    """Writes generated passphrases to a log file, one timestamped line each."""

    def __init__(self, path: str):
        self.path = path
        try:
            self.handler = HistoryFileHandler(path, mode="a", encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not open log file '{path}': {e.strerror}") from e
        self.handler.setFormatter(logging.Formatter(HISTORY_FORMAT, datefmt=HISTORY_DATEFMT))

        self.logger = logging.getLogger(HISTORY_LOGGER)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False  # keep passphrases off the console handlers
        self.logger.addHandler(self.handler)

    def record(self, passphrase: str) -> None:
        try:
            self.logger.info(passphrase)
        except OSError as e:
            raise ConfigurationError(f"Could not write log file '{self.path}': {e.strerror}") from e

    def close(self) -> None:
        self.logger.removeHandler(self.handler)
        try:
            self.handler.close()
        except OSError as e:
            raise ConfigurationError(f"Could not write log file '{self.path}': {e.strerror}") from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
