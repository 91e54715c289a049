"""Logging from config and env.

Diagnostics go to stderr: stdout carries the dry-run rendering only.

Levels (inclusive):
- ERROR: fatal configuration and API errors, unreadable or unwritable files
- WARNING: vanished anchor lines
- INFO: pipeline progress and "nothing to do" notices
- DEBUG: request details, including urllib3 connection logs

Configure via prconflict.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging
import sys
from typing import TextIO

from prconflict.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "prconflict"
# Third-party loggers that only speak at DEBUG
QUIET_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class PRConflictLogging:
    """Routes log records to stderr with the configured level and format."""

    def __init__(self, config: LoggingConfig, stream: TextIO | None = None) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._stream = stream

    def setup(self) -> logging.Logger:
        """Install a single stderr handler and return the package logger."""
        handler = logging.StreamHandler(self._stream if self._stream is not None else sys.stderr)
        logging.basicConfig(
            level=self._level,
            format=self._format,
            handlers=[handler],
            force=True,
        )
        package = logging.getLogger(PACKAGE_LOGGER)
        package.setLevel(self._level)
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(self._level, logging.WARNING))
        return package
