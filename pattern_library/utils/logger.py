"""
Logger
Structured logging for the Pattern Library MCP Server.

Everything goes to stderr: stdout carries the stdio transport. The default
name is the package root so module loggers propagate into the same handler.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


class Logger:
    """Logger wrapper that owns one stderr handler per logger name."""

    def __init__(self, name: str = "pattern_library", level: str = "INFO", stream: Optional[TextIO] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(_level(level))

        # Only add handler if none exist
        if not self.logger.handlers:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

    def debug(self, message: str, extra: Optional[dict] = None):
        self.logger.debug(message, extra=extra)

    def info(self, message: str, extra: Optional[dict] = None):
        self.logger.info(message, extra=extra)

    def warning(self, message: str, extra: Optional[dict] = None):
        self.logger.warning(message, extra=extra)

    def error(self, message: str, extra: Optional[dict] = None):
        self.logger.error(message, extra=extra)
