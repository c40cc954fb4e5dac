"""
Standard library implementation of the Logger port.
"""

import logging
import os
import sys

from ...core.ports.logger import Logger


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StandardLogger(Logger):
    """Logger adapter backed by the ``logging`` module."""

    def __init__(self, name: str = "apiary", level: int = None):
        """
        Create (or reuse) a named logger with a console handler.

        Args:
            name: Logger name
            level: Logging level, defaults to LOG_LEVEL from the environment
        """
        self._logger = logging.getLogger(name)

        if level is None:
            level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(os.getenv("LOG_FORMAT", DEFAULT_FORMAT)))
            self._logger.addHandler(handler)

        self.set_level(level)

    @staticmethod
    def _format(message: str, kwargs: dict) -> str:
        if not kwargs:
            return message
        context = " ".join(f"{key}={value}" for key, value in kwargs.items())
        return f"{message} {context}"

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(self._format(message, kwargs))

    def error(self, message: str, **kwargs) -> None:
        self._logger.error(self._format(message, kwargs))

    def warn(self, message: str, **kwargs) -> None:
        self._logger.warning(self._format(message, kwargs))

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(self._format(message, kwargs))

    def get_logger(self) -> logging.Logger:
        """Return the underlying ``logging.Logger``."""
        return self._logger

    def set_level(self, level: int) -> None:
        """Set the level on the logger and all of its handlers."""
        self._logger.setLevel(level)
        for handler in self._logger.handlers:
            handler.setLevel(level)
