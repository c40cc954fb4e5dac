"""
Logger port.
Abstract logging interface used by the core so that services never depend
on a concrete logging backend.
"""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Port (interface) for structured logging."""

    @abstractmethod
    def info(self, message: str, **kwargs) -> None:
        """Log an informational message with optional key/value context."""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs) -> None:
        """Log an error message with optional key/value context."""
        pass

    @abstractmethod
    def warn(self, message: str, **kwargs) -> None:
        """Log a warning message with optional key/value context."""
        pass

    @abstractmethod
    def debug(self, message: str, **kwargs) -> None:
        """Log a debug message with optional key/value context."""
        pass
