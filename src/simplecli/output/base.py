"""Output formatter protocol and base classes."""

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TextIO


class OutputFormat(str, Enum):
    """Supported output formats."""

    PLAIN = "plain"
    RICH = "rich"


class OutputFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters write the shell's own messages (confirmations, help,
    errors). Script code writes to stdout directly and bypasses them.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            stream: Output stream (defaults to stdout at write time).
            error_stream: Error stream (defaults to stderr at write time).
        """
        self._stream = stream
        self._error_stream = error_stream

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self._stream or sys.stdout

    @property
    def error_stream(self) -> TextIO:
        """Get the error stream."""
        return self._error_stream or sys.stderr

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the format type of this formatter."""
        pass

    @abstractmethod
    def line(self, text: str) -> None:
        """Print one line of text verbatim."""
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        """Print an error message for the user."""
        pass

    @abstractmethod
    def format_list(self, items: list[str], title: str | None = None) -> str:
        """Format a list of items, one per line, under an optional title."""
        pass

    def print_list(self, items: list[str], title: str | None = None) -> None:
        """Format and print a list of items."""
        self.line(self.format_list(items, title))

    def flush(self) -> None:
        """Flush the output stream before handing the terminal to a child."""
        self.stream.flush()
