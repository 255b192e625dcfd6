"""Rich terminal output formatter."""

from typing import TextIO

from rich.console import Console
from rich.text import Text

from simplecli.output.base import OutputFormat, OutputFormatter


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Script-provided text is never interpreted as Rich markup, so values
    like ``tbl[key]`` print as typed.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        width: int | None = None,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            width: Console width (None for auto-detect).
        """
        super().__init__(stream, error_stream)
        self._width = width
        self._console: Console | None = None
        self._error_console: Console | None = None

    def _get_console(self) -> Console:
        """Lazily initialize and return the Rich console."""
        if self._console is None:
            self._console = Console(file=self._stream, width=self._width)
        return self._console

    def _get_error_console(self) -> Console:
        """Lazily initialize and return the error console."""
        if self._error_console is None:
            self._error_console = Console(
                file=self._error_stream,
                width=self._width,
                stderr=True,
            )
        return self._error_console

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def line(self, text: str) -> None:
        self._get_console().print(
            text, markup=False, highlight=False, soft_wrap=True
        )

    def error(self, message: str) -> None:
        self._get_error_console().print(
            Text(message, style="red"), highlight=False, soft_wrap=True
        )

    def format_list(self, items: list[str], title: str | None = None) -> str:
        lines: list[str] = []
        if title:
            lines.append(title)
        lines.extend(f"  {item}" for item in items)
        return "\n".join(lines)

    def print_list(self, items: list[str], title: str | None = None) -> None:
        console = self._get_console()
        if title:
            console.print(Text(title, style="bold"), soft_wrap=True)
        for item in items:
            console.print(Text(item, style="cyan"), soft_wrap=True)

    def flush(self) -> None:
        self._get_console().file.flush()
