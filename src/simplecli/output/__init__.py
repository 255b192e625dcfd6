"""Output formatting for the shell's own messages (plain or rich).

Usage:
    from simplecli.output import get_formatter

    formatter = get_formatter("plain")
    formatter.line("myvar=foo")
    formatter.error("Unknown command: frob")
"""

from typing import Any

from simplecli.output.base import OutputFormat, OutputFormatter
from simplecli.output.plain import PlainFormatter
from simplecli.output.rich_fmt import RichFormatter

__all__ = [
    "OutputFormatter",
    "OutputFormat",
    "PlainFormatter",
    "RichFormatter",
    "get_formatter",
]


def get_formatter(format_type: OutputFormat | str, **kwargs: Any) -> OutputFormatter:
    """Get a formatter instance by format type.

    Args:
        format_type: The output format to use.
        **kwargs: Additional formatter-specific options (streams, width).

    Returns:
        An OutputFormatter instance.

    Raises:
        ValueError: If format_type is not recognized.
    """
    if isinstance(format_type, str):
        format_type = OutputFormat(format_type.lower())

    formatters: dict[OutputFormat, type[OutputFormatter]] = {
        OutputFormat.PLAIN: PlainFormatter,
        OutputFormat.RICH: RichFormatter,
    }

    formatter_class = formatters.get(format_type)
    if formatter_class is None:
        raise ValueError(f"Unknown format type: {format_type}")

    return formatter_class(**kwargs)
