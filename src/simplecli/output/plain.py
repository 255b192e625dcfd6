"""Plain text output formatter."""

from simplecli.output.base import OutputFormat, OutputFormatter


class PlainFormatter(OutputFormatter):
    """Plain text output formatter.

    Produces unformatted text suitable for piping and for scripts that
    parse the shell's output.
    """

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def line(self, text: str) -> None:
        print(text, file=self.stream)

    def error(self, message: str) -> None:
        print(message, file=self.error_stream)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        lines: list[str] = []
        if title:
            lines.append(title)
        lines.extend(items)
        return "\n".join(lines)
