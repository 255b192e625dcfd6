"""Line input for the shell.

The shell needs three outcomes from a read: a line, an interrupt
(carrying whatever had been typed so far) and end of input.
"""

import sys
from pathlib import Path
from typing import Protocol, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings

from simplecli.config.schema import ShellConfig
from simplecli.exceptions import ReaderInitError


class LineInterrupt(Exception):
    """Ctrl-C at the prompt.

    Attributes:
        buffer: The partial line typed before the interrupt.
    """

    def __init__(self, buffer: str = "") -> None:
        super().__init__("interrupted")
        self.buffer = buffer


class LineReader(Protocol):
    """Produces one logical input line per call."""

    def read_line(self, prompt: str) -> str:
        """Read a line.

        Raises:
            LineInterrupt: On Ctrl-C.
            EOFError: At end of input.
        """
        ...


class PromptToolkitReader:
    """Interactive reader with line editing and history."""

    def __init__(
        self,
        history_file: Path | None = None,
        interrupt_prompt: str = "^C",
        eof_prompt: str = "exit",
        output: TextIO | None = None,
    ) -> None:
        self._interrupt_prompt = interrupt_prompt
        self._eof_prompt = eof_prompt
        self._output = output
        try:
            self._session: PromptSession[str] = PromptSession(
                history=self._build_history(history_file),
                key_bindings=self._build_key_bindings(),
            )
        except Exception as e:
            raise ReaderInitError(f"Cannot initialize line editor: {e}") from e

    @staticmethod
    def _build_history(history_file: Path | None) -> History:
        if history_file is None:
            return InMemoryHistory()
        history_file = history_file.expanduser()
        history_file.parent.mkdir(parents=True, exist_ok=True)
        return FileHistory(str(history_file))

    @staticmethod
    def _build_key_bindings() -> KeyBindings:
        kb = KeyBindings()

        @kb.add("c-c")
        def _interrupt(event):  # type: ignore[no-untyped-def]
            # Keep the partial line so the shell can tell ^C on an empty prompt apart
            event.app.exit(
                exception=LineInterrupt(event.current_buffer.text),
                style="class:aborting",
            )

        return kb

    def read_line(self, prompt: str) -> str:
        try:
            return self._session.prompt(prompt)
        except LineInterrupt:
            print(self._interrupt_prompt, file=self._output or sys.stdout)
            raise
        except EOFError:
            print(self._eof_prompt, file=self._output or sys.stdout)
            raise


class StreamReader:
    """Reads lines from a plain text stream (pipes, files, tests)."""

    def __init__(
        self,
        stream: TextIO | None = None,
        prompt_stream: TextIO | None = None,
    ) -> None:
        self._stream = stream or sys.stdin
        self._prompt_stream = prompt_stream

    def read_line(self, prompt: str) -> str:
        if self._prompt_stream is not None:
            self._prompt_stream.write(prompt)
            self._prompt_stream.flush()
        try:
            line = self._stream.readline()
        except KeyboardInterrupt:
            raise LineInterrupt() from None
        if line == "":
            raise EOFError
        return line.rstrip("\r\n")


def create_reader(config: ShellConfig, stdin: TextIO | None = None) -> LineReader:
    """Pick the interactive reader for terminals and a stream reader otherwise.

    Raises:
        ReaderInitError: If the line editor can't be set up.
    """
    stdin = stdin or sys.stdin
    if stdin.isatty():
        return PromptToolkitReader(
            history_file=config.history_file,
            interrupt_prompt=config.interrupt_prompt,
            eof_prompt=config.eof_prompt,
        )
    return StreamReader(stdin)
