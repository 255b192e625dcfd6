"""The interactive loop and its collaborators."""

from simplecli.shell.loop import Shell, ShellState
from simplecli.shell.reader import (
    LineInterrupt,
    LineReader,
    PromptToolkitReader,
    StreamReader,
    create_reader,
)
from simplecli.shell.scratch import scratch_file

__all__ = [
    "LineInterrupt",
    "LineReader",
    "PromptToolkitReader",
    "Shell",
    "ShellState",
    "StreamReader",
    "create_reader",
    "scratch_file",
]
