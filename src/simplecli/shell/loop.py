"""The read-dispatch loop."""

import logging
import shlex
from collections.abc import Sequence
from enum import Enum

from simplecli.commands.base import Command
from simplecli.commands.registry import CommandRegistry
from simplecli.config.schema import SimpleCLIConfig
from simplecli.exceptions import (
    InvocationError,
    NoHelpError,
    TokenizeError,
    UnknownCommandError,
)
from simplecli.output.base import OutputFormatter
from simplecli.script.environment import ScriptEnvironment
from simplecli.script.values import display, is_script_callable
from simplecli.shell.reader import LineInterrupt, LineReader
from simplecli.shell.scratch import scratch_file
from simplecli.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

HELP_VERB = "help"
BANNER_FUNCTION = "banner"
PROMPT_FUNCTION = "prompt"


class ShellState(str, Enum):
    """Where the loop is in handling one line."""

    STARTING = "starting"
    PROMPTING = "prompting"
    READING = "reading"
    DISPATCHING = "dispatching"
    STOPPED = "stopped"


class Shell:
    """Reads lines and runs the script command each one names.

    Nothing a command does can stop the loop; only an interrupt at an
    empty prompt or end of input does.

    Example:
        shell = Shell(env, registry, StreamReader(sys.stdin), formatter)
        raise SystemExit(shell.run())
    """

    def __init__(
        self,
        env: ScriptEnvironment,
        registry: CommandRegistry,
        reader: LineReader,
        formatter: OutputFormatter,
        config: SimpleCLIConfig | None = None,
    ) -> None:
        self.env = env
        self.registry = registry
        self.reader = reader
        self.formatter = formatter
        self.config = config or SimpleCLIConfig()
        self.prompt = self.config.shell.prompt
        self.state = ShellState.STARTING

    def run(self) -> int:
        """Run until end of input.

        Returns:
            The process exit status.
        """
        self.state = ShellState.STARTING
        self.show_banner()
        while True:
            self.state = ShellState.PROMPTING
            self.update_prompt()
            self.state = ShellState.READING
            try:
                line = self.reader.read_line(self.prompt)
            except LineInterrupt as e:
                if not e.buffer:
                    break
                continue
            except EOFError:
                break
            self.state = ShellState.DISPATCHING
            self.dispatch(line)
        self.state = ShellState.STOPPED
        logger.debug("Shell stopped")
        return 0

    def _call_script_function(self, name: str) -> str | None:
        func = self.env.get(name)
        if not is_script_callable(func):
            return None
        try:
            return display(func())
        except (Exception, SystemExit) as e:
            logger.debug("%s() failed", name, exc_info=True)
            self.formatter.error(f"Error in {name}(): {type(e).__name__}: {e}")
            return None

    def show_banner(self) -> None:
        """Print the text returned by the script's ``banner()``, if any."""
        text = self._call_script_function(BANNER_FUNCTION)
        if text is not None:
            self.formatter.line(text)

    def update_prompt(self) -> None:
        """Take the prompt from the script's ``prompt()``, keeping the last one on failure."""
        text = self._call_script_function(PROMPT_FUNCTION)
        if text is not None:
            self.prompt = text

    def dispatch(self, line: str) -> None:
        """Handle one input line."""
        line = line.strip()
        if not line:
            return

        try:
            parts = self.tokenize(line)
        except TokenizeError as e:
            self.formatter.error(str(e))
            return
        if not parts:
            return

        verb, args = parts[0], parts[1:]
        if verb == HELP_VERB:
            self.show_help(args)
            return

        try:
            command = self.registry.resolve(verb)
        except UnknownCommandError as e:
            self.formatter.error(str(e))
            return

        self.run_command(command, args)

    @staticmethod
    def tokenize(line: str) -> list[str]:
        """Split a line into words with POSIX shell quoting.

        Raises:
            TokenizeError: On unbalanced quotes or a trailing escape.
        """
        try:
            return shlex.split(line)
        except ValueError as e:
            raise TokenizeError(f"Error splitting up command string: {e}") from e

    def show_help(self, args: Sequence[str]) -> None:
        """List commands, or print one command's help text."""
        if not args:
            self.formatter.print_list(
                self.registry.list_commands(),
                title=self.config.shell.help_header,
            )
            return

        try:
            text = self.registry.help_for(args[0])
        except NoHelpError as e:
            self.formatter.error(str(e))
            return
        except Exception as e:
            name = f"{self.config.commands.help_prefix}{args[0]}"
            self.formatter.error(str(InvocationError(f"{name}: {e}")))
            return
        self.formatter.line(text)

    def run_command(self, command: Command, args: Sequence[str]) -> None:
        """Invoke a command, wrapping it in a scratch file when it takes one."""
        log_with_context(
            logger,
            logging.DEBUG,
            "Dispatching command",
            verb=command.name,
            args=list(args),
            scratch=command.needs_scratch_file,
        )
        if not command.needs_scratch_file:
            self._invoke(command, args)
            return

        try:
            with scratch_file(self.config.commands.scratch_prefix) as path:
                self._invoke(command, args, path)
        except OSError as e:
            self.formatter.error(f"Error creating scratch file: {e}")

    def _invoke(
        self,
        command: Command,
        args: Sequence[str],
        scratch_path: str | None = None,
    ) -> None:
        try:
            command.invoke(args, scratch_path)
        except KeyboardInterrupt:
            self.formatter.error(f"{command.name}: interrupted")
        except (Exception, SystemExit) as e:
            logger.debug("Command %s failed", command.name, exc_info=True)
            error = InvocationError(f"{command.name}: {type(e).__name__}: {e}")
            self.formatter.error(str(error))
