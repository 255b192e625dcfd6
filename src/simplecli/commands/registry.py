"""Command registry built from a loaded script."""

from typing import Any

from simplecli.commands.base import Command
from simplecli.config.schema import CommandsConfig
from simplecli.exceptions import NoHelpError, UnknownCommandError
from simplecli.script.environment import ScriptEnvironment
from simplecli.script.values import is_script_callable
from simplecli.utils.logging import get_logger

logger = get_logger(__name__)


def clean_help(text: str) -> str:
    """Drop blank lines around help text and strip every line."""
    lines = [line.strip() for line in text.strip().splitlines()]
    return "\n".join(lines)


class CommandRegistry:
    """Lookup table of the script's commands and their help text.

    The table is a snapshot taken once after the script has loaded.
    Commands without help and help without a command are both allowed.

    Usage:
        registry = CommandRegistry.from_environment(env)
        registry.list_commands()      # ["cd", "edit", "myvar"]
        cmd = registry.resolve("cd")
        print(registry.help_for("cd"))
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._help: dict[str, Any] = {}

    @classmethod
    def from_environment(
        cls,
        env: ScriptEnvironment,
        config: CommandsConfig | None = None,
    ) -> "CommandRegistry":
        """Scan the script's globals for commands and help entries.

        Args:
            env: A loaded script environment.
            config: Prefixes and calling convention. Defaults apply if None.

        Returns:
            A populated registry.
        """
        config = config or CommandsConfig()
        registry = cls()
        for name, value in env.items():
            if name.startswith(config.command_prefix) and is_script_callable(value):
                verb = name[len(config.command_prefix) :]
                if verb:
                    registry.register(
                        Command.from_callable(verb, value, pass_verb=config.pass_verb)
                    )
            elif name.startswith(config.help_prefix):
                verb = name[len(config.help_prefix) :]
                if verb:
                    registry.register_help(verb, value)

        logger.debug(
            "Registered %d commands, %d help entries",
            len(registry._commands),
            len(registry._help),
        )
        return registry

    def register(self, command: Command) -> None:
        self._commands[command.name] = command

    def register_help(self, verb: str, help_text: Any) -> None:
        """Register help as a string or a zero-argument callable returning one."""
        self._help[verb] = help_text

    def list_commands(self) -> list[str]:
        """List command names in ascending order."""
        return sorted(self._commands)

    def is_registered(self, verb: str) -> bool:
        return verb in self._commands

    def resolve(self, verb: str) -> Command:
        """Get the command for a verb.

        Raises:
            UnknownCommandError: If the script defines no such command.
        """
        try:
            return self._commands[verb]
        except KeyError:
            raise UnknownCommandError(verb) from None

    def help_for(self, verb: str) -> str:
        """Get the cleaned help text for a verb.

        Raises:
            NoHelpError: If the script defines no help text for it, or the
                help value is not a string.
        """
        if verb not in self._help:
            raise NoHelpError(verb)
        help_text = self._help[verb]
        if is_script_callable(help_text):
            help_text = help_text()
        if not isinstance(help_text, str):
            raise NoHelpError(verb)
        return clean_help(help_text)

    def __len__(self) -> int:
        return len(self._commands)
