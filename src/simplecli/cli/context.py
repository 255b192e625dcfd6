"""Factory that wires a script, its flags and the configuration into a Shell."""

from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from simplecli.cli.flags import parse_flags
from simplecli.commands.registry import CommandRegistry
from simplecli.config import get_config
from simplecli.config.schema import SimpleCLIConfig
from simplecli.exceptions import FlagError, VariableTypeError
from simplecli.output import get_formatter
from simplecli.output.base import OutputFormatter
from simplecli.primitives import Primitives
from simplecli.script.environment import ScriptEnvironment
from simplecli.shell.loop import Shell
from simplecli.shell.reader import LineReader, create_reader


def load_environment(
    script: Path,
    formatter: OutputFormatter,
    config: SimpleCLIConfig,
) -> ScriptEnvironment:
    """Install the primitives and run the script.

    Raises:
        ScriptLoadError: If the script can't be loaded.
    """
    env = ScriptEnvironment(script)
    primitives = Primitives(env, formatter, config)
    env.install(primitives.bindings())
    env.load()
    return env


def apply_flags(
    env: ScriptEnvironment,
    flag_args: Sequence[str],
    config: SimpleCLIConfig,
    prog_name: str = "simplecli",
) -> None:
    """Override script variables from command-line flags.

    Raises:
        FlagError: If the flags don't parse or don't fit the variable types.
    """
    variables = env.declared_scalars(config.commands.help_prefix)
    overrides = parse_flags(variables, flag_args, prog_name)
    try:
        env.apply_overrides(overrides)
    except VariableTypeError as e:
        raise FlagError(str(e)) from e


def create_shell(
    script: Path,
    *,
    flag_args: Sequence[str] = (),
    config: SimpleCLIConfig | None = None,
    formatter: OutputFormatter | None = None,
    reader: LineReader | None = None,
    stdin: TextIO | None = None,
) -> Shell:
    """Create a fully wired Shell for a script.

    Args:
        script: Path to the script defining the commands.
        flag_args: Command-line arguments after the script path.
        config: Configuration to use. If None, uses global config.
        formatter: Output formatter. Defaults to the configured format.
        reader: Line reader. Defaults to one suited to ``stdin``.
        stdin: Input stream used to pick the default reader.

    Returns:
        A Shell ready to ``run()``.

    Raises:
        StartupError: If the script, the flags or the reader fail.

    Example:
        shell = create_shell(Path("example.py"), flag_args=["--myvar", "x"])
        raise SystemExit(shell.run())
    """
    if config is None:
        config = get_config()
    if formatter is None:
        formatter = get_formatter(config.output.format)

    env = load_environment(script, formatter, config)
    apply_flags(env, flag_args, config, prog_name=f"simplecli {script}")
    registry = CommandRegistry.from_environment(env, config.commands)
    if reader is None:
        reader = create_reader(config.shell, stdin)

    return Shell(env, registry, reader, formatter, config)
