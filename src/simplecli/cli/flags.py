"""Command-line flags derived from the script's variables.

Every string, number and boolean global the script declares becomes a
flag that overrides its default before the shell starts:

    myvar = "default"     ->  --myvar TEXT
    retries = 3           ->  --retries FLOAT
    debug_mode = False    ->  --debug_mode / --no-debug_mode
"""

from collections.abc import Mapping, Sequence
from typing import Any

import click
from click.core import ParameterSource

from simplecli.exceptions import FlagError
from simplecli.script.values import Scalar, is_number


def build_flag_command(variables: Mapping[str, Scalar], prog_name: str) -> click.Command:
    """Build a Click command with one option per variable."""
    params: list[click.Parameter] = []
    for name, value in variables.items():
        if isinstance(value, bool):
            params.append(
                click.Option(
                    [f"--{name}/--no-{name}", name],
                    default=value,
                    help=f"Set {name}",
                )
            )
        elif is_number(value):
            params.append(
                click.Option(
                    [f"--{name}", name],
                    type=click.FLOAT,
                    default=value,
                    show_default=True,
                    help=f"Set {name}",
                )
            )
        else:
            params.append(
                click.Option(
                    [f"--{name}", name],
                    type=click.STRING,
                    default=value,
                    show_default=True,
                    help=f"Set {name}",
                )
            )
    return click.Command(prog_name, params=params, help="Script variables.")


def parse_flags(
    variables: Mapping[str, Scalar],
    args: Sequence[str],
    prog_name: str = "simplecli",
) -> dict[str, Any]:
    """Parse script flags and return only the values given on the command line.

    Raises:
        FlagError: On unknown flags or values of the wrong type.
        click.exceptions.Exit: After printing ``--help``.
    """
    command = build_flag_command(variables, prog_name)
    try:
        ctx = command.make_context(prog_name, list(args))
    except click.exceptions.Exit:
        raise
    except click.ClickException as e:
        raise FlagError(e.format_message()) from e

    return {
        name: value
        for name, value in ctx.params.items()
        if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE
    }
