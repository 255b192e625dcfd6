"""Main CLI application for simplecli."""

from pathlib import Path

import typer
from rich.console import Console

from simplecli import __version__
from simplecli.cli.context import create_shell
from simplecli.config.loader import load_config, set_config
from simplecli.exceptions import StartupError
from simplecli.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="simplecli",
    help="Interactive shell whose commands are defined in a Python script",
    add_completion=False,
)

err_console = Console(stderr=True)
logger = get_logger(__name__)

USAGE = "Usage: simplecli SCRIPT [OPTIONS]"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"simplecli version {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "allow_extra_args": True,
        "allow_interspersed_args": False,
    }
)
def run(
    ctx: typer.Context,
    script: Path | None = typer.Argument(
        None,
        help="Python script defining the commands.",
        show_default=False,
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file to use instead of the default.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run SCRIPT as an interactive shell.

    Options after SCRIPT set the script's variables, e.g.
    ``simplecli example.py --myvar value``.
    """
    if script is None:
        err_console.print(USAGE, markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    try:
        config = load_config(config_path)
        if log_level:
            config.logging.level = log_level.upper()
        setup_logging(
            level=config.logging.level,
            log_file=config.logging.file,
            json_format=config.logging.json_format,
        )
        set_config(config)
        logger.debug("Starting shell for %s", script)

        shell = create_shell(script, flag_args=ctx.args, config=config)
    except StartupError as e:
        err_console.print(
            str(e), style="red", markup=False, highlight=False, soft_wrap=True
        )
        raise typer.Exit(e.exit_code) from None

    raise typer.Exit(shell.run())


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
