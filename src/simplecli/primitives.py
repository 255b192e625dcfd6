"""Stateful operations exposed to scripts as global functions.

Every primitive prints ``name=value`` after acting, so a command that
only wraps a primitive doubles as a getter when called without a value:

    myvar = "default"

    def do_myvar(args):
        cli_variable("myvar", args[0] if args else "")
"""

import inspect
import os
import shlex
import subprocess
from collections.abc import Callable
from typing import Any

from simplecli.config.schema import SimpleCLIConfig
from simplecli.exceptions import EditError, TemplateError, VariableTypeError
from simplecli.output.base import OutputFormatter
from simplecli.script.environment import ScriptEnvironment
from simplecli.script.values import display, is_number, parse_number
from simplecli.templates.renderer import TemplateRenderer
from simplecli.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_path(old_value: str | None, new_value: str) -> str:
    """Resolve ``new_value`` against a POSIX-style current directory.

    Absolute values replace the old one verbatim. Relative values are
    applied segment by segment (``.`` is ignored, ``..`` drops the last
    segment and never goes above ``/``) and the result always ends in
    exactly one ``/``.
    """
    if new_value.startswith("/"):
        return new_value

    old_value = old_value or "/"
    cwd = old_value.removeprefix("/").split("/")
    if cwd and cwd[-1] == "":
        cwd.pop()

    for part in new_value.split("/"):
        if part == ".":
            continue
        if part == "..":
            if cwd:
                cwd.pop()
            continue
        cwd.append(part)

    return ("/" + "/".join(cwd)).rstrip("/") + "/"


class Primitives:
    """The host side of ``cli_variable``, ``cli_envvar``, ``cli_toggle``,
    ``cli_cd``, ``cli_edit`` and ``t``.

    Attributes:
        env: The script environment whose globals are read and written.
        formatter: Where confirmation lines and errors are printed.
    """

    def __init__(
        self,
        env: ScriptEnvironment,
        formatter: OutputFormatter,
        config: SimpleCLIConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.env = env
        self.formatter = formatter
        self.config = config or SimpleCLIConfig()
        self.renderer = renderer or TemplateRenderer(env)

    def bindings(self) -> dict[str, Callable[..., Any]]:
        """Names under which the primitives are installed in the script."""
        return {
            "cli_variable": self.get_or_set_variable,
            "cli_envvar": self.get_or_set_envvar,
            "cli_toggle": self.toggle,
            "cli_cd": self.normalize_path_variable,
            "cli_edit": self.prompt_for_edit,
            "t": self.render,
        }

    def _report(self, name: str, value: Any) -> None:
        self.formatter.line(f"{name}={display(value)}")

    def get_or_set_variable(self, name: str, new_value: str | None = "") -> Any:
        """Set a global if a value is given, then print it.

        Numeric variables only accept numbers; anything else is reported
        and leaves the variable as it was.
        """
        if new_value:
            current = self.env.get(name)
            try:
                self.env.set(name, self._coerce(name, current, str(new_value)))
            except VariableTypeError as e:
                self.formatter.error(str(e))
                return current
        value = self.env.get(name)
        self._report(name, value)
        return value

    @staticmethod
    def _coerce(name: str, current: Any, new_value: str) -> Any:
        if not is_number(current):
            return new_value
        try:
            return parse_number(new_value, current)
        except ValueError:
            raise VariableTypeError(
                f"You must provide a number for numeric variable {name}"
            ) from None

    def get_or_set_envvar(self, name: str, new_value: str | None = "") -> str:
        """Set an environment variable if a value is given, then print it."""
        if new_value:
            os.environ[name] = str(new_value)
        value = os.environ.get(name, "")
        self._report(name, value)
        return value

    def toggle(self, name: str) -> bool:
        """Flip a boolean global; anything that isn't ``True`` counts as false."""
        value = not (self.env.get(name) is True)
        self.env.set(name, value)
        self._report(name, value)
        return value

    def normalize_path_variable(self, name: str, new_value: str | None = "") -> str:
        """Change a directory-like global with ``cd`` semantics, then print it."""
        if new_value:
            current = self.env.get(name)
            old_value = current if isinstance(current, str) else None
            self.env.set(name, normalize_path(old_value, str(new_value)))
        value = self.env.get(name)
        self._report(name, value)
        return value

    def prompt_for_edit(self, path: str) -> bool:
        """Open a file in the user's editor and report whether it was saved.

        Returns:
            True if the file's modification time changed.
        """
        try:
            modified = self._edit(path)
        except EditError as e:
            self.formatter.error(str(e))
            return False
        if not modified:
            self.formatter.line("File was unchanged")
        return modified

    def _edit(self, path: str) -> bool:
        editor_config = self.config.editor
        try:
            before = os.stat(path).st_mtime_ns
        except OSError as e:
            raise EditError(f"Error getting tempfile modtime: {e}") from e

        editor = os.environ.get(editor_config.env_var) or editor_config.default
        argv = shlex.split(editor) + [path]
        logger.debug("Launching editor: %s", argv)
        self.formatter.flush()
        try:
            # The editor's exit status is not an error condition
            subprocess.run(argv, check=False)
        except OSError as e:
            raise EditError(f"Error running editor {argv[0]}: {e}") from e

        try:
            after = os.stat(path).st_mtime_ns
        except OSError as e:
            raise EditError(f"Error getting modtime: {e}") from e
        return after != before

    def render(self, template: str) -> str:
        """Render a template with the calling function's locals in scope.

        Errors are reported and produce empty text so the command goes on.
        """
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        try:
            frame_locals = dict(caller.f_locals) if caller is not None else None
        finally:
            del frame, caller
        try:
            return self.renderer.render(str(template), frame_locals)
        except TemplateError as e:
            self.formatter.error(str(e))
            return ""
