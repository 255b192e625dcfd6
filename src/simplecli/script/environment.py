"""Loading a script and owning its global namespace.

The namespace the script runs in is the shell's variable store: script
functions read and write it through ``global`` statements, and the host
reads and writes it through the primitives. It is created once per run,
seeded by the script's top-level statements, overridden once by
command-line flags and never has entries removed.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from simplecli.exceptions import ScriptLoadError, VariableTypeError
from simplecli.script.values import Scalar, is_number, is_scalar, parse_number
from simplecli.utils.logging import get_logger

logger = get_logger(__name__)


class ScriptEnvironment:
    """A script file and the namespace it executes in.

    Example:
        env = ScriptEnvironment("example.py")
        env.install({"cli_variable": primitives.get_or_set_variable})
        env.load()
        env.get("myvar")
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.namespace: dict[str, Any] = {"__name__": "__simplecli__"}
        self.loaded = False

    def install(self, bindings: Mapping[str, Any]) -> None:
        """Make host callables visible to the script as globals."""
        self.namespace.update(bindings)

    def load(self) -> None:
        """Read and execute the script file.

        Raises:
            ScriptLoadError: If the file can't be read or the script fails.
        """
        if self.path is None:
            raise ScriptLoadError("No script path given")
        try:
            source = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ScriptLoadError(f"Cannot read script {self.path}: {e}") from e
        self.namespace["__file__"] = str(self.path)
        self.load_source(source, str(self.path))

    def load_source(self, source: str, filename: str = "<script>") -> None:
        """Execute script source in the namespace.

        Raises:
            ScriptLoadError: If the source doesn't compile or raises.
        """
        try:
            code = compile(source, filename, "exec")
        except SyntaxError as e:
            raise ScriptLoadError(f"{filename}:{e.lineno}: {e.msg}") from e
        try:
            exec(code, self.namespace)
        except (Exception, SystemExit) as e:
            raise ScriptLoadError(f"{filename}: {type(e).__name__}: {e}") from e
        self.loaded = True
        logger.debug("Loaded script %s (%d globals)", filename, len(self.namespace))

    def get(self, name: str, default: Any = None) -> Any:
        return self.namespace.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self.namespace[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self.namespace

    def items(self) -> Iterator[tuple[str, Any]]:
        """Iterate over public globals (names not starting with ``_``)."""
        for name, value in list(self.namespace.items()):
            if not name.startswith("_"):
                yield name, value

    def declared_scalars(self, help_prefix: str = "help_") -> dict[str, Scalar]:
        """Return the string, number and boolean globals that can be set as flags.

        Help text globals are excluded even though they are strings.
        """
        return {
            name: value
            for name, value in self.items()
            if is_scalar(value) and not name.startswith(help_prefix)
        }

    def apply_overrides(self, values: Mapping[str, Any]) -> None:
        """Override declared variables once, checking each against its type.

        Raises:
            VariableTypeError: If a name is undeclared or a value has the wrong type.
        """
        for name, value in values.items():
            self.namespace[name] = self._coerce(name, value)
            logger.debug("Override %s=%r", name, self.namespace[name])

    def _coerce(self, name: str, value: Any) -> Scalar:
        current = self.namespace.get(name)
        if not is_scalar(current):
            raise VariableTypeError(f"{name} is not a declared variable")
        if isinstance(current, bool):
            if not isinstance(value, bool):
                raise VariableTypeError(f"{name} must be a boolean")
            return value
        if is_number(current):
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise VariableTypeError(f"{name} must be a number")
            try:
                return parse_number(str(value), current)
            except ValueError as e:
                raise VariableTypeError(f"{name} must be a number") from e
        if not isinstance(value, str):
            raise VariableTypeError(f"{name} must be a string")
        return value
