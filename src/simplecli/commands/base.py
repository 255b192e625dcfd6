"""Script-defined commands and how they are called.

A command is a script function named with the command prefix
(``do_`` by default). Its positional parameter count is read once,
when the registry is built, and decides how it is called:

    def do_greet(args): ...              # argument list only
    def do_edit(args, tempfile): ...     # argument list + scratch file path
    def do_ping(): ...                   # extra values are dropped
"""

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class Signature:
    """The parts of a callable's signature that shape a command call."""

    positional_count: int
    accepts_varargs: bool

    @classmethod
    def of(cls, func: Callable[..., Any]) -> "Signature":
        try:
            params = inspect.signature(func).parameters.values()
        except (TypeError, ValueError):
            # Builtins without introspectable signatures take what they're given
            return cls(positional_count=1, accepts_varargs=True)
        positional = [p for p in params if p.kind in _POSITIONAL]
        varargs = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
        return cls(positional_count=len(positional), accepts_varargs=varargs)


@dataclass(frozen=True)
class Command:
    """A command discovered in the script.

    Attributes:
        name: The verb typed at the prompt (prefix stripped).
        func: The script function.
        needs_scratch_file: Whether the function receives a scratch file path.
        signature: Positional parameter shape of ``func``.
        pass_verb: Whether the verb is passed before the arguments.
    """

    name: str
    func: Callable[..., Any]
    needs_scratch_file: bool
    signature: Signature
    pass_verb: bool = False

    @classmethod
    def from_callable(
        cls,
        name: str,
        func: Callable[..., Any],
        pass_verb: bool = False,
    ) -> "Command":
        signature = Signature.of(func)
        leading = 1 if pass_verb else 0
        return cls(
            name=name,
            func=func,
            needs_scratch_file=signature.positional_count - leading == 2,
            signature=signature,
            pass_verb=pass_verb,
        )

    def build_call_args(
        self,
        args: Sequence[str],
        scratch_path: str | None = None,
    ) -> list[Any]:
        """Shape the positional values for one call.

        Values the function has no parameter for are dropped; parameters
        with nothing to bind are passed ``None``.
        """
        values: list[Any] = [list(args)]
        if self.pass_verb:
            values.insert(0, self.name)
        if self.needs_scratch_file:
            values.append(scratch_path)

        count = self.signature.positional_count
        if self.signature.accepts_varargs:
            return values + [None] * (count - len(values))
        values = values[:count]
        return values + [None] * (count - len(values))

    def invoke(self, args: Sequence[str], scratch_path: str | None = None) -> Any:
        """Call the script function with the argument list."""
        return self.func(*self.build_call_args(args, scratch_path))
