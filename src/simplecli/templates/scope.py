"""The merged variable view a template is rendered against."""

import os
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from simplecli.exceptions import TemplateError
from simplecli.script.environment import ScriptEnvironment
from simplecli.script.values import display, flatten, is_scalar, is_script_callable


@dataclass(frozen=True)
class Literal:
    """A tag whose text is known when the scope is built."""

    text: str


@dataclass(frozen=True)
class Deferred:
    """A tag backed by a script function, called each time the tag is substituted."""

    name: str
    func: Callable[[], Any]

    def evaluate(self) -> str:
        """Call the function with no arguments and return its text.

        Raises:
            TemplateError: If the function raises.
        """
        try:
            return display(self.func())
        except Exception as e:
            raise TemplateError(f"Error calling {self.name}: {e}") from e


TagValue = Literal | Deferred


class TemplateScope(Mapping[str, TagValue]):
    """Tag name to value, filled source by source; later sources win on equal keys.

    Built fresh for every render and discarded afterwards.
    """

    def __init__(self) -> None:
        self._tags: dict[str, TagValue] = {}

    def __getitem__(self, name: str) -> TagValue:
        return self._tags[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def add_environ(self, environ: Mapping[str, str]) -> None:
        for name, value in environ.items():
            self._tags[name] = Literal(value)

    def add_globals(self, env: ScriptEnvironment) -> None:
        """Add script scalars, functions and flattened mappings/sequences."""
        for name, value in env.items():
            if is_scalar(value):
                self._tags[name] = Literal(display(value))
            elif is_script_callable(value):
                self._tags[name] = Deferred(name, value)
            else:
                self._add_flattened(name, value)

    def add_locals(self, frame_locals: Mapping[str, Any]) -> None:
        """Add the caller's local variables; anything not flattened shows as text."""
        for name, value in frame_locals.items():
            if name.startswith("__"):
                continue
            if is_script_callable(value):
                self._tags[name] = Deferred(name, value)
            elif not self._add_flattened(name, value):
                self._tags[name] = Literal(display(value))

    def _add_flattened(self, name: str, value: Any) -> bool:
        entries = flatten(name, value)
        for key, item in entries.items():
            self._tags[key] = Literal(display(item))
        return bool(entries) or isinstance(value, (Mapping, list, tuple))

    def lookup(self, name: str) -> str:
        """Return the text for a tag name matched exactly, or empty text.

        Function tags are called here, so their results are inserted
        as plain text and never parsed as templates.

        Raises:
            TemplateError: If a function tag raises.
        """
        tag = self._tags.get(name)
        if tag is None:
            return ""
        if isinstance(tag, Literal):
            return tag.text
        return tag.evaluate()


def build_scope(
    env: ScriptEnvironment,
    frame_locals: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> TemplateScope:
    """Build the scope for one render.

    Precedence, lowest first: environment variables, script globals,
    the caller's locals.
    """
    scope = TemplateScope()
    scope.add_environ(os.environ if environ is None else environ)
    scope.add_globals(env)
    if frame_locals is not None:
        scope.add_locals(frame_locals)
    return scope
