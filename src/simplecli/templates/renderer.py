"""Rendering ``{{tag}}`` templates against script state."""

from collections.abc import Mapping
from typing import Any

from pystache.context import ContextStack
from pystache.renderengine import RenderEngine

from simplecli.exceptions import TemplateError
from simplecli.script.environment import ScriptEnvironment
from simplecli.templates.scope import TemplateScope, build_scope
from simplecli.utils.logging import get_logger

logger = get_logger(__name__)

OPEN_TAG = "{{"
CLOSE_TAG = "}}"


def check_delimiters(template: str) -> None:
    """Make sure every opening marker has a closing marker after it.

    Raises:
        TemplateError: On an unterminated tag.
    """
    pos = 0
    while True:
        start = template.find(OPEN_TAG, pos)
        if start == -1:
            return
        end = template.find(CLOSE_TAG, start + len(OPEN_TAG))
        if end == -1:
            raise TemplateError(
                f"Cannot find end tag {CLOSE_TAG!r} for tag at offset {start}"
            )
        pos = end + len(CLOSE_TAG)


def make_engine(scope: TemplateScope) -> RenderEngine:
    """Build a Mustache engine that resolves tags against one scope.

    Tag names are looked up verbatim, so ``{{hosts[example.com]}}`` is one
    key rather than a dotted path. Values come back as finished text and
    are neither escaped nor rendered again.
    """

    def resolve_context(stack: ContextStack, name: str) -> Any:
        if name == ".":
            return stack.top()
        return scope.lookup(name)

    return RenderEngine(
        literal=str,
        escape=str,
        resolve_context=resolve_context,
        resolve_partial=lambda name: "",
        to_str=str,
    )


class TemplateRenderer:
    """Substitutes tags with environment variables, script globals and caller locals.

    Unknown tags render as empty text. Tables are reached as
    ``{{name[key]}}`` and sequences as ``{{name[0]}}``. Function tags are
    called with no arguments each time they appear.
    """

    def __init__(
        self,
        env: ScriptEnvironment,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._env = env
        self._environ = environ

    def build_scope(self, frame_locals: Mapping[str, Any] | None = None) -> TemplateScope:
        return build_scope(self._env, frame_locals, self._environ)

    def render(
        self,
        template: str,
        frame_locals: Mapping[str, Any] | None = None,
    ) -> str:
        """Render a template.

        Args:
            template: Text containing ``{{tag}}`` markers.
            frame_locals: Local variables of the calling frame, if any.

        Returns:
            The fully substituted text.

        Raises:
            TemplateError: If the template is malformed or a function tag fails.
        """
        check_delimiters(template)
        scope = self.build_scope(frame_locals)
        logger.debug("Rendering template with %d tags in scope", len(scope))
        try:
            return make_engine(scope).render(template, ContextStack(scope))
        except TemplateError:
            raise
        except Exception as e:
            raise TemplateError(f"Error rendering template: {e}") from e
