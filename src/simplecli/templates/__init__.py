"""Template rendering against script state."""

from simplecli.templates.renderer import TemplateRenderer, check_delimiters
from simplecli.templates.scope import Deferred, Literal, TemplateScope, build_scope

__all__ = [
    "Deferred",
    "Literal",
    "TemplateRenderer",
    "TemplateScope",
    "build_scope",
    "check_delimiters",
]
