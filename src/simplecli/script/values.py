"""Conversions between script values and the text the shell shows."""

import math
from collections.abc import Mapping
from typing import Any

Scalar = str | int | float | bool


def is_scalar(value: Any) -> bool:
    """Return True for the value types the shell treats as variables."""
    return isinstance(value, (str, int, float, bool))


def is_number(value: Any) -> bool:
    """Return True for int/float values (booleans are not numbers here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_script_callable(value: Any) -> bool:
    """Return True for functions and other callables, excluding classes."""
    return callable(value) and not isinstance(value, type)


def display(value: Any) -> str:
    """Render a value the way the shell prints it.

    Booleans print as ``true``/``false``, integral floats lose their
    ``.0`` and ``None`` prints as empty text.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(text: str, current: Any = None) -> int | float:
    """Parse text as a number for a numeric variable.

    An ``int`` variable stays an ``int`` when the parsed value is
    integral; everything else becomes a ``float``.

    Raises:
        ValueError: If the text is not a number.
    """
    number = float(text.strip())
    if isinstance(current, int) and not isinstance(current, bool):
        if number.is_integer():
            return int(number)
    return number


def flatten(name: str, value: Any) -> dict[str, Any]:
    """Flatten a mapping or sequence into ``name[key]`` entries.

    Returns an empty dict for anything else.
    """
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        return {}
    return {f"{name}[{display(key)}]": item for key, item in items}
