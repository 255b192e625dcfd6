"""The script environment: the Python namespace that defines the shell."""

from simplecli.script.environment import ScriptEnvironment
from simplecli.script.values import display

__all__ = ["ScriptEnvironment", "display"]
