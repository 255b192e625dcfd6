"""Script command discovery and invocation.

Usage:
    from simplecli.commands import CommandRegistry

    registry = CommandRegistry.from_environment(env, config.commands)
    command = registry.resolve("cd")
    command.invoke(["/tmp"])
"""

from simplecli.commands.base import Command, Signature
from simplecli.commands.registry import CommandRegistry, clean_help

__all__ = [
    "Command",
    "CommandRegistry",
    "Signature",
    "clean_help",
]
