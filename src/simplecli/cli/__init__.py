"""CLI layer for simplecli.

Usage:
    simplecli example.py
    simplecli example.py --myvar value --debug_mode
    simplecli --log-level DEBUG example.py
"""

from simplecli.cli.app import app, main
from simplecli.cli.context import create_shell

__all__ = ["app", "create_shell", "main"]
