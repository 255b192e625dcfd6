"""simplecli - an interactive shell whose commands live in a Python script."""

__version__ = "0.1.0"
