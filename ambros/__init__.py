"""Keep a local database of shell commands with names, tags and history."""

__version__ = "3.0.0"