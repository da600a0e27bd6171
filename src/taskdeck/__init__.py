"""taskdeck: a local task list manager."""

__version__ = "0.1.0"
