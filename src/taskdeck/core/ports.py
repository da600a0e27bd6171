# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the storage backend and the time source swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, Protocol

Clock = Callable[[], datetime]
# Returns the current instant as an aware UTC datetime.


class KeyValueStore(Protocol):
    """
    String blob storage addressed by key (the localStorage shape).

    set_item may raise (quota, I/O); callers decide how to absorb it.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...


class TaskStoragePort(Protocol):
    """Whole-collection persistence used by the task repository."""

    def load(self) -> list[Any]: ...
    def save(self, tasks: Sequence[Any]) -> bool: ...
    def generate_id(self) -> str: ...
