# src/taskdeck/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_repository import TaskRepository
from ..tasks.task_view import TaskTableView
from .clock import utc_now
from .ports import Clock


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: Any

    repository: TaskRepository
    table: TaskTableView
    clock: Clock = field(default=utc_now)
