# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires storage, repository and the list view into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import utc_now
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_repository import TaskRepository
from ..tasks.task_storage import FileKeyValueStore, TaskStorage
from ..tasks.task_view import SortDirection, SortField, SortState, TaskTableView

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, clock: Clock = utc_now) -> AppState:
    """
    Create AppState from the provided settings and load the task collection.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    quota = settings.storage_quota_bytes if settings.storage_quota_bytes > 0 else None
    store = FileKeyValueStore(settings.data_dir, max_bytes=quota)
    storage = TaskStorage(store, key=settings.storage_key, clock=clock)

    repository = TaskRepository(storage, clock=clock)
    repository.initialize()

    table = TaskTableView(
        page_size=settings.page_size,
        sort=SortState(
            field=SortField(settings.default_sort_field),
            direction=SortDirection(settings.default_sort_direction),
        ),
    )

    logger.debug("State ready data_dir=%s key=%s", settings.data_dir, settings.storage_key)
    return AppState(settings=settings, repository=repository, table=table, clock=clock)
