# tests/conftest.py

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdeck.core.state import AppState
from taskdeck.tasks.task_repository import TaskRepository
from taskdeck.tasks.task_view import TaskTableView

from .fakes import FakeClock, FakeKeyValueStore, RecordingStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskdeck",
        log_level="INFO",
        data_dir=tmp_path / "data",
        storage_key="task-management-tasks",
        storage_quota_bytes=0,
        page_size=10,
        default_sort_field="createdAt",
        default_sort_direction="desc",
        color=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    # Every reading moves one second forward, so consecutive stamps differ.
    return FakeClock(step=timedelta(seconds=1))


@pytest.fixture()
def kv_store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def storage(kv_store: FakeKeyValueStore, clock: FakeClock) -> RecordingStorage:
    return RecordingStorage(kv_store, clock)


@pytest.fixture()
def repository(storage: RecordingStorage, clock: FakeClock) -> TaskRepository:
    repo = TaskRepository(storage, clock=clock)
    repo.initialize()
    return repo


@pytest.fixture()
def state(settings: SimpleNamespace, repository: TaskRepository, clock: FakeClock) -> AppState:
    """AppState wired with the fake backend and clock (no files touched)."""
    return AppState(
        settings=settings,
        repository=repository,
        table=TaskTableView(page_size=settings.page_size),
        clock=clock,
    )
