# src/taskdeck/tasks/task_repository.py

from __future__ import annotations

import dataclasses
import logging

from ..core.clock import format_timestamp, utc_now
from ..core.ports import Clock, TaskStoragePort
from .task_models import Task, TaskDraft, TaskStats, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)

# Attempts at drawing an id that is not already in the collection.
_MAX_ID_ATTEMPTS = 8


class TaskRepository:
    """
    In-memory source of truth for the task collection.

    Every mutation rewrites the whole collection through the storage port
    (one save per call, no batching). Storage failures are absorbed by the
    storage layer, so memory stays authoritative for the session.

    Several processes sharing one data dir are not coordinated: the last
    full-collection save wins.
    """

    def __init__(self, storage: TaskStoragePort, *, clock: Clock = utc_now) -> None:
        self._storage = storage
        self._clock = clock
        self._tasks: list[Task] = []
        self._initialized = False

    def initialize(self) -> None:
        """Populate memory from storage. Only the first call has an effect."""
        if self._initialized:
            return
        self._initialized = True
        self._tasks = list(self._storage.load())
        logger.info("TaskRepository ready total=%s", len(self._tasks))

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def _persist(self) -> None:
        self._storage.save(self._tasks)

    def _new_id(self) -> str:
        taken = {t.id for t in self._tasks}
        task_id = self._storage.generate_id()
        for _ in range(_MAX_ID_ATTEMPTS):
            if task_id not in taken:
                return task_id
            logger.warning("Generated id collides with an existing task: %s", task_id)
            task_id = self._storage.generate_id()
        raise RuntimeError(f"could not generate a unique task id after {_MAX_ID_ATTEMPTS} attempts")

    def create(self, draft: TaskDraft) -> Task:
        now = format_timestamp(self._clock())
        task = Task(
            id=self._new_id(),
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            due_date=draft.due_date,
            created_at=now,
            updated_at=now,
        )
        self._tasks = [*self._tasks, task]
        self._persist()
        logger.debug("Task created id=%s status=%s priority=%s", task.id, task.status, task.priority)
        return task

    def update(self, task_id: str, changes: TaskUpdate) -> None:
        updated: list[Task] = []
        for task in self._tasks:
            if task.id == task_id:
                task = dataclasses.replace(
                    task,
                    **changes.changes(),
                    updated_at=format_timestamp(self._clock()),
                )
                logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes.changes()))
            updated.append(task)
        self._tasks = updated
        self._persist()

    def delete(self, task_id: str) -> None:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if len(self._tasks) != before:
            logger.debug("Task deleted id=%s", task_id)
        self._persist()

    def get_by_id(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def set_status(self, task_id: str, status: TaskStatus) -> None:
        self.update(task_id, TaskUpdate(status=status))

    def toggle_completed(self, task_id: str) -> TaskStatus | None:
        """
        completed -> todo, anything else -> completed.
        Returns the new status, or None for an unknown id.
        """
        task = self.get_by_id(task_id)
        if task is None:
            return None
        new_status = TaskStatus.TODO if task.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED
        self.set_status(task_id, new_status)
        return new_status

    def stats(self) -> TaskStats:
        return TaskStats(
            total=len(self._tasks),
            completed=sum(1 for t in self._tasks if t.status == TaskStatus.COMPLETED),
            in_progress=sum(1 for t in self._tasks if t.status == TaskStatus.IN_PROGRESS),
            todo=sum(1 for t in self._tasks if t.status == TaskStatus.TODO),
        )
