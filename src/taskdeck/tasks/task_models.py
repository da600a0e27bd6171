# src/taskdeck/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.TODO
        try:
            return cls(raw)
        except ValueError:
            return cls.TODO


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: str

    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        """Serialized shape (camelCase keys, plain strings)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        task_id = raw.get("id")
        title = raw.get("title")
        if not task_id or title is None:
            raise ValueError("task entry requires id and title")

        created_at = str(raw.get("createdAt") or "")
        return cls(
            id=str(task_id),
            title=str(title),
            description=str(raw.get("description") or ""),
            status=TaskStatus.from_raw(raw.get("status")),
            priority=TaskPriority.from_raw(raw.get("priority")),
            due_date=str(raw.get("dueDate") or ""),
            created_at=created_at,
            updated_at=str(raw.get("updatedAt") or created_at),
        )


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """Everything the caller supplies when creating a task."""

    title: str
    description: str
    due_date: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    """Partial update: fields left as None are not touched."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: str | None = None

    def changes(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    in_progress: int
    todo: int
