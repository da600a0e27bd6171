# src/taskdeck/tasks/task_view.py

from __future__ import annotations

"""
Task list view.

Pure projection from (collection, filters, sort, page) to the rows to render:
- filter: text (title OR description), then status, then priority; all must match
- sort: stable, by one field, ascending or descending
- paginate: fixed page size; pages outside [1, total_pages] are empty

TaskTableView keeps the current filter/sort/page state for a front-end and
applies the page reset rule (any filter or sort change goes back to page 1).
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from .task_models import Task, TaskPriority, TaskStatus
from ..core.clock import parse_instant

PAGE_SIZE = 10

ALL = "all"


class SortField(StrEnum):
    TITLE = "title"
    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    STATUS = "status"
    CREATED_AT = "createdAt"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


_DATE_FIELDS = {SortField.DUE_DATE, SortField.CREATED_AT}


@dataclass(frozen=True, slots=True)
class TaskFilters:
    search: str = ""
    status: TaskStatus | None = None
    priority: TaskPriority | None = None


@dataclass(frozen=True, slots=True)
class SortState:
    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    def toggle(self, field: SortField) -> SortState:
        """Same field flips the direction; a new field starts ascending."""
        if field == self.field:
            return SortState(field=self.field, direction=self.direction.flipped())
        return SortState(field=field, direction=SortDirection.ASC)


@dataclass(frozen=True, slots=True)
class TaskPage:
    rows: tuple[Task, ...]
    page: int
    page_size: int
    total_filtered: int
    total_pages: int
    total_tasks: int

    @property
    def summary(self) -> str:
        text = f"Showing {len(self.rows)} of {self.total_filtered} tasks"
        if self.total_filtered != self.total_tasks:
            text += f" (filtered from {self.total_tasks} total)"
        return text

    @property
    def empty_message(self) -> str | None:
        if self.rows:
            return None
        return "No tasks found" if self.total_filtered == 0 else "No tasks on this page"


def parse_status_filter(raw: str | None) -> TaskStatus | None:
    """'all' / empty -> no filter. Raises ValueError for unknown values."""
    if raw is None or raw.strip() in ("", ALL):
        return None
    return TaskStatus(raw.strip())


def parse_priority_filter(raw: str | None) -> TaskPriority | None:
    """'all' / empty -> no filter. Raises ValueError for unknown values."""
    if raw is None or raw.strip() in ("", ALL):
        return None
    return TaskPriority(raw.strip())


def filter_tasks(tasks: Iterable[Task], filters: TaskFilters) -> list[Task]:
    out = list(tasks)

    if filters.search:
        needle = filters.search.lower()
        out = [t for t in out if needle in t.title.lower() or needle in t.description.lower()]

    if filters.status is not None and filters.status != ALL:
        out = [t for t in out if t.status == filters.status]

    if filters.priority is not None and filters.priority != ALL:
        out = [t for t in out if t.priority == filters.priority]

    return out


def _sort_key(task: Task, field: SortField) -> tuple[int, Any]:
    if field in _DATE_FIELDS:
        raw = task.due_date if field == SortField.DUE_DATE else task.created_at
        moment = parse_instant(raw)
        # Unparseable dates rank after every valid one.
        if moment is None:
            return (1, 0.0)
        return (0, moment.timestamp())

    value = getattr(task, field.name.lower())
    return (0, str(value).lower())


def sort_tasks(tasks: Iterable[Task], sort: SortState) -> list[Task]:
    # sorted() is stable in both directions, so equal keys keep input order.
    return sorted(
        tasks,
        key=lambda t: _sort_key(t, sort.field),
        reverse=sort.direction == SortDirection.DESC,
    )


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def paginate(tasks: Sequence[Task], page: int, page_size: int = PAGE_SIZE) -> tuple[Task, ...]:
    if page < 1 or page > page_count(len(tasks), page_size):
        return ()
    start = (page - 1) * page_size
    return tuple(tasks[start : start + page_size])


def project(
    tasks: Sequence[Task],
    filters: TaskFilters,
    sort: SortState,
    page: int = 1,
    *,
    page_size: int = PAGE_SIZE,
) -> TaskPage:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    visible = sort_tasks(filter_tasks(tasks, filters), sort)
    return TaskPage(
        rows=paginate(visible, page, page_size),
        page=page,
        page_size=page_size,
        total_filtered=len(visible),
        total_pages=page_count(len(visible), page_size),
        total_tasks=len(tasks),
    )


class TaskTableView:
    """Mutable filter/sort/page state for one list screen."""

    def __init__(
        self,
        *,
        page_size: int = PAGE_SIZE,
        sort: SortState | None = None,
    ) -> None:
        self.page_size = page_size
        self.default_sort = sort or SortState()
        self.filters = TaskFilters()
        self.sort = self.default_sort
        self.page = 1

    def set_search(self, text: str) -> None:
        self.filters = replace(self.filters, search=text)
        self.page = 1

    def set_status_filter(self, status: TaskStatus | None) -> None:
        self.filters = replace(self.filters, status=status)
        self.page = 1

    def set_priority_filter(self, priority: TaskPriority | None) -> None:
        self.filters = replace(self.filters, priority=priority)
        self.page = 1

    def clear_filters(self) -> None:
        self.filters = TaskFilters()
        self.page = 1

    def sort_by(self, field: SortField) -> SortState:
        self.sort = self.sort.toggle(field)
        self.page = 1
        return self.sort

    def go_to_page(self, page: int) -> None:
        self.page = page

    def render(self, tasks: Sequence[Task]) -> TaskPage:
        return project(tasks, self.filters, self.sort, self.page, page_size=self.page_size)


# ---- per-task presentation helpers ----

_STATUS_TONE = {
    TaskStatus.COMPLETED: "success",
    TaskStatus.IN_PROGRESS: "warning",
    TaskStatus.TODO: "neutral",
}

_PRIORITY_TONE = {
    TaskPriority.HIGH: "danger",
    TaskPriority.MEDIUM: "caution",
    TaskPriority.LOW: "info",
}


def status_badge(status: TaskStatus) -> str:
    return _STATUS_TONE.get(status, "neutral")


def priority_badge(priority: TaskPriority) -> str:
    return _PRIORITY_TONE.get(priority, "info")


def status_label(status: TaskStatus) -> str:
    # "in-progress" -> "In Progress"
    return status.value.replace("-", " ").title()


def priority_label(priority: TaskPriority) -> str:
    return priority.value.capitalize()


def is_overdue(task: Task, now: datetime) -> bool:
    if task.status == TaskStatus.COMPLETED:
        return False
    due = parse_instant(task.due_date)
    return due is not None and due < now
