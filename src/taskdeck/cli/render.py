# src/taskdeck/cli/render.py

"""Plain-text rendering of the task list for the console."""

from __future__ import annotations

from datetime import datetime

from ..tasks.task_models import Task, TaskStats
from ..tasks.task_view import (
    TaskPage,
    priority_badge,
    priority_label,
    status_badge,
    status_label,
    is_overdue,
)

RESET = "\033[0m"

_TONE_ANSI = {
    "success": "\033[32m",
    "warning": "\033[33m",
    "neutral": "\033[37m",
    "danger": "\033[31m",
    "caution": "\033[93m",
    "info": "\033[34m",
}

ID_WIDTH = 8
TITLE_WIDTH = 32
STATUS_WIDTH = 12
PRIORITY_WIDTH = 8


def _paint(text: str, tone: str, color: bool) -> str:
    if not color:
        return text
    return f"{_TONE_ANSI.get(tone, '')}{text}{RESET}"


def _cell(text: str, width: int) -> str:
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def render_row(task: Task, now: datetime, *, color: bool = False) -> str:
    due = task.due_date or "-"
    if is_overdue(task, now):
        due = _paint(f"{due} !", "danger", color)

    return " ".join(
        [
            _cell(task.id, ID_WIDTH),
            _cell(task.title, TITLE_WIDTH),
            _paint(_cell(status_label(task.status), STATUS_WIDTH), status_badge(task.status), color),
            _paint(_cell(priority_label(task.priority), PRIORITY_WIDTH), priority_badge(task.priority), color),
            due,
        ]
    )


def render_page(page: TaskPage, now: datetime, *, color: bool = False) -> str:
    header = " ".join(
        [
            _cell("ID", ID_WIDTH),
            _cell("Task", TITLE_WIDTH),
            _cell("Status", STATUS_WIDTH),
            _cell("Priority", PRIORITY_WIDTH),
            "Due",
        ]
    )
    lines = [header, "-" * len(header)]
    lines.extend(render_row(t, now, color=color) for t in page.rows)

    if page.empty_message:
        lines.append(page.empty_message)

    if page.total_pages:
        lines.append(f"Page {page.page} of {page.total_pages}")
    lines.append(page.summary)
    return "\n".join(lines)


def render_task(task: Task, now: datetime) -> str:
    overdue = " (overdue)" if is_overdue(task, now) else ""
    return (
        f"{task.title}\n"
        f"  id:          {task.id}\n"
        f"  description: {task.description}\n"
        f"  status:      {status_label(task.status)}\n"
        f"  priority:    {priority_label(task.priority)}\n"
        f"  due:         {task.due_date}{overdue}\n"
        f"  created:     {task.created_at}\n"
        f"  updated:     {task.updated_at}"
    )


def render_stats(stats: TaskStats) -> str:
    return (
        "Tasks:\n"
        f"  Total:       {stats.total}\n"
        f"  Completed:   {stats.completed}\n"
        f"  In Progress: {stats.in_progress}\n"
        f"  To Do:       {stats.todo}"
    )
