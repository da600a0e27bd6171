# src/taskdeck/forms/task_form.py

"""Create/edit task form: validation rules, defaults and submission."""

from __future__ import annotations

import logging
from typing import Any

from ..core.clock import parse_due_date, utc_now
from ..core.ports import Clock
from ..tasks.task_models import Task, TaskDraft, TaskPriority, TaskStatus
from .form import Form, Rule

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 3

TASK_FORM_FIELDS = ("title", "description", "status", "priority", "due_date")


def _title_rule(value: Any) -> str | None:
    text = str(value or "").strip()
    if not text:
        return "Title is required"
    if len(text) < TITLE_MIN_LENGTH:
        return f"Title must be at least {TITLE_MIN_LENGTH} characters"
    return None


def _description_rule(value: Any) -> str | None:
    if not str(value or "").strip():
        return "Description is required"
    return None


def task_form_rules(clock: Clock = utc_now) -> dict[str, Rule]:
    def due_date_rule(value: Any) -> str | None:
        raw = str(value or "").strip()
        if not raw:
            return "Due date is required"
        due = parse_due_date(raw)
        if due is None:
            return "Due date must be a valid date (YYYY-MM-DD)"
        # "now" is read at validation time, not when the form was built.
        if due < clock().date():
            return "Due date cannot be in the past"
        return None

    return {
        "title": _title_rule,
        "description": _description_rule,
        "due_date": due_date_rule,
    }


def task_form_defaults(task: Task | None = None) -> dict[str, Any]:
    if task is None:
        return {
            "title": "",
            "description": "",
            "status": TaskStatus.TODO,
            "priority": TaskPriority.MEDIUM,
            "due_date": "",
        }
    return {
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority,
        "due_date": task.due_date,
    }


def build_task_form(task: Task | None = None, *, clock: Clock = utc_now) -> Form:
    """Empty form for creation, or one prefilled from `task` for editing."""
    return Form(task_form_defaults(task), task_form_rules(clock))


def submit_task_form(form: Form) -> TaskDraft | None:
    """Validate every field; return the draft to save, or None if anything failed."""
    if not form.validate():
        logger.debug("Task form rejected: %s", sorted(form.errors))
        return None

    v = form.values
    return TaskDraft(
        title=str(v["title"]).strip(),
        description=str(v["description"]).strip(),
        due_date=str(v["due_date"]).strip(),
        status=TaskStatus(v["status"]),
        priority=TaskPriority(v["priority"]),
    )
