# src/taskdeck/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..core.state import AppState
from ..forms.form import Form
from ..forms.task_form import build_task_form, submit_task_form
from ..tasks.task_models import Task, TaskPriority, TaskStatus, TaskUpdate
from ..tasks.task_view import SortField, parse_priority_filter, parse_status_filter
from .render import render_page, render_stats, render_task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

_FIELD_ALIASES = {
    "title": "title",
    "description": "description",
    "desc": "description",
    "status": "status",
    "priority": "priority",
    "due": "due_date",
    "due_date": "due_date",
    "duedate": "due_date",
}

_SORT_ALIASES = {
    "title": SortField.TITLE,
    "due": SortField.DUE_DATE,
    "duedate": SortField.DUE_DATE,
    "priority": SortField.PRIORITY,
    "status": SortField.STATUS,
    "created": SortField.CREATED_AT,
    "createdat": SortField.CREATED_AT,
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            # Unbalanced quotes: fall back to plain whitespace splitting.
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _parse_fields(args: list[str]) -> dict[str, str]:
    """key=value pairs -> form field values. Raises ValueError on bad input."""
    out: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"expected key=value, got {arg!r}")
        name = _FIELD_ALIASES.get(key.strip().lower())
        if name is None:
            raise ValueError(f"unknown field {key!r}")
        out[name] = value
    return out


def _apply_fields(form: Form, fields: dict[str, str]) -> None:
    for name, value in fields.items():
        if name == "status":
            form.set_value(name, TaskStatus(value.strip()))
        elif name == "priority":
            form.set_value(name, TaskPriority(value.strip()))
        else:
            form.set_value(name, value)


def _form_errors(form: Form) -> str:
    lines = ["Task not saved:"]
    for name, message in form.errors.items():
        lines.append(f"  {name}: {message}")
    return "\n".join(lines)


def _resolve_task(state: AppState, raw: str) -> Task | None:
    """Exact id, or a unique id prefix (ids are long to type)."""
    task = state.repository.get_by_id(raw)
    if task is not None:
        return task
    matches = [t for t in state.repository.tasks if t.id.startswith(raw)]
    return matches[0] if len(matches) == 1 else None


def _color(state: AppState) -> bool:
    return bool(getattr(state.settings, "color", False))


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    if args:
        try:
            state.table.go_to_page(int(args[0]))
        except ValueError:
            return "Usage: /list [page]"
    page = state.table.render(state.repository.tasks)
    return render_page(page, state.clock(), color=_color(state))


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add title="Buy milk" description="Two litres" due=2026-10-25 [priority=high] [status=todo]
    """
    form = build_task_form(clock=state.clock)
    try:
        _apply_fields(form, _parse_fields(args))
    except ValueError as e:
        return f"{e}\nUsage: /add title=... description=... due=YYYY-MM-DD [priority=low|medium|high] [status=...]"

    draft = submit_task_form(form)
    if draft is None:
        return _form_errors(form)

    task = state.repository.create(draft)
    return f"Created task {task.id}: {task.title}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> field=value ...
    """
    if len(args) < 2:
        return "Usage: /edit <id> field=value ..."
    task = _resolve_task(state, args[0])
    if task is None:
        return f"Task not found: {args[0]}"

    form = build_task_form(task, clock=state.clock)
    try:
        _apply_fields(form, _parse_fields(args[1:]))
    except ValueError as e:
        return f"{e}\nUsage: /edit <id> field=value ..."

    draft = submit_task_form(form)
    if draft is None:
        return _form_errors(form)

    state.repository.update(
        task.id,
        TaskUpdate(
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            due_date=draft.due_date,
        ),
    )
    return f"Updated task {task.id}."


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>"
    task = _resolve_task(state, args[0])
    if task is None:
        return f"Task not found: {args[0]}"
    return render_task(task, state.clock())


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    task = _resolve_task(state, args[0])
    if task is None:
        return f"Task not found: {args[0]}"
    new_status = state.repository.toggle_completed(task.id)
    return f"Task {task.id} is now {new_status}."


def cmd_status(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /status <id> todo|in-progress|completed"
    task = _resolve_task(state, args[0])
    if task is None:
        return f"Task not found: {args[0]}"
    try:
        status = TaskStatus(args[1])
    except ValueError:
        return "Usage: /status <id> todo|in-progress|completed"
    state.repository.set_status(task.id, status)
    return f"Task {task.id} is now {status}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /delete <id>      -> ask for confirmation
    /delete <id> yes  -> delete
    """
    if not args:
        return "Usage: /delete <id> [yes]"
    task = _resolve_task(state, args[0])
    if task is None:
        return f"Task not found: {args[0]}"
    if len(args) < 2 or args[1].lower() not in ("yes", "y"):
        return f"Delete task {task.id}: {task.title}? Confirm with /delete {task.id} yes"
    state.repository.delete(task.id)
    return f"Deleted task {task.id}: {task.title}"


def cmd_search(state: AppState, args: list[str]) -> str:
    """/search <text>  (no text clears the search)"""
    state.table.set_search(" ".join(args))
    return cmd_list(state, [])


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter status=<status|all> priority=<priority|all>
    /filter clear
    """
    if not args:
        f = state.table.filters
        return (
            "Filters:\n"
            f"  search:   {f.search or '-'}\n"
            f"  status:   {f.status or 'all'}\n"
            f"  priority: {f.priority or 'all'}"
        )

    if args[0].lower() == "clear":
        state.table.clear_filters()
        return cmd_list(state, [])

    # Parse everything first so a bad argument leaves the view untouched.
    parsed: dict[str, TaskStatus | TaskPriority | None] = {}
    try:
        for arg in args:
            key, sep, value = arg.partition("=")
            key = key.strip().lower()
            if not sep or key not in ("status", "priority"):
                raise ValueError(arg)
            if key == "status":
                parsed[key] = parse_status_filter(value)
            else:
                parsed[key] = parse_priority_filter(value)
    except ValueError:
        return "Usage: /filter status=<todo|in-progress|completed|all> priority=<low|medium|high|all> | /filter clear"

    if "status" in parsed:
        state.table.set_status_filter(parsed["status"])
    if "priority" in parsed:
        state.table.set_priority_filter(parsed["priority"])

    return cmd_list(state, [])


def cmd_sort(state: AppState, args: list[str]) -> str:
    """/sort <title|due|priority|status|created>  (same field again flips direction)"""
    if not args:
        s = state.table.sort
        return f"Sorted by {s.field} ({s.direction})."
    field = _SORT_ALIASES.get(args[0].lower())
    if field is None:
        return "Usage: /sort title|due|priority|status|created"
    state.table.sort_by(field)
    return cmd_list(state, [])


def cmd_page(state: AppState, args: list[str]) -> str:
    """/page <n> | next | prev"""
    if not args:
        return "Usage: /page <n>|next|prev"
    arg = args[0].lower()
    if arg == "next":
        target = state.table.page + 1
    elif arg in ("prev", "previous"):
        target = state.table.page - 1
    else:
        try:
            target = int(arg)
        except ValueError:
            return "Usage: /page <n>|next|prev"
    state.table.go_to_page(target)
    return cmd_list(state, [])


def cmd_stats(state: AppState, args: list[str]) -> str:
    return render_stats(state.repository.stats())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list: /list [page].", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text='Create a task: /add title="..." description="..." due=YYYY-MM-DD [priority=..] [status=..].',
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> field=value ...")
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("done", cmd_done, help_text="Toggle completed/todo: /done <id>.")
registry.register("status", cmd_status, help_text="Set status: /status <id> todo|in-progress|completed.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id> yes.", aliases=["rm"])
registry.register("search", cmd_search, help_text="Search title/description: /search <text> (empty clears).")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter status=.. priority=.. | /filter clear."
)
registry.register("sort", cmd_sort, help_text="Sort: /sort title|due|priority|status|created.")
registry.register("page", cmd_page, help_text="Go to page: /page <n>|next|prev.")
registry.register("stats", cmd_stats, help_text="Show task counts by status.")
