# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from taskdeck.cli.bootstrap import create_initial_state
from taskdeck.cli.commands import CommandRegistry, registry
from taskdeck.tasks.task_models import TaskStatus

from .fakes import FakeClock


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, '/a x "y z"') == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert called == [["x", "y z"], []]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_list_done_delete(state) -> None:
    reply = registry.handle(
        state, '/add title="Write report" description="Quarterly numbers" due=2026-10-25 priority=high'
    )
    assert reply is not None and reply.startswith("Created task")

    (task,) = state.repository.tasks
    assert task.title == "Write report"

    listing = registry.handle(state, "/list") or ""
    assert "Write report" in listing
    assert "Showing 1 of 1 tasks" in listing

    registry.handle(state, f"/done {task.id}")
    assert state.repository.get_by_id(task.id).status == TaskStatus.COMPLETED

    assert "Confirm with" in (registry.handle(state, f"/delete {task.id[:10]}") or "")
    assert len(state.repository.tasks) == 1
    registry.handle(state, f"/delete {task.id[:10]} yes")
    assert state.repository.tasks == ()


def test_add_reports_validation_errors(state) -> None:
    reply = registry.handle(state, '/add title=Hi description="x" due=2020-01-01') or ""

    assert "Title must be at least 3 characters" in reply
    assert "Due date cannot be in the past" in reply
    assert state.repository.tasks == ()


def test_add_rejects_bad_arguments(state) -> None:
    assert "unknown field" in (registry.handle(state, "/add colour=red") or "")
    assert "Usage" in (registry.handle(state, "/add priority=urgent") or "")


def test_edit_updates_fields(state) -> None:
    registry.handle(state, '/add title="Write report" description="draft" due=2026-10-25')
    (task,) = state.repository.tasks

    reply = registry.handle(state, f'/edit {task.id} title="Write final report" status=in-progress')

    assert reply == f"Updated task {task.id}."
    edited = state.repository.get_by_id(task.id)
    assert edited.title == "Write final report"
    assert edited.status == TaskStatus.IN_PROGRESS
    assert edited.updated_at > edited.created_at


def test_filter_and_sort_reset_page(state) -> None:
    for i in range(12):
        registry.handle(state, f'/add title="Task {i:02d}" description="bulk" due=2026-10-25')

    assert "Page 2 of 2" in (registry.handle(state, "/page 2") or "")

    out = registry.handle(state, "/sort title") or ""
    assert state.table.page == 1
    assert "Page 1 of 2" in out

    out = registry.handle(state, "/filter status=completed") or ""
    assert "No tasks found" in out
    assert "Usage" in (registry.handle(state, "/filter status=archived") or "")


def test_unknown_task_id(state) -> None:
    assert registry.handle(state, "/show nope") == "Task not found: nope"
    assert registry.handle(state, "/delete nope") == "Task not found: nope"


def test_bootstrap_persists_across_instances(settings) -> None:
    clock = FakeClock()
    first = create_initial_state(settings=settings, clock=clock)
    registry.handle(first, '/add title="Persist me" description="kept on disk" due=2026-10-25')

    second = create_initial_state(settings=settings, clock=clock)

    assert [t.title for t in second.repository.tasks] == ["Persist me"]
    assert isinstance(settings.data_dir, Path)
    assert (settings.data_dir / "task-management-tasks.json").exists()


def test_delete_requires_confirmation(state) -> None:
    registry.handle(state, '/add title="Keep me safe" description="x" due=2026-10-25')
    (task,) = state.repository.tasks

    assert "Confirm with" in (registry.handle(state, f"/delete {task.id} no") or "")
    assert state.repository.get_by_id(task.id) is not None

    assert registry.handle(state, f"/delete {task.id} yes") == f"Deleted task {task.id}: Keep me safe"
    assert state.repository.tasks == ()


def test_partly_invalid_filter_changes_nothing(state) -> None:
    for i in range(12):
        registry.handle(state, f'/add title="Task {i:02d}" description="bulk" due=2026-10-25')
    registry.handle(state, "/page 2")
    before = state.table.filters

    reply = registry.handle(state, "/filter status=todo priority=urgent") or ""

    assert reply.startswith("Usage")
    assert state.table.filters == before
    assert state.table.page == 2
