# tests/test_task_repository.py

from __future__ import annotations

from taskdeck.tasks.task_models import TaskDraft, TaskPriority, TaskStatus, TaskUpdate
from taskdeck.tasks.task_repository import TaskRepository
from taskdeck.tasks.task_storage import TaskStorage

from .fakes import FakeClock, FakeKeyValueStore, RecordingStorage, make_task


def _draft(title: str = "Buy milk") -> TaskDraft:
    return TaskDraft(title=title, description="two litres", due_date="2026-10-25")


def test_initialize_loads_once(kv_store: FakeKeyValueStore, clock: FakeClock) -> None:
    TaskStorage(kv_store).save([make_task("a1")])
    repo = TaskRepository(RecordingStorage(kv_store, clock), clock=clock)

    repo.initialize()
    assert [t.id for t in repo.tasks] == ["a1"]

    TaskStorage(kv_store).save([])
    repo.initialize()
    assert [t.id for t in repo.tasks] == ["a1"]


def test_create_stamps_and_persists(repository: TaskRepository, storage: RecordingStorage) -> None:
    task = repository.create(_draft())

    assert task.id
    assert task.created_at == task.updated_at
    assert task.created_at.endswith("Z")
    assert task.status == TaskStatus.TODO
    assert task.priority == TaskPriority.MEDIUM
    assert repository.tasks == (task,)
    assert len(storage.saved) == 1
    assert storage.load() == [task]


def test_update_merges_and_refreshes_updated_at(repository: TaskRepository, storage: RecordingStorage) -> None:
    task = repository.create(_draft())

    repository.update(task.id, TaskUpdate(status=TaskStatus.IN_PROGRESS))

    updated = repository.get_by_id(task.id)
    assert updated is not None
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.title == task.title
    assert updated.created_at == task.created_at
    assert updated.updated_at > updated.created_at
    assert len(storage.saved) == 2
    assert storage.load() == [updated]


def test_update_unknown_id_leaves_collection(repository: TaskRepository, storage: RecordingStorage) -> None:
    task = repository.create(_draft())

    repository.update("missing", TaskUpdate(title="Nope"))

    assert repository.tasks == (task,)
    # Still one write per mutating call.
    assert len(storage.saved) == 2


def test_delete_is_idempotent(repository: TaskRepository, storage: RecordingStorage) -> None:
    keep = repository.create(_draft("Keep this"))
    gone = repository.create(_draft("Drop this"))

    repository.delete(gone.id)
    after_first = repository.tasks
    repository.delete(gone.id)

    assert repository.tasks == after_first == (keep,)
    assert storage.load() == [keep]
    assert len(storage.saved) == 4


def test_get_by_id_miss(repository: TaskRepository) -> None:
    assert repository.get_by_id("nope") is None


def test_colliding_id_is_redrawn(repository: TaskRepository, storage: RecordingStorage) -> None:
    storage.forced_ids = ["same", "same", "other"]

    first = repository.create(_draft("First task"))
    second = repository.create(_draft("Second task"))

    assert first.id == "same"
    assert second.id == "other"


def test_toggle_completed_and_stats(repository: TaskRepository) -> None:
    a = repository.create(_draft("Task A"))
    b = repository.create(_draft("Task B"))
    repository.set_status(b.id, TaskStatus.IN_PROGRESS)

    assert repository.toggle_completed(a.id) == TaskStatus.COMPLETED
    stats = repository.stats()
    assert (stats.total, stats.completed, stats.in_progress, stats.todo) == (2, 1, 1, 0)

    assert repository.toggle_completed(a.id) == TaskStatus.TODO
    assert repository.toggle_completed("missing") is None


def test_memory_stays_authoritative_when_save_fails(
    repository: TaskRepository, kv_store: FakeKeyValueStore
) -> None:
    kv_store.fail_writes = True

    task = repository.create(_draft())

    assert repository.get_by_id(task.id) == task
    assert kv_store.get_item("task-management-tasks") is None
