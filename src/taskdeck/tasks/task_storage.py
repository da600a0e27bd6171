# src/taskdeck/tasks/task_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
import secrets
from collections.abc import Sequence
from pathlib import Path

from ..core.clock import utc_now
from ..core.ports import Clock, KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)

STORAGE_KEY = "task-management-tasks"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_SAFE_KEY_RE = re.compile(r"[^A-Za-z0-9._-]")


class StorageQuotaExceeded(OSError):
    """The value does not fit into the configured storage quota."""


def _base36(n: int) -> str:
    if n <= 0:
        return "0"
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


class FileKeyValueStore:
    """
    localStorage-like string store: one UTF-8 file per key under `root`.

    Writes go to a temp file first and are moved into place with os.replace,
    so a failed write never leaves a half-written value behind.
    """

    def __init__(self, root: str | Path, *, max_bytes: int | None = None) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        self._max_bytes = max_bytes

    def path_for(self, key: str) -> Path:
        return self._root / f"{_SAFE_KEY_RE.sub('_', key)}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def set_item(self, key: str, value: str) -> None:
        data = value.encode("utf-8")
        if self._max_bytes is not None and len(data) > self._max_bytes:
            raise StorageQuotaExceeded(
                f"value for {key!r} is {len(data)} bytes, quota is {self._max_bytes}"
            )

        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, path)
        finally:
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()


class TaskStorage:
    """
    Whole-collection task persistence over a key/value store.

    The collection is one JSON array under a single key. Every failure is
    soft: load() falls back to [] and save() keeps the previous blob; both
    log and never raise.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = STORAGE_KEY,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._key = key
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task]:
        try:
            raw = self._store.get_item(self._key)
        except Exception:
            logger.exception("Failed to read tasks key=%s", self._key)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.exception("Failed to parse tasks key=%s", self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored tasks are not a list key=%s type=%s", self._key, type(data).__name__)
            return []

        tasks: list[Task] = []
        for entry in data:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object task entry: %r", entry)
                continue
            try:
                tasks.append(Task.from_dict(entry))
            except ValueError:
                logger.warning("Skipping malformed task entry: %r", entry)

        logger.info("Loaded %d tasks key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Sequence[Task]) -> bool:
        """Returns True when the blob was replaced."""
        try:
            blob = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)
            self._store.set_item(self._key, blob)
        except Exception:
            logger.exception("Failed to save %d tasks key=%s", len(tasks), self._key)
            return False

        logger.debug("Saved %d tasks key=%s", len(tasks), self._key)
        return True

    def generate_id(self) -> str:
        millis = int(self._clock().timestamp() * 1000)
        return _base36(millis) + _base36(secrets.randbits(52))
