"""Shared file handling for the JSON-backed repositories.

Each repository owns one JSON array on disk. ``transaction()`` holds
the file's lock around load-modify-persist, so concurrent writers never
lose each other's updates. The lock is a thread lock plus an OS-level
lock on ``<file>.lock``, which also covers other processes (several CLI
invocations, a sweeper) sharing the data directory.

``KeyedFileLock`` does the same for named critical sections that span
several files, such as one (product, warehouse) pair or one order.
"""

from __future__ import annotations

import hashlib
import json
import os
import threading
from collections.abc import Callable, Hashable, Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

from stockroom.domain.service.locking import KeyedLock


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(str(file_path) + ".lock")
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        with self._lock, self._file_lock:
            # one temp file per writer; the rename is atomic
            tmp_path = self._file_path.with_name(
                f"{self._file_path.name}.{os.getpid()}.{threading.get_ident()}.tmp"
            )
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            tmp_path.replace(self._file_path)

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the records; whatever the caller leaves in the list is written back."""
        with self._lock, self._file_lock:
            records = self.load()
            yield records
            self.persist(records)

    def _ensure_file(self) -> None:
        with self._file_lock:
            if not self._file_path.exists():
                self._file_path.write_text("[]", encoding="utf-8")


class KeyedFileLock:
    """One lock per key, shared by every process using *directory*.

    Each key maps to its own lock file named ``<prefix>-<digest>.lock``.
    Threads of one process queue on a ``KeyedLock`` first, so only one
    of them at a time waits on the file.
    """

    def __init__(self, directory: Path, prefix: str) -> None:
        self._directory = directory
        self._prefix = prefix
        self._threads = KeyedLock()
        self._directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: Hashable) -> Path:
        digest = hashlib.sha1(repr(key).encode("utf-8")).hexdigest()[:20]
        return self._directory / f"{self._prefix}-{digest}.lock"

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._threads.hold(key), FileLock(str(self.path_for(key))):
            yield


def upsert(records: list[dict], new: dict, matches: Callable[[dict], bool]) -> None:
    """Replace the first record *matches* accepts, otherwise append."""
    for i, raw in enumerate(records):
        if matches(raw):
            records[i] = new
            return
    records.append(new)
