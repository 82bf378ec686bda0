# src/prover_cache/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import threading
from enum import StrEnum
from pathlib import Path
from typing import Any

from ..errors import (
    DeserializationError,
    SerializationError,
    StorageUnavailable,
    StorageWriteError,
    TaskCacheError,
)
from .task_models import TaskWrapper

logger = logging.getLogger(__name__)

DB_FILENAME = "tasks.sqlite3"


class ConcurrencyMode(StrEnum):
    """
    How a TaskCache handle may be shared.

    - single: every holder of the handle runs in one thread of control
      (one event loop / one thread). Cross-thread use is rejected by sqlite.
    - shared: holders may run on different threads; operations are serialized
      with a lock around the single connection.
    """

    SINGLE_THREAD = "single"
    SHARED = "shared"

    @classmethod
    def parse(cls, raw: str | None) -> ConcurrencyMode:
        if not raw:
            return cls.SINGLE_THREAD
        try:
            return cls(raw.strip().lower())
        except ValueError:
            logger.warning("Unknown task cache concurrency mode %r, using 'single'.", raw)
            return cls.SINGLE_THREAD


class TaskCache:
    """
    Durable key-ordered cache of task records.

    Layout:
    - `db_path` is a directory owned by the cache; the SQLite file lives inside it
    - one table, key = UTF-8 task id (BLOB), value = UTF-8 JSON of the TaskWrapper
    - BLOB keys compare with memcmp, so "last" means lexicographically greatest id

    Ownership:
    - the connection holds an exclusive lock from open until close(), so a second
      process (or a second TaskCache) on the same directory fails to open
    - every write is its own committed transaction with synchronous=FULL
    """

    def __init__(
        self,
        db_path: str | Path,
        *,
        concurrency: ConcurrencyMode | str = ConcurrencyMode.SINGLE_THREAD,
        open_timeout: float = 5.0,
    ) -> None:
        self._dir = Path(db_path)
        self._db_file = self._dir / DB_FILENAME
        self._concurrency = ConcurrencyMode(concurrency)
        self._lock: contextlib.AbstractContextManager[Any]
        if self._concurrency is ConcurrencyMode.SHARED:
            self._lock = threading.Lock()
        else:
            self._lock = contextlib.nullcontext()
        self._conn: sqlite3.Connection | None = None

        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            self._conn = self._connect(open_timeout)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as exc:
            if self._conn is not None:
                with contextlib.suppress(sqlite3.Error):
                    self._conn.close()
                self._conn = None
            raise StorageUnavailable(f"cannot open task cache at {self._dir}: {exc}") from exc

        try:
            total = self.count_tasks()
        except TaskCacheError:
            total = -1
        logger.info(
            "TaskCache ready db=%s total=%s concurrency=%s",
            self._db_file,
            total,
            self._concurrency.value,
        )

    @property
    def path(self) -> Path:
        return self._dir

    @property
    def concurrency(self) -> ConcurrencyMode:
        return self._concurrency

    def close(self) -> None:
        """Release the connection (and the exclusive lock). Safe to call twice."""
        with self._lock:
            if self._conn is None:
                return
            conn, self._conn = self._conn, None
            conn.close()

    def __enter__(self) -> TaskCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    def _connect(self, timeout: float) -> sqlite3.Connection:
        conn = sqlite3.connect(
            str(self._db_file),
            timeout=timeout,
            isolation_level=None,
            check_same_thread=self._concurrency is ConcurrencyMode.SINGLE_THREAD,
        )
        try:
            # EXCLUSIVE must be set before WAL is first touched so no shared-memory
            # index is created and the file lock is never released.
            conn.execute("PRAGMA locking_mode=EXCLUSIVE")
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=FULL")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _ensure_schema(self) -> None:
        assert self._conn is not None
        conn = self._conn
        conn.execute("BEGIN EXCLUSIVE")
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    key BLOB PRIMARY KEY NOT NULL,
                    value BLOB NOT NULL
                ) WITHOUT ROWID
                """
            )
            cols = {row[1] for row in conn.execute("PRAGMA table_info(tasks)")}
            if cols != {"key", "value"}:
                raise sqlite3.DatabaseError(f"unexpected tasks table columns: {sorted(cols)}")
            conn.execute("COMMIT")
        except sqlite3.Error:
            with contextlib.suppress(sqlite3.Error):
                conn.execute("ROLLBACK")
            raise

    def _require_conn(self, error_cls: type[TaskCacheError]) -> sqlite3.Connection:
        if self._conn is None:
            raise error_cls(f"task cache at {self._dir} is closed")
        return self._conn

    @staticmethod
    def _encode_key(task_id: Any) -> bytes:
        if not isinstance(task_id, str) or not task_id:
            raise SerializationError(f"task id must be a non-empty string, got {task_id!r}")
        try:
            return task_id.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise SerializationError(f"task id is not valid UTF-8: {task_id!r}") from exc

    @staticmethod
    def _encode_value(task_wrapper: TaskWrapper) -> bytes:
        try:
            raw = json.dumps(task_wrapper.to_dict(), ensure_ascii=False, separators=(",", ":"))
            return raw.encode("utf-8")
        except (TypeError, ValueError, AttributeError) as exc:
            raise SerializationError(
                f"cannot encode task record, task_id={task_wrapper.task_id}: {exc}"
            ) from exc

    @staticmethod
    def _decode_entry(key: object, value: object) -> TaskWrapper:
        # Rows written by anything other than put_task may carry TEXT or INTEGER cells.
        if not isinstance(key, bytes) or not isinstance(value, bytes):
            raise DeserializationError(
                f"stored entry is not a byte key/value pair: "
                f"key={type(key).__name__} value={type(value).__name__}"
            )
        try:
            task_id = key.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DeserializationError(f"stored key is not valid UTF-8: {key!r}") from exc
        try:
            task_wrapper = TaskWrapper.from_dict(json.loads(value))
        except (KeyError, TypeError, ValueError, RecursionError) as exc:
            raise DeserializationError(
                f"cannot decode task record, task_id={task_id}: {exc}"
            ) from exc
        if task_wrapper.task_id != task_id:
            raise DeserializationError(
                f"task record id {task_wrapper.task_id!r} does not match its key {task_id!r}"
            )
        return task_wrapper

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._lock:
            conn = self._require_conn(StorageUnavailable)
            try:
                (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            except sqlite3.Error as exc:
                raise StorageUnavailable(f"count tasks failed: {exc}") from exc
        return int(n)

    def put_task(self, task_wrapper: TaskWrapper) -> None:
        """
        Upsert a task record under its id. Replaces any previous record wholesale.

        Durable once this returns.
        """
        key = self._encode_key(task_wrapper.task_id)
        value = self._encode_value(task_wrapper)
        with self._lock:
            conn = self._require_conn(StorageWriteError)
            try:
                conn.execute("INSERT OR REPLACE INTO tasks(key, value) VALUES (?, ?)", (key, value))
            except sqlite3.Error as exc:
                raise StorageWriteError(
                    f"put task failed, task_id={task_wrapper.task_id}: {exc}"
                ) from exc

    def get_last_task(self) -> TaskWrapper | None:
        """Return the record with the greatest id in byte order, or None if empty."""
        with self._lock:
            conn = self._require_conn(StorageUnavailable)
            try:
                row = conn.execute(
                    "SELECT key, value FROM tasks ORDER BY key DESC LIMIT 1"
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageUnavailable(f"get last task failed: {exc}") from exc

        if row is None:
            return None
        task_wrapper = self._decode_entry(row[0], row[1])
        logger.info("get last task, task_id=%s", task_wrapper.task_id)
        return task_wrapper

    def delete_task(self, task_id: str) -> bool:
        """
        Remove the record for task_id if present.

        Deleting an unknown id is not an error. The return value only says whether
        a record was actually removed; it is a diagnostic, not a contract.
        """
        try:
            key = task_id.encode("utf-8")
        except UnicodeEncodeError:
            # put_task never stores such an id.
            return False

        with self._lock:
            conn = self._require_conn(StorageWriteError)
            try:
                cur = conn.execute("DELETE FROM tasks WHERE key = ?", (key,))
            except sqlite3.Error as exc:
                raise StorageWriteError(f"delete task failed, task_id={task_id}: {exc}") from exc
            return cur.rowcount > 0
