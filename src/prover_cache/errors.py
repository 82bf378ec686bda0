# src/prover_cache/errors.py

from __future__ import annotations


class TaskCacheError(Exception):
    """Base class for every failure reported by the task cache."""


class StorageUnavailable(TaskCacheError):
    """
    The backing store cannot be opened (or is no longer open).

    Raised at open time when the path is locked by another owner, is not a
    directory, is not writable, or holds something that is not a task cache.
    Callers should treat it as fatal.
    """


class SerializationError(TaskCacheError, ValueError):
    """A task record could not be encoded for storage."""


class DeserializationError(TaskCacheError, ValueError):
    """Stored bytes could not be decoded back into a task record."""


class StorageWriteError(TaskCacheError):
    """The backing store rejected a write or delete."""
