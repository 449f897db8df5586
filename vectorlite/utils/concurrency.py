"""
Concurrency utilities for thread-safe operations.

Every storage operation is a read-modify-write of a whole JSON document, so two
writers touching the same document at once would silently drop one another's
changes. This module provides the locks that serialize those cycles within a
single process.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Generator
from functools import wraps


class ReadWriteLock:
    """
    A readers-writer lock implementation.

    Multiple readers can acquire the lock simultaneously, but writers
    have exclusive access. Queries are far more frequent than upserts,
    so readers should not block each other.

    Time Complexity: O(1) for acquiring/releasing locks
    Space Complexity: O(1)
    """

    def __init__(self):
        self._read_ready = threading.Condition(threading.RLock())
        self._readers = 0

    def acquire_read(self) -> None:
        """Acquire a read lock. Multiple readers can hold the lock simultaneously."""
        with self._read_ready:
            self._readers += 1

    def release_read(self) -> None:
        """Release a read lock."""
        with self._read_ready:
            self._readers -= 1
            if self._readers == 0:
                self._read_ready.notify_all()

    def acquire_write(self) -> None:
        """Acquire a write lock. Exclusive access - no other readers or writers."""
        self._read_ready.acquire()
        while self._readers > 0:
            self._read_ready.wait()

    def release_write(self) -> None:
        """Release a write lock."""
        self._read_ready.release()

    @contextmanager
    def read_lock(self) -> Generator[None, None, None]:
        """Context manager for read operations."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Generator[None, None, None]:
        """Context manager for write operations."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


def thread_safe_read(func):
    """
    Decorator to make a method thread-safe for read operations.

    The decorated method must be part of a class that has a '_lock' attribute
    which is a ReadWriteLock instance.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if not hasattr(self, '_lock'):
            raise AttributeError(f"{self.__class__.__name__} must have a '_lock' attribute")

        with self._lock.read_lock():
            return func(self, *args, **kwargs)
    return wrapper


def thread_safe_write(func):
    """
    Decorator to make a method thread-safe for write operations.

    The decorated method must be part of a class that has a '_lock' attribute
    which is a ReadWriteLock instance.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if not hasattr(self, '_lock'):
            raise AttributeError(f"{self.__class__.__name__} must have a '_lock' attribute")

        with self._lock.write_lock():
            return func(self, *args, **kwargs)
    return wrapper


class IndexLocks:
    """
    A table of readers-writer locks keyed by index name.

    Writers of one index (upsert, create, delete) are serialized while
    queries share a read lock. Operations on different indexes never
    contend. An entry lives only while some caller holds or waits on it,
    so names of deleted or never-created indexes do not accumulate.
    """

    def __init__(self):
        self._locks: Dict[str, ReadWriteLock] = {}
        self._users: Dict[str, int] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, index_name: str) -> ReadWriteLock:
        with self._guard:
            lock = self._locks.get(index_name)
            if lock is None:
                lock = ReadWriteLock()
                self._locks[index_name] = lock
            self._users[index_name] = self._users.get(index_name, 0) + 1
            return lock

    def _checkin(self, index_name: str) -> None:
        with self._guard:
            self._users[index_name] -= 1
            if self._users[index_name] == 0:
                del self._users[index_name]
                del self._locks[index_name]

    @contextmanager
    def read_lock(self, index_name: str) -> Generator[None, None, None]:
        lock = self._checkout(index_name)
        try:
            with lock.read_lock():
                yield
        finally:
            self._checkin(index_name)

    @contextmanager
    def write_lock(self, index_name: str) -> Generator[None, None, None]:
        lock = self._checkout(index_name)
        try:
            with lock.write_lock():
                yield
        finally:
            self._checkin(index_name)
