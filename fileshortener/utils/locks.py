"""Shared/exclusive lock for in-process data stores

Functions and classes:
    ReadWriteLock:
        Many concurrent readers or a single writer. Writers are preferred:
        once a writer is waiting, new readers block until it is done.

Example:
    >>> lock = ReadWriteLock()
    >>> with lock.read_lock():
    ...     value = cache.get('abc123')
    >>> with lock.write_lock():
    ...     cache['abc123'] = value

NOTE:
    The lock is not reentrant. Acquiring the write lock while holding the read
    lock (or vice versa) on the same thread deadlocks.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


__all__ = ['ReadWriteLock']


class ReadWriteLock:
    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer or self._waiting_writers:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._condition:
            self._writer = False
            self._condition.notify_all()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
