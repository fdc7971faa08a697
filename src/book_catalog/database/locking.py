"""
Shared/exclusive locking for the book stores.

Many readers may hold the lock at once; a writer holds it alone. Once a
writer is waiting, new readers queue behind it so a steady stream of reads
cannot starve writes.

The lock is not reentrant and cannot be upgraded: a thread holding the shared
side must release it before asking for the exclusive side.
"""

import threading
from collections.abc import Generator
from contextlib import contextmanager


class LockingError(RuntimeError):
    """Raised when the lock is released by a thread that does not hold it."""


class SharedExclusiveLock:
    """Multiple readers, single writer lock built on ``threading.Condition``."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer: threading.Thread | None = None
        self._waiting_writers = 0

    def acquire_shared(self) -> None:
        with self._cond:
            while self._writer is not None or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_shared(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise LockingError("release_shared() called on unheld lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_exclusive(self) -> None:
        me = threading.current_thread()
        with self._cond:
            if self._writer is me:
                raise LockingError("exclusive lock is not reentrant")
            self._waiting_writers += 1
            try:
                while self._writer is not None or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = me

    def release_exclusive(self) -> None:
        with self._cond:
            if self._writer is not threading.current_thread():
                raise LockingError("release_exclusive() called on unheld lock")
            self._writer = None
            self._cond.notify_all()

    @property
    def is_shared(self) -> bool:
        """True while at least one reader holds the lock."""
        with self._cond:
            return self._readers > 0

    @property
    def is_exclusive(self) -> bool:
        """True while a writer holds the lock."""
        with self._cond:
            return self._writer is not None

    @contextmanager
    def shared(self) -> Generator[None, None, None]:
        """Hold the shared (read) side for the duration of a ``with`` block."""
        self.acquire_shared()
        try:
            yield
        finally:
            self.release_shared()

    @contextmanager
    def exclusive(self) -> Generator[None, None, None]:
        """Hold the exclusive (write) side for the duration of a ``with`` block."""
        self.acquire_exclusive()
        try:
            yield
        finally:
            self.release_exclusive()
