from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterator

Key = tuple[str, date]


class KeyedLockManager:
    """One re-entrant lock per (worker_id, work_day) key.

    Locks are dropped once nobody holds or waits for them, so the table only
    grows with the number of keys in flight.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Key, threading.RLock] = {}
        self._users: dict[Key, int] = {}

    def _checkout(self, key: Key) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            self._users[key] = self._users.get(key, 0) + 1
            return lock

    def _checkin(self, key: Key) -> None:
        with self._guard:
            remaining = self._users.get(key, 1) - 1
            if remaining <= 0:
                self._users.pop(key, None)
                self._locks.pop(key, None)
            else:
                self._users[key] = remaining

    @contextmanager
    def locked(self, *keys: Key) -> Iterator[None]:
        """Hold every key at once, acquired oldest day first."""
        ordered = sorted(set(keys), key=lambda k: (k[1], k[0]))
        held: list[tuple[Key, threading.RLock]] = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                lock.acquire()
                held.append((key, lock))
            yield
        finally:
            for key, lock in reversed(held):
                lock.release()
                self._checkin(key)

    def active_keys(self) -> int:
        with self._guard:
            return len(self._locks)
