"""
Per-key Mutexes

Serializes read-modify-write sequences on the same resource id while letting
work on different ids proceed in parallel.

Usage:
  from utils.keyed_lock import movie_locks
  with movie_locks.hold(movie_id):
      # find, merge, replace
      ...
"""

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """
    A family of locks indexed by key.

    Entries are reference counted and dropped once no thread holds or waits
    on them, so the table only grows with concurrently contended keys.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._users: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Hold the lock for key for the duration of the with-block."""
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        """Number of keys currently held or waited on."""
        with self._guard:
            return len(self._locks)


# Process-wide locks for movie mutations, shared by every service instance
movie_locks = KeyedLock()
