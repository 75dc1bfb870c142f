import threading
from typing import Dict


class LockRegistry:
    """One lock per collection name, created on first use and never evicted.

    The registry guard is held only while looking up or inserting a lock,
    never while the caller does I/O under the returned lock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def acquire(self, name: str) -> threading.Lock:
        """Return the lock for ``name``; the caller holds it with ``with``."""
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = threading.Lock()
                self._locks[name] = lock
            return lock

    def __contains__(self, name: str) -> bool:
        with self._guard:
            return name in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
