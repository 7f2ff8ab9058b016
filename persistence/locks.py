from __future__ import annotations

import contextlib
import threading
from typing import ContextManager


class PathLockRegistry:
    """
    Provides a stable lock per document name, so read-modify-write cycles on one
    document are serialized while different documents proceed in parallel.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, name: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = threading.Lock()
                self._locks[name] = lock
            return lock


class NullLockRegistry:
    """
    No mutual exclusion: concurrent writers to one document race, last write wins.
    """

    def lock_for(self, name: str) -> ContextManager[object]:
        return contextlib.nullcontext()
