from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from pydantic import BaseModel

from .interfaces import AuditSink

logger = logging.getLogger(__name__)


def now_millis() -> int:
    return int(time.time() * 1000)


class AuditEntry(BaseModel):
    """
    One line of the audit log:  "<message>, <unix-millis>\\n"
    """

    message: str
    timestamp: int

    @classmethod
    def now(cls, message: str) -> "AuditEntry":
        return cls(message=message, timestamp=now_millis())

    @classmethod
    def from_line(cls, line: str) -> "AuditEntry":
        message, sep, ts = line.rstrip("\n").rpartition(", ")
        if not sep:
            raise ValueError(f"not an audit line: {line!r}")
        return cls(message=message, timestamp=int(ts))

    def to_line(self) -> str:
        # One entry is always one physical line.
        message = self.message.replace("\r", " ").replace("\n", " ")
        return f"{message}, {self.timestamp}\n"


class FileAuditLog(AuditSink):
    """
    Appends audit lines to a single text file.

    Each line is written with one write() call under a process-local lock, so
    concurrent operations never interleave partial lines. Ordering between
    concurrent operations is whatever order they reach the lock.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    def append(self, line: str) -> None:
        with self._lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", encoding="utf-8") as f:
                    f.write(line)
            except OSError as e:
                logger.warning("AUDIT: failed to append to %s: %r", self._path, e)

    def read_entries(self) -> list[AuditEntry]:
        if not self._path.exists():
            return []
        with self._path.open("r", encoding="utf-8") as f:
            return [AuditEntry.from_line(line) for line in f if line.strip()]


class MemoryAuditLog(AuditSink):
    """In-memory sink, mainly for tests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.lines: list[str] = []

    def append(self, line: str) -> None:
        with self._lock:
            self.lines.append(line)

    def entries(self) -> list[AuditEntry]:
        return [AuditEntry.from_line(line) for line in self.lines]

    def messages(self) -> list[str]:
        return [e.message for e in self.entries()]
