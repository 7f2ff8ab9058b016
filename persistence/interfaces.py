from __future__ import annotations

from typing import ContextManager, Protocol


class StorageBackend(Protocol):
    """
    Named text documents on a filesystem-like medium. No content interpretation.
    """

    def read_document(self, name: str) -> str:
        """Return the document text. Raises FileNotFound or IOFailure."""
        ...

    def write_document(self, name: str, text: str) -> None:
        """Create or replace the document atomically. Raises IOFailure."""
        ...

    def delete_document(self, name: str) -> None:
        """Raises FileNotFound if the document did not exist, IOFailure otherwise."""
        ...

    def list_documents(self) -> list[str]:
        """Sorted names of all stored documents. Raises IOFailure."""
        ...


class AuditSink(Protocol):
    """
    Append-only sink for audit lines. Each call appends one complete line.
    """

    def append(self, line: str) -> None:
        ...


class LockRegistry(Protocol):
    def lock_for(self, name: str) -> ContextManager[object]:
        ...
