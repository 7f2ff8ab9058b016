from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Mapping

from json_store import dumps_compact

from . import merge as merge_engine
from . import set_algebra
from .audit import AuditEntry, FileAuditLog
from .disk_store import DiskStorageBackend
from .documents import DocumentStore, SetPolicy
from .errors import FileAlreadyExists, FileNotFound, InvalidKey, StoreError, ValidationError
from .interfaces import AuditSink
from .locks import NullLockRegistry, PathLockRegistry

logger = logging.getLogger(__name__)


def _require(**fields: Any) -> None:
    for field, value in fields.items():
        if value is None or value == "":
            raise ValidationError(f"Missing required argument: {field}")


def _display(value: Any) -> str:
    return value if isinstance(value, str) else dumps_compact(value)


class AuditedStore:
    """
    The boundary every caller goes through.

    Each operation that reaches the store writes exactly one audit line, for
    success or failure, then returns the result or re-raises the same typed
    StoreError. Missing arguments and malformed document names are rejected
    with ValidationError and are not audited.
    """

    def __init__(self, store: DocumentStore, audit: AuditSink):
        self._store = store
        self._audit = audit

    def _record(self, message: str) -> None:
        self._audit.append(AuditEntry.now(message).to_line())

    def get(self, name: str, key: str | None = None) -> Any:
        _require(file=name)
        try:
            value = self._store.get(name, key)
        except ValidationError:
            raise
        except InvalidKey:
            self._record(f"Error invalid key {key}")
            raise
        except StoreError:
            self._record(f"Error reading file {name}")
            raise
        self._record(_display(value))
        return value

    def set(self, name: str, key: str, value: Any) -> None:
        _require(file=name, key=key, value=value)
        try:
            self._store.set(name, key, value)
        except ValidationError:
            raise
        except InvalidKey:
            self._record(f"Error invalid key {key}")
            raise
        except StoreError:
            self._record(f"Error reading file {name}")
            raise
        self._record(f"{name} {key} updated to {_display(value)}")

    def remove(self, name: str, key: str) -> None:
        _require(file=name, key=key)
        try:
            self._store.remove(name, key)
        except ValidationError:
            raise
        except InvalidKey:
            self._record(f"Error invalid key {key}")
            raise
        except StoreError:
            self._record(f"Error reading file {name}")
            raise
        self._record(f"Deleted key {key} from {name}")

    def create_file(self, name: str, content: Mapping[str, Any] | None = None) -> None:
        _require(file=name)
        try:
            self._store.create_file(name, content)
        except ValidationError:
            raise
        except FileAlreadyExists:
            self._record(f"File {name} already exists")
            raise
        except StoreError:
            self._record(f"Error creating file {name}")
            raise
        self._record(f"File {name} created")

    def delete_file(self, name: str) -> None:
        _require(file=name)
        try:
            self._store.delete_file(name)
        except ValidationError:
            raise
        except FileNotFound:
            self._record(f"File {name} does not exist")
            raise
        except StoreError:
            self._record(f"Error deleting file {name}")
            raise
        self._record(f"File {name} deleted")

    def merge_data(self) -> dict[str, Any]:
        try:
            merged = merge_engine.merge_data(self._store)
        except StoreError:
            self._record("Error merging json files")
            raise
        self._record("Successful merge")
        return merged

    def _key_set_op(self, op: Any, symbol: str, file_a: str, file_b: str) -> list[str]:
        _require(fileA=file_a, fileB=file_b)
        try:
            keys = op(self._store, file_a, file_b)
        except ValidationError:
            raise
        except StoreError:
            self._record(f"Error {file_a} {symbol} {file_b}")
            raise
        self._record(",".join(keys))
        return keys

    def union(self, file_a: str, file_b: str) -> list[str]:
        return self._key_set_op(set_algebra.union, "U", file_a, file_b)

    def intersect(self, file_a: str, file_b: str) -> list[str]:
        return self._key_set_op(set_algebra.intersect, "^", file_a, file_b)

    def difference(self, file_a: str, file_b: str) -> list[str]:
        return self._key_set_op(set_algebra.difference, "-", file_a, file_b)


class AsyncAuditedStore:
    """
    Async wrapper around AuditedStore.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, store: AuditedStore) -> None:
        self._store = store

    async def get(self, name: str, key: str | None = None) -> Any:
        return await asyncio.to_thread(self._store.get, name, key)

    async def set(self, name: str, key: str, value: Any) -> None:
        await asyncio.to_thread(self._store.set, name, key, value)

    async def remove(self, name: str, key: str) -> None:
        await asyncio.to_thread(self._store.remove, name, key)

    async def create_file(self, name: str, content: Mapping[str, Any] | None = None) -> None:
        await asyncio.to_thread(self._store.create_file, name, content)

    async def delete_file(self, name: str) -> None:
        await asyncio.to_thread(self._store.delete_file, name)

    async def merge_data(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.merge_data)

    async def union(self, file_a: str, file_b: str) -> list[str]:
        return await asyncio.to_thread(self._store.union, file_a, file_b)

    async def intersect(self, file_a: str, file_b: str) -> list[str]:
        return await asyncio.to_thread(self._store.intersect, file_a, file_b)

    async def difference(self, file_a: str, file_b: str) -> list[str]:
        return await asyncio.to_thread(self._store.difference, file_a, file_b)


def open_store(
    data_dir: Path,
    log_file: Path,
    *,
    lock_documents: bool = False,
    set_policy: SetPolicy | str = SetPolicy.PERMISSIVE,
) -> AuditedStore:
    """
    Wire the disk backend, document store and file audit log together.
    """
    locks = PathLockRegistry() if lock_documents else NullLockRegistry()
    documents = DocumentStore(
        DiskStorageBackend(data_dir),
        locks=locks,
        set_policy=SetPolicy(set_policy),
    )
    logger.info(
        "STORE: data_dir=%s log_file=%s lock_documents=%s set_policy=%s",
        data_dir,
        log_file,
        lock_documents,
        documents.set_policy.value,
    )
    return AuditedStore(documents, FileAuditLog(log_file))
