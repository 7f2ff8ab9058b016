from __future__ import annotations

from .audit import AuditEntry, FileAuditLog, MemoryAuditLog
from .disk_store import DiskStorageBackend
from .documents import DocumentStore, SetPolicy, is_invalid_value
from .errors import (
    FileAlreadyExists,
    FileNotFound,
    InvalidKey,
    IOFailure,
    ParseError,
    StoreError,
    ValidationError,
)
from .repositories import AsyncAuditedStore, AuditedStore, open_store

__all__ = [
    "AuditEntry",
    "FileAuditLog",
    "MemoryAuditLog",
    "DiskStorageBackend",
    "DocumentStore",
    "SetPolicy",
    "is_invalid_value",
    "StoreError",
    "ValidationError",
    "FileNotFound",
    "FileAlreadyExists",
    "InvalidKey",
    "ParseError",
    "IOFailure",
    "AuditedStore",
    "AsyncAuditedStore",
    "open_store",
]
