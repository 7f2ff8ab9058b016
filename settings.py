from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence.documents import SetPolicy
from persistence import paths


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Storage
    data_dir: Path
    log_file: Path

    # Consistency
    lock_documents: bool
    set_policy: SetPolicy

    # Server
    host: str
    port: int
    owner: str

    # Debug
    debug_log_requests: bool


def get_settings() -> Settings:
    data_dir = Path(os.getenv("STORE_DATA_DIR", "") or paths.data_dir())
    log_file = Path(os.getenv("STORE_LOG_FILE", "") or paths.log_file())

    # Off by default: concurrent writes to one document race, last write wins.
    lock_documents = _env_bool("STORE_LOCK_DOCUMENTS", False)
    set_policy = SetPolicy(os.getenv("STORE_SET_POLICY", SetPolicy.PERMISSIVE.value).strip().lower())

    host = os.getenv("STORE_HOST", "127.0.0.1")
    port = _env_int("STORE_PORT", 5000)
    owner = os.getenv("STORE_OWNER", "docstore")

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    return Settings(
        data_dir=data_dir,
        log_file=log_file,
        lock_documents=lock_documents,
        set_policy=set_policy,
        host=host,
        port=port,
        owner=owner,
        debug_log_requests=debug_log_requests,
    )
