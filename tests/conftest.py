from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Any, Callable


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    def _data_dir() -> Path:
        return tmp_path / "data"

    def _log_file() -> Path:
        return tmp_path / "log.txt"

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.setattr(paths, "data_dir", _data_dir)
    monkeypatch.setattr(paths, "log_file", _log_file)
    for name in ("STORE_DATA_DIR", "STORE_LOG_FILE", "STORE_LOCK_DOCUMENTS", "STORE_SET_POLICY"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def data_dir(sandbox_project: Path) -> Path:
    p = sandbox_project / "data"
    p.mkdir(parents=True, exist_ok=True)
    return p


@pytest.fixture
def seed(data_dir: Path) -> Callable[..., Path]:
    """
    Write raw documents straight to the data dir: seed("user.json", {"a": 1}).
    Strings are written verbatim so tests can plant broken JSON.
    """

    def _seed(name: str, content: Any) -> Path:
        path = data_dir / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _seed


@pytest.fixture
def documents(data_dir: Path):
    from persistence.disk_store import DiskStorageBackend
    from persistence.documents import DocumentStore

    return DocumentStore(DiskStorageBackend(data_dir))


@pytest.fixture
def audit():
    from persistence.audit import MemoryAuditLog

    return MemoryAuditLog()


@pytest.fixture
def store(documents, audit):
    from persistence.repositories import AuditedStore

    return AuditedStore(documents, audit)


@pytest.fixture
def settings(sandbox_project: Path):
    from settings import get_settings

    return get_settings()


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient

    import app as app_module

    return TestClient(app_module.create_app(settings))
