from __future__ import annotations

import pytest

from persistence.documents import SetPolicy
from settings import get_settings


def test_defaults_live_under_project_root(sandbox_project):
    s = get_settings()
    assert s.data_dir == sandbox_project / "data"
    assert s.log_file == sandbox_project / "log.txt"
    assert s.lock_documents is False
    assert s.set_policy is SetPolicy.PERMISSIVE
    assert s.port == 5000


def test_environment_overrides(sandbox_project, monkeypatch, tmp_path):
    monkeypatch.setenv("STORE_DATA_DIR", str(tmp_path / "docs"))
    monkeypatch.setenv("STORE_LOG_FILE", str(tmp_path / "audit.log"))
    monkeypatch.setenv("STORE_LOCK_DOCUMENTS", "yes")
    monkeypatch.setenv("STORE_SET_POLICY", "Strict")
    monkeypatch.setenv("STORE_PORT", "8080")

    s = get_settings()
    assert s.data_dir == tmp_path / "docs"
    assert s.log_file == tmp_path / "audit.log"
    assert s.lock_documents is True
    assert s.set_policy is SetPolicy.STRICT
    assert s.port == 8080


def test_unknown_set_policy_is_rejected(sandbox_project, monkeypatch):
    monkeypatch.setenv("STORE_SET_POLICY", "lenient")
    with pytest.raises(ValueError):
        get_settings()
