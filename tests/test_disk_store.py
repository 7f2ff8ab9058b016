from __future__ import annotations

import pytest

from persistence.disk_store import DiskStorageBackend
from persistence.errors import FileNotFound, IOFailure, ValidationError


def test_write_read_list_delete(data_dir):
    backend = DiskStorageBackend(data_dir)
    backend.write_document("b.json", "{}")
    backend.write_document("a.json", '{"x":1}')

    assert backend.read_document("a.json") == '{"x":1}'
    assert backend.list_documents() == ["a.json", "b.json"]

    backend.delete_document("a.json")
    assert backend.list_documents() == ["b.json"]


def test_missing_document_is_file_not_found(data_dir):
    backend = DiskStorageBackend(data_dir)
    with pytest.raises(FileNotFound):
        backend.read_document("nope.json")
    with pytest.raises(FileNotFound) as excinfo:
        backend.delete_document("nope.json")
    assert excinfo.value.message == "Error deleting file. nope.json does not exist"


def test_other_os_errors_are_io_failures(data_dir):
    (data_dir / "folder.json").mkdir()
    backend = DiskStorageBackend(data_dir)
    with pytest.raises(IOFailure):
        backend.read_document("folder.json")


def test_listing_skips_directories_and_temp_files(data_dir):
    (data_dir / "sub").mkdir()
    (data_dir / ".~a.json.123.tmp").write_text("{", encoding="utf-8")
    (data_dir / "a.json").write_text("{}", encoding="utf-8")

    assert DiskStorageBackend(data_dir).list_documents() == ["a.json"]


@pytest.mark.parametrize("name", ["", "   ", ".", "..", "../escape.json", "sub/a.json", "a\\b.json"])
def test_names_outside_the_data_dir_are_rejected(data_dir, name):
    backend = DiskStorageBackend(data_dir)
    with pytest.raises(ValidationError):
        backend.write_document(name, "{}")
    assert not (data_dir.parent / "escape.json").exists()


def test_root_is_created(tmp_path):
    root = tmp_path / "nested" / "data"
    backend = DiskStorageBackend(root)
    assert root.is_dir()
    assert backend.list_documents() == []


def test_temp_file_names_are_reserved(data_dir):
    backend = DiskStorageBackend(data_dir)
    for call in (
        lambda: backend.write_document(".~x.json.1.tmp", "{}"),
        lambda: backend.read_document(".~x.json.1.tmp"),
        lambda: backend.delete_document(".~x.json.1.tmp"),
    ):
        with pytest.raises(ValidationError):
            call()
    assert backend.list_documents() == []
