from __future__ import annotations

import logging
import os
from pathlib import Path

from json_store import atomic_write_text, is_temp_name

from .errors import FileNotFound, IOFailure, ParseError, ValidationError
from .interfaces import StorageBackend
from .paths import ensure_dir

logger = logging.getLogger(__name__)


class DiskStorageBackend(StorageBackend):
    """
    Stores each document as one file directly under a data directory.

    - Document names are bare file names; anything that could escape the
      directory is rejected before touching the disk.
    - Writes are atomic (temp file + replace), so readers see either the old
      or the new content.
    - OSError never leaves this class; it is wrapped in a StoreError.
    """

    def __init__(self, root: Path):
        self._root = ensure_dir(Path(root))

    def _path(self, name: str) -> Path:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Document name is required")
        if name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
            raise ValidationError(f"Invalid document name {name!r}")
        if is_temp_name(name):
            raise ValidationError(f"Invalid document name {name!r}: reserved for temporary files")
        return self._root / name

    def read_document(self, name: str) -> str:
        path = self._path(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise FileNotFound(f"Error reading file {name}") from e
        except UnicodeDecodeError as e:
            raise ParseError(f"Error reading file {name}: content is not UTF-8 text") from e
        except OSError as e:
            logger.warning("READ %s failed: %r", path, e)
            raise IOFailure(f"Error reading file {name}: {e.strerror or e}") from e

    def write_document(self, name: str, text: str) -> None:
        path = self._path(name)
        try:
            atomic_write_text(path, text)
        except OSError as e:
            logger.warning("WRITE %s failed: %r", path, e)
            raise IOFailure(f"Error writing file {name}: {e.strerror or e}") from e
        logger.debug("WRITE %s (%d chars)", path, len(text))

    def delete_document(self, name: str) -> None:
        path = self._path(name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise FileNotFound(f"Error deleting file. {name} does not exist") from e
        except OSError as e:
            logger.warning("DELETE %s failed: %r", path, e)
            raise IOFailure(f"Error deleting file {name}: {e.strerror or e}") from e

    def list_documents(self) -> list[str]:
        try:
            with os.scandir(self._root) as it:
                names = [entry.name for entry in it if entry.is_file() and not is_temp_name(entry.name)]
        except OSError as e:
            logger.warning("LIST %s failed: %r", self._root, e)
            raise IOFailure(f"Error listing files: {e.strerror or e}") from e
        return sorted(names)
