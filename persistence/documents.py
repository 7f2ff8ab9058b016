from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from json_store import dumps_compact, loads_object

from .errors import FileAlreadyExists, InvalidKey, ParseError, ValidationError
from .interfaces import LockRegistry, StorageBackend
from .locks import NullLockRegistry

logger = logging.getLogger(__name__)

MISSING: Any = object()


def is_invalid_value(value: Any) -> bool:
    """
    True for values that count as "no usable value" when looking a key up:
    absent (MISSING), None, False, zero and the empty string.

    Empty lists and objects are valid values.
    """
    if value is MISSING or value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return value == ""
    return False


class SetPolicy(str, Enum):
    # set() creates the key when it is absent
    PERMISSIVE = "permissive"
    # set() only overwrites keys that are already present
    STRICT = "strict"


class DocumentStore:
    """
    Key lookup/update inside single JSON documents, plus document lifecycle.

    Nothing is cached: every call re-reads the backing document. Mutations are
    a read followed by a separate write; with the default NullLockRegistry two
    concurrent mutations of one document race and the later write wins.
    """

    def __init__(
        self,
        backend: StorageBackend,
        *,
        locks: LockRegistry | None = None,
        set_policy: SetPolicy = SetPolicy.PERMISSIVE,
    ):
        self._backend = backend
        self._locks = locks if locks is not None else NullLockRegistry()
        self._set_policy = SetPolicy(set_policy)

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def set_policy(self) -> SetPolicy:
        return self._set_policy

    def load(self, name: str) -> dict[str, Any]:
        raw = self._backend.read_document(name)
        try:
            return loads_object(raw)
        except ValueError as e:
            raise ParseError(f"Error reading file {name}: {e}") from e

    def _save(self, name: str, doc: Mapping[str, Any]) -> None:
        try:
            text = dumps_compact(doc)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Error writing file {name}: {e}") from e
        self._backend.write_document(name, text)

    def get(self, name: str, key: str | None = None) -> Any:
        """
        Return doc[key], or the whole document as JSON text when no key is given.
        """
        doc = self.load(name)
        if not key:
            return dumps_compact(doc)
        value = doc.get(key, MISSING)
        if is_invalid_value(value):
            raise InvalidKey(f'Error invalid key "{key}"')
        return value

    def set(self, name: str, key: str, value: Any) -> None:
        with self._locks.lock_for(name):
            doc = self.load(name)
            if self._set_policy is SetPolicy.STRICT and key not in doc:
                raise InvalidKey(f'Error invalid key "{key}"')
            doc[key] = value
            self._save(name, doc)

    def remove(self, name: str, key: str) -> None:
        with self._locks.lock_for(name):
            doc = self.load(name)
            if is_invalid_value(doc.get(key, MISSING)):
                raise InvalidKey(f'Error invalid key "{key}"')
            del doc[key]
            self._save(name, doc)

    def create_file(self, name: str, content: Mapping[str, Any] | None = None) -> None:
        if content is None:
            content = {}
        if not isinstance(content, Mapping):
            raise ValidationError(f"Error creating file {name}: content must be a JSON object")
        with self._locks.lock_for(name):
            # Existence is decided from the listing, by exact name.
            if name in self._backend.list_documents():
                raise FileAlreadyExists(f"Error creating file. {name} already exists")
            self._save(name, content)

    def delete_file(self, name: str) -> None:
        with self._locks.lock_for(name):
            self._backend.delete_document(name)
