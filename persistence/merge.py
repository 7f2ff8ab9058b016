from __future__ import annotations

import logging
from typing import Any

from json_store import dumps_compact

from .documents import DocumentStore
from .errors import FileNotFound, IOFailure, ParseError, StoreError

logger = logging.getLogger(__name__)

MERGE_DOCUMENT = "merge.json"


def is_mergeable(name: str) -> bool:
    # Substring tests on purpose: "a.json.bak" is merged, "mypackage.json" is not.
    return ".json" in name and "package" not in name


def base_name(name: str) -> str:
    return name.split(".")[0]


def merge_data(store: DocumentStore) -> dict[str, Any]:
    """
    Read every mergeable document and write them as one object to merge.json,
    keyed by base name ("user.json" -> "user").

    All documents are read and parsed before anything is written; the first
    failure aborts the merge and merge.json is left untouched.
    """
    names = [n for n in store.backend.list_documents() if is_mergeable(n)]
    merged: dict[str, Any] = {}
    for name in names:
        try:
            merged[base_name(name)] = store.load(name)
        except ParseError:
            raise
        except FileNotFound as e:
            # listed a moment ago, gone now
            raise IOFailure(f"Error merging json files: {name} disappeared during merge") from e
        except StoreError as e:
            raise IOFailure(f"Error merging json files: {e.message}") from e
    store.backend.write_document(MERGE_DOCUMENT, dumps_compact(merged))
    logger.debug("MERGE: %d documents into %s", len(names), MERGE_DOCUMENT)
    return merged
