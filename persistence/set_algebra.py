from __future__ import annotations

from typing import Any, Mapping

from .documents import MISSING, DocumentStore, is_invalid_value


def union_keys(a: Mapping[str, Any], b: Mapping[str, Any]) -> list[str]:
    """Keys of `a` in order, then keys of `b` not seen yet."""
    keys = list(a)
    seen = set(keys)
    for key in b:
        if key not in seen:
            seen.add(key)
            keys.append(key)
    return keys


def intersect_keys(a: Mapping[str, Any], b: Mapping[str, Any]) -> list[str]:
    """Keys present in both, in the order of `a`."""
    return [key for key in a if key in b]


def difference_keys(a: Mapping[str, Any], b: Mapping[str, Any]) -> list[str]:
    """
    Keys of `a` whose value in `b` is invalid, then keys of `b` whose value in
    `a` is invalid.

    "Invalid" is the is_invalid_value rule, so a key present in both documents
    but holding 0, "" or false on one side is still reported.
    """
    left = [key for key in a if is_invalid_value(b.get(key, MISSING))]
    right = [key for key in b if is_invalid_value(a.get(key, MISSING))]
    return left + right


def union(store: DocumentStore, file_a: str, file_b: str) -> list[str]:
    return union_keys(store.load(file_a), store.load(file_b))


def intersect(store: DocumentStore, file_a: str, file_b: str) -> list[str]:
    return intersect_keys(store.load(file_a), store.load(file_b))


def difference(store: DocumentStore, file_a: str, file_b: str) -> list[str]:
    return difference_keys(store.load(file_a), store.load(file_b))
