from __future__ import annotations

import pytest

from persistence import set_algebra
from persistence.errors import FileNotFound, ParseError


@pytest.fixture
def people(seed):
    seed("scott.json", {"firstname": "S", "lastname": "R", "email": "e"})
    seed("andrew.json", {"firstname": "A", "lastname": "R", "username": "u"})


def test_people_scenario(documents, people):
    assert set_algebra.union(documents, "scott.json", "andrew.json") == ["firstname", "lastname", "email", "username"]
    assert set_algebra.intersect(documents, "scott.json", "andrew.json") == ["firstname", "lastname"]
    assert set_algebra.difference(documents, "scott.json", "andrew.json") == ["email", "username"]


def test_union_has_same_content_both_ways(documents, people):
    ab = set_algebra.union(documents, "scott.json", "andrew.json")
    ba = set_algebra.union(documents, "andrew.json", "scott.json")
    assert set(ab) == set(ba)
    assert len(ab) == len(set(ab))
    assert ba == ["firstname", "lastname", "username", "email"]


def test_intersect_is_subset_and_idempotent(documents, people):
    first = set_algebra.intersect(documents, "scott.json", "andrew.json")
    assert set(first) <= {"firstname", "lastname", "email"} & {"firstname", "lastname", "username"}
    assert set_algebra.intersect(documents, "scott.json", "andrew.json") == first


def test_difference_of_identical_documents_is_empty(documents, seed):
    seed("a.json", {"x": 1, "y": "z"})
    seed("b.json", {"x": 1, "y": "z"})
    assert set_algebra.difference(documents, "a.json", "b.json") == []
    assert set_algebra.difference(documents, "a.json", "a.json") == []


def test_difference_counts_falsy_values_as_different():
    a = {"zero": 1, "empty": "x", "shared": 1}
    b = {"zero": 0, "empty": "", "shared": 2, "only_b": True}
    assert set_algebra.difference_keys(a, b) == ["zero", "empty", "only_b"]
    # a key falsy on both sides is reported from both sides
    assert set_algebra.difference_keys({"k": 0}, {"k": ""}) == ["k", "k"]


def test_intersect_follows_order_of_first_document():
    assert set_algebra.intersect_keys({"c": 1, "a": 1, "b": 1}, {"a": 1, "b": 1, "c": 1}) == ["c", "a", "b"]


def test_read_failures_propagate(documents, seed):
    seed("ok.json", {"a": 1})
    seed("broken.json", "{")
    with pytest.raises(FileNotFound):
        set_algebra.union(documents, "ok.json", "ghost.json")
    with pytest.raises(ParseError):
        set_algebra.intersect(documents, "broken.json", "ok.json")
    with pytest.raises(ParseError):
        set_algebra.difference(documents, "ok.json", "broken.json")
