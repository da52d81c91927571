"""Query Matching - verifies the partial-mapping predicate."""

import pytest

from recordkit.infrastructure.query_matching import matches_query


def test_empty_query_matches_everything():
    assert matches_query({"a": 1}, None)
    assert matches_query({"a": 1}, {})
    assert matches_query({}, {})


def test_all_keys_must_match():
    row = {"id": 1, "x": 1, "y": 2}
    assert matches_query(row, {"x": 1})
    assert matches_query(row, {"x": 1, "y": 2})
    assert not matches_query(row, {"x": 1, "y": 3})


def test_missing_key_does_not_match_none():
    assert not matches_query({"a": 1}, {"b": None})


def test_nested_mappings_match_as_subsets():
    row = {"meta": {"owner": "ana", "tags": ["x"]}}
    assert matches_query(row, {"meta": {"owner": "ana"}})
    assert not matches_query(row, {"meta": {"owner": "bo"}})
    assert not matches_query({"meta": "flat"}, {"meta": {"owner": "ana"}})


def test_non_mapping_query_raises_type_error():
    with pytest.raises(TypeError, match="str"):
        matches_query({"id": 1}, "id")
    with pytest.raises(TypeError):
        matches_query({"id": 1}, [("id", 1)])
