"""Tests for metadata grouping."""

from __future__ import annotations

from context_reorder.grouper import DEFAULT_GROUP, group_chunks, group_key, order_groups
from tests.fakes.chunk_factory import make_chunk, make_scored


class TestGroupKey:
    def test_present_value(self) -> None:
        assert group_key({"source_id": "doc"}, "source_id") == "doc"

    def test_coerced_to_string(self) -> None:
        assert group_key({"page": 3}, "page") == "3"

    def test_missing_or_none_uses_default(self) -> None:
        assert group_key({}, "page") == DEFAULT_GROUP
        assert group_key({"page": None}, "page") == DEFAULT_GROUP
        assert group_key({}, "page", default="") == ""


class TestGroupChunks:
    def test_first_seen_order(self, dated_chunks) -> None:
        groups = group_chunks(make_scored(dated_chunks), "source_id")
        assert list(groups) == ["doc-a", "doc-b", DEFAULT_GROUP]
        assert [c.chunk.id for c in groups["doc-a"]] == ["a1", "a2"]
        assert [c.chunk.id for c in groups["doc-b"]] == ["b1", "b2"]
        assert [c.chunk.id for c in groups[DEFAULT_GROUP]] == ["x1"]

    def test_empty(self) -> None:
        assert group_chunks([], "source_id") == {}


class TestOrderGroups:
    def test_by_max_priority_descending(self, dated_chunks) -> None:
        groups = order_groups(group_chunks(make_scored(dated_chunks), "source_id"))
        assert [name for name, _ in groups] == ["doc-b", "doc-a", DEFAULT_GROUP]

    def test_ties_keep_first_seen_order(self) -> None:
        chunks = [
            make_chunk("1", 0.5, page=2),
            make_chunk("2", 0.5, page=1),
            make_chunk("3", 0.9, page=3),
        ]
        groups = order_groups(group_chunks(make_scored(chunks), "page"))
        assert [name for name, _ in groups] == ["3", "2", "1"]
