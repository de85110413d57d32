"""Tests for the Chunk model and the internal ScoredChunk wrapper."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError as PydanticValidationError

from context_reorder.models import PRIORITY_SCORE, Chunk, ScoredChunk


class TestChunk:
    def test_minimal_chunk(self) -> None:
        c = Chunk(id="c1", text="hello", score=0.5)
        assert c.metadata == {}
        assert c.timestamp is None
        assert c.section_index is None
        assert c.source_id is None
        assert c.page is None

    def test_empty_text_allowed(self) -> None:
        assert Chunk(id="c1", text="", score=0.0).text == ""

    def test_int_score_accepted(self) -> None:
        assert Chunk(id="c1", text="t", score=1).score == 1

    @pytest.mark.parametrize("score", [math.nan, math.inf, -math.inf, "0.5", True])
    def test_bad_score_rejected(self, score: object) -> None:
        with pytest.raises(PydanticValidationError):
            Chunk(id="c1", text="t", score=score)

    @pytest.mark.parametrize("chunk_id", ["", 7, None])
    def test_bad_id_rejected(self, chunk_id: object) -> None:
        with pytest.raises(PydanticValidationError):
            Chunk(id=chunk_id, text="t", score=0.5)

    def test_non_string_text_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            Chunk(id="c1", text=42, score=0.5)

    def test_none_metadata_becomes_empty(self) -> None:
        assert Chunk(id="c1", text="t", score=0.5, metadata=None).metadata == {}

    def test_known_metadata_accessors(self) -> None:
        c = Chunk(
            id="c1",
            text="t",
            score=0.5,
            metadata={"timestamp": 1700000000, "section_index": 3, "source_id": "doc", "page": 12},
        )
        assert c.timestamp == 1700000000
        assert c.section_index == 3
        assert c.source_id == "doc"
        assert c.page == 12

    def test_unknown_metadata_preserved(self) -> None:
        c = Chunk(id="c1", text="t", score=0.5, metadata={"author": "kim", "tags": ["a"]})
        assert c.metadata == {"author": "kim", "tags": ["a"]}

    def test_none_known_key_means_absent(self) -> None:
        c = Chunk(id="c1", text="t", score=0.5, metadata={"timestamp": None})
        assert c.timestamp is None

    @pytest.mark.parametrize(
        "metadata",
        [
            {"timestamp": "yesterday"},
            {"section_index": math.nan},
            {"page": True},
            {"source_id": 5},
        ],
    )
    def test_wrongly_typed_known_key_rejected(self, metadata: dict) -> None:
        with pytest.raises(PydanticValidationError):
            Chunk(id="c1", text="t", score=0.5, metadata=metadata)

    def test_extra_fields_kept(self) -> None:
        c = Chunk(id="c1", text="t", score=0.5, source="kb", embedding_id=42)
        assert c.model_extra == {"source": "kb", "embedding_id": 42}
        assert c.model_dump()["source"] == "kb"

    def test_camel_case_keys_are_opaque(self) -> None:
        c = Chunk(id="c1", text="t", score=0.5, metadata={"sectionIndex": "intro", "sourceId": 3})
        assert c.section_index is None
        assert c.source_id is None
        assert c.metadata == {"sectionIndex": "intro", "sourceId": 3}

    def test_frozen(self) -> None:
        c = Chunk(id="c1", text="t", score=0.5)
        with pytest.raises(PydanticValidationError):
            c.score = 0.9  # type: ignore[misc]


class TestScoredChunk:
    def test_delegates_to_chunk(self) -> None:
        c = Chunk(id="c1", text="t", score=0.4, metadata={"page": 2})
        sc = ScoredChunk(chunk=c, priority_score=0.8, original_index=3)
        assert sc.score == 0.4
        assert sc.metadata == {"page": 2}

    def test_unwrap_returns_original_chunk(self) -> None:
        c = Chunk(id="c1", text="t", score=0.4)
        sc = ScoredChunk(chunk=c, priority_score=0.8, original_index=0)
        assert sc.unwrap() is c

    def test_unwrap_with_priority_score_copies(self) -> None:
        c = Chunk(id="c1", text="t", score=0.4, metadata={"page": 2})
        sc = ScoredChunk(chunk=c, priority_score=0.8, original_index=0)
        out = sc.unwrap(include_priority_score=True)
        assert out.metadata == {"page": 2, PRIORITY_SCORE: 0.8}
        assert c.metadata == {"page": 2}
        assert out.id == "c1"
        assert out.score == 0.4
