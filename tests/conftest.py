"""Shared fixtures for context-reorder tests."""

from __future__ import annotations

import pytest

from context_reorder.models import Chunk
from tests.fakes.chunk_factory import make_chunk


@pytest.fixture
def example_chunks() -> list[Chunk]:
    """Five chunks with distinct scores, ranked 1, 3, 5, 2, 4."""
    return [
        make_chunk("1", 0.95),
        make_chunk("2", 0.72),
        make_chunk("3", 0.85),
        make_chunk("4", 0.60),
        make_chunk("5", 0.78),
    ]


@pytest.fixture
def dated_chunks() -> list[Chunk]:
    """Chunks spread over two documents with timestamps and section indexes."""
    return [
        make_chunk("a1", 0.40, timestamp=300, section_index=2, source_id="doc-a"),
        make_chunk("b1", 0.90, timestamp=100, section_index=5, source_id="doc-b"),
        make_chunk("a2", 0.70, timestamp=200, section_index=0, source_id="doc-a"),
        make_chunk("b2", 0.20, timestamp=100, section_index=1, source_id="doc-b"),
        make_chunk("x1", 0.55),
    ]
