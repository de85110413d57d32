"""Chronological strategy — oldest first, undated chunks last."""

from __future__ import annotations

from collections.abc import Sequence

from context_reorder.models import ScoredChunk


def _timeline_key(chunk: ScoredChunk) -> tuple:
    ts = chunk.chunk.timestamp
    if ts is None:
        return (1, 0.0, 0.0, chunk.original_index)
    return (0, ts, -chunk.score, chunk.original_index)


def chronological(chunks: Sequence[ScoredChunk]) -> list[ScoredChunk]:
    """Sort by ``timestamp`` ascending.

    Equal timestamps break on raw ``score`` descending, not ``priority_score``,
    since the priority already folds in the time weight that is the primary
    key here.  Chunks without a timestamp follow in input order.
    """
    return sorted(chunks, key=_timeline_key)
