"""Score-spread strategy — strongest chunks at both edges of the context.

LLMs attend most to the start and end of a long context and least to the
middle.  Ranking by priority and alternating placement front/back puts the
weakest chunks in the middle::

    rank:      0  1  2  3  4
    position:  0  4  1  3  2
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from context_reorder.models import ScoredChunk


def rank_by_priority(chunks: Sequence[ScoredChunk]) -> list[ScoredChunk]:
    """Sort by ``priority_score`` descending, ``original_index`` ascending."""
    return sorted(chunks, key=lambda c: (-c.priority_score, c.original_index))


def _interleave(ranked: list[ScoredChunk]) -> list[ScoredChunk]:
    front = ranked[0::2]
    back = ranked[1::2]
    return front + back[::-1]


def score_spread(
    chunks: Sequence[ScoredChunk],
    start_count: Optional[int] = None,
    end_count: Optional[int] = None,
) -> list[ScoredChunk]:
    """Reorder chunks so high-priority ones land at the start and end.

    With both *start_count* and *end_count*, the top ``start_count`` ranks go
    first and the next ``end_count`` ranks go last, each in rank order, with
    the rest between them.  If the two counts cover every chunk, or either is
    missing, ranks alternate between front and back instead.
    """
    if not chunks:
        return []

    ranked = rank_by_priority(chunks)

    if start_count is None or end_count is None or start_count + end_count >= len(ranked):
        return _interleave(ranked)

    head = ranked[:start_count]
    tail = ranked[start_count : start_count + end_count]
    middle = ranked[start_count + end_count :]
    return head + middle + tail
