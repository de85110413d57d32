"""Composite priority scoring.

``priority = score * w.similarity + norm(timestamp) * w.time + norm(section_index) * w.section``

Timestamps and section indexes are min-max normalized across the chunks of
one call.  Chunks without the field are left out of the min/max and
contribute 0; a field with a single distinct value normalizes to 0 everywhere.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

from context_reorder.config import ScoringWeights
from context_reorder.models import Chunk, ScoredChunk


def _min_max(values: Iterable[Optional[float]]) -> tuple[float, float]:
    defined = [v for v in values if v is not None]
    if not defined:
        return 0.0, 0.0
    return min(defined), max(defined)


def _normalize(value: Optional[float], lo: float, hi: float) -> float:
    if value is None or hi == lo:
        return 0.0
    return (value - lo) / (hi - lo)


def score_chunks(chunks: Sequence[Chunk], weights: ScoringWeights) -> list[ScoredChunk]:
    """Wrap each chunk with its priority score and 0-based input position."""
    ts_lo, ts_hi = _min_max(c.timestamp for c in chunks)
    sec_lo, sec_hi = _min_max(c.section_index for c in chunks)

    scored: list[ScoredChunk] = []
    for index, chunk in enumerate(chunks):
        priority = (
            chunk.score * weights.similarity
            + _normalize(chunk.timestamp, ts_lo, ts_hi) * weights.time
            + _normalize(chunk.section_index, sec_lo, sec_hi) * weights.section
        )
        scored.append(ScoredChunk(chunk=chunk, priority_score=priority, original_index=index))
    return scored
