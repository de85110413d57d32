"""Offline metrics for judging a chunk ordering.

All functions are pure and independent of the pipeline.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Union

from context_reorder.models import PRIORITY_SCORE, Chunk, ScoredChunk, is_number


def _contains(text: str, key_point: str, case_insensitive: bool) -> bool:
    if case_insensitive:
        return key_point.lower() in text.lower()
    return key_point in text


def key_point_recall(
    key_points: Sequence[str],
    texts: Sequence[str],
    *,
    case_insensitive: bool = False,
) -> float:
    """Fraction of key points found as a substring of any text."""
    if not key_points:
        return 0.0
    found = sum(1 for kp in key_points if any(_contains(t, kp, case_insensitive) for t in texts))
    return found / len(key_points)


def key_point_precision(
    key_points: Sequence[str],
    texts: Sequence[str],
    *,
    case_insensitive: bool = False,
) -> float:
    """Fraction of texts containing at least one key point."""
    if not texts:
        return 0.0
    matching = sum(1 for t in texts if any(_contains(t, kp, case_insensitive) for kp in key_points))
    return matching / len(texts)


def _priority_of(chunk: Union[ScoredChunk, Chunk]) -> float:
    if isinstance(chunk, ScoredChunk):
        return chunk.priority_score
    value = chunk.metadata.get(PRIORITY_SCORE)
    return float(value) if is_number(value) else 0.0


def position_effectiveness(chunks: Sequence[Union[ScoredChunk, Chunk]]) -> float:
    """U-shaped weighted average of priority scores.

    Position ``i`` of ``n`` weighs ``((i - mid) / mid) ** 2`` with
    ``mid = (n - 1) / 2``, so the edges count most and the center not at all.
    Public chunks are read through ``metadata["priority_score"]``, as produced
    with ``include_priority_score=True``; a chunk without one counts as 0.
    """
    n = len(chunks)
    if n == 0:
        return 0.0
    if n == 1:
        return _priority_of(chunks[0])

    mid = (n - 1) / 2
    weighted = 0.0
    total = 0.0
    for i, chunk in enumerate(chunks):
        weight = ((i - mid) / mid) ** 2
        weighted += _priority_of(chunk) * weight
        total += weight
    return weighted / total


def _dcg(scores: Sequence[float]) -> float:
    return sum(score / math.log2(i + 2) for i, score in enumerate(scores))


def ndcg(scores: Sequence[float]) -> float:
    """Normalized discounted cumulative gain of *scores* in their given order.

    Scores act as relevance labels and are assumed non-negative.  Returns 0
    when the ideal gain is 0.
    """
    if not scores:
        return 0.0
    ideal = _dcg(sorted(scores, reverse=True))
    if ideal == 0:
        return 0.0
    return _dcg(scores) / ideal
