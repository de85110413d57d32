"""Exact and near-duplicate chunk removal.

Two modes, picked by ``threshold``:

- ``threshold >= 1.0`` (default): exact text match via dict lookup, O(n).
- ``threshold < 1.0``: character-trigram Jaccard similarity, O(n²).

Fuzzy mode is single-pass greedy clustering.  Each chunk not yet merged opens
a cluster and absorbs every later unmerged chunk whose similarity to the
*opener* reaches the threshold.  Clusters are not transitively closed: if
A≈B and B≈C but A≉C, B joins A's cluster and C stays separate.  Callers rely
on this exact greedy result, so it is kept as an approximation on purpose.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from context_reorder.exceptions import ValidationError
from context_reorder.models import Chunk, KeepPolicy

log = logging.getLogger(__name__)

_KEEP_POLICIES = ("highest_score", "first", "last")


def _trigrams(text: str) -> set[str]:
    return {text[i : i + 3] for i in range(len(text) - 2)}


def trigram_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the character-trigram sets of *a* and *b*.

    Returns 1.0 for identical strings.  A string shorter than 3 characters has
    no trigrams, so it scores 0.0 against any different string, even one that
    contains it.
    """
    if a == b:
        return 1.0
    tri_a = _trigrams(a)
    tri_b = _trigrams(b)
    if not tri_a or not tri_b:
        return 0.0
    inter = len(tri_a & tri_b)
    union = len(tri_a) + len(tri_b) - inter
    return inter / union if union else 0.0


def _should_replace(
    existing: Chunk,
    existing_index: int,
    candidate: Chunk,
    candidate_index: int,
    keep: KeepPolicy,
) -> bool:
    if keep == "highest_score":
        return candidate.score > existing.score
    if keep == "first":
        return candidate_index < existing_index
    return candidate_index > existing_index


def deduplicate_chunks(
    chunks: Sequence[Chunk],
    *,
    threshold: float = 1.0,
    keep: KeepPolicy = "highest_score",
) -> list[Chunk]:
    """Remove duplicate or near-duplicate chunks, preserving input order.

    Args:
        chunks: Chunks to deduplicate.
        threshold: Similarity at or above which two chunks are duplicates.
        keep: Which duplicate survives — ``highest_score`` (ties keep the
            earlier chunk), ``first`` or ``last``.

    Returns:
        A new list of surviving chunks.

    Raises:
        ValidationError: If *threshold* or *keep* is out of range.
    """
    if keep not in _KEEP_POLICIES:
        raise ValidationError(
            f"Invalid deduplicate keep policy {keep!r}. Choose from: {', '.join(_KEEP_POLICIES)}"
        )
    if not 0.0 <= threshold <= 1.0:
        raise ValidationError("deduplicate threshold must be between 0 and 1")

    if len(chunks) <= 1:
        return list(chunks)

    if threshold >= 1.0:
        out = _dedup_exact(chunks, keep)
        log.debug("dedup.exact: kept=%d from=%d", len(out), len(chunks))
    else:
        out = _dedup_fuzzy(chunks, threshold, keep)
        log.debug("dedup.fuzzy: kept=%d from=%d (thr=%.2f)", len(out), len(chunks), threshold)
    return out


def _dedup_exact(chunks: Sequence[Chunk], keep: KeepPolicy) -> list[Chunk]:
    seen: dict[str, tuple[int, Chunk]] = {}
    for i, chunk in enumerate(chunks):
        existing = seen.get(chunk.text)
        if existing is None or _should_replace(existing[1], existing[0], chunk, i, keep):
            seen[chunk.text] = (i, chunk)
    # Each survivor sits at its own input position
    return [chunk for _, chunk in sorted(seen.values(), key=lambda entry: entry[0])]


def _dedup_fuzzy(chunks: Sequence[Chunk], threshold: float, keep: KeepPolicy) -> list[Chunk]:
    n = len(chunks)
    removed = [False] * n
    # cluster opener index -> (representative index, representative)
    survivors: dict[int, tuple[int, Chunk]] = {}

    for i in range(n):
        if removed[i]:
            continue
        rep_index, rep = i, chunks[i]
        for j in range(i + 1, n):
            if removed[j]:
                continue
            if trigram_similarity(chunks[i].text, chunks[j].text) >= threshold:
                if _should_replace(rep, rep_index, chunks[j], j, keep):
                    rep_index, rep = j, chunks[j]
                removed[j] = True
        survivors[i] = (rep_index, rep)

    # Clusters keep the slot of their opener
    return [survivors[i][1] for i in sorted(survivors)]
