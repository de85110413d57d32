"""Custom strategy — order by a caller-supplied comparator."""

from __future__ import annotations

import functools
from collections.abc import Sequence

from context_reorder.models import ScoredChunk
from context_reorder.protocols import CustomComparator


def custom_sort(chunks: Sequence[ScoredChunk], comparator: CustomComparator) -> list[ScoredChunk]:
    """Stable sort using ``comparator(a, b)`` over the public chunks.

    The comparator sees plain ``Chunk`` objects, not the scored wrappers, so
    it can order by ``score``, ``id``, ``text`` or metadata but not by the
    computed ``priority_score``.
    """
    key = functools.cmp_to_key(lambda a, b: comparator(a.chunk, b.chunk))
    return sorted(chunks, key=key)
