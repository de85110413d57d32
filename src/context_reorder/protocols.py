"""Collaborator contracts — re-scoring, token counting, custom ordering."""

from __future__ import annotations

from typing import Callable, Protocol, Union, runtime_checkable

from context_reorder.models import Chunk

TokenCounterFn = Callable[[str], int]
"""Synchronous text → non-negative token count.  Required when ``max_tokens`` is set."""

CustomComparator = Callable[[Chunk, Chunk], Union[int, float]]
"""Two-argument comparator for the ``custom`` strategy (negative = ``a`` first)."""

RerankerErrorHandler = Callable[[Exception], None]


@runtime_checkable
class IReranker(Protocol):
    """Protocol for external re-scoring backends (cross-encoders, remote APIs).

    The reorderer awaits exactly one ``rerank`` call per reorder when a query
    is supplied.  Failures are reported to ``on_reranker_error`` and the
    original scores are used instead.
    """

    async def rerank(self, chunks: list[Chunk], query: str) -> list[Chunk]:
        """Return chunks with refined ``score`` values for *query*.

        Args:
            chunks: Chunks to re-score.
            query: The user query the chunks were retrieved for.

        Returns:
            Re-scored chunks, normally one per input chunk.
        """
        ...
