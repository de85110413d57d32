"""Reorderer — runs the chunk reordering pipeline.

Stages, in order, each skipped when its option is unset:

1. drop chunks scoring below ``min_score``
2. deduplicate (exact or fuzzy)
3. return early if nothing is left
4. validate chunk structure
5. compute priority scores
6. apply the strategy, per ``group_by`` group when set
7. unwrap to public chunks (optionally exposing ``priority_score``)
8. cut at the ``max_tokens`` budget
9. keep the first ``top_k``

Three entry points share the pipeline: ``reorder_sync``, ``reorder`` (awaits
the optional reranker first) and ``reorder_stream``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional

from context_reorder.config import ReorderConfig, build_config, merge_config
from context_reorder.deduplicator import deduplicate_chunks
from context_reorder.exceptions import ValidationError
from context_reorder.grouper import group_chunks, order_groups
from context_reorder.models import Chunk, ScoredChunk, is_number
from context_reorder.protocols import TokenCounterFn
from context_reorder.scorer import score_chunks
from context_reorder.strategies import apply_strategy
from context_reorder.validator import validate_chunks

if TYPE_CHECKING:
    from context_reorder.core.config import AppSettings

log = logging.getLogger(__name__)


def _apply_token_budget(
    chunks: list[Chunk], max_tokens: float, token_counter: TokenCounterFn
) -> list[Chunk]:
    kept: list[Chunk] = []
    total = 0
    for chunk in chunks:
        tokens = token_counter(chunk.text)
        if total + tokens > max_tokens:
            break
        total += tokens
        kept.append(chunk)
    return kept


def run_pipeline(chunks: Sequence[Chunk], config: ReorderConfig) -> list[Chunk]:
    """Run stages 1–9 over *chunks* with an already resolved *config*."""
    working = list(chunks)
    received = len(working)

    if config.min_score is not None:
        # a missing or non-numeric score never clears the bar
        working = [
            c
            for c in working
            if is_number(getattr(c, "score", None)) and c.score >= config.min_score
        ]

    if config.deduplicate:
        working = deduplicate_chunks(
            working,
            threshold=config.deduplicate_threshold,
            keep=config.deduplicate_keep,
        )

    if not working:
        log.debug("reorder: nothing left after filtering (received=%d)", received)
        return []

    validate_chunks(working)

    scored = score_chunks(working, config.weights)

    ordered: list[ScoredChunk]
    if config.group_by:
        groups = order_groups(group_chunks(scored, config.group_by))
        ordered = [c for _, members in groups for c in apply_strategy(members, config)]
    else:
        ordered = apply_strategy(scored, config)

    output = [c.unwrap(include_priority_score=config.include_priority_score) for c in ordered]

    if config.max_tokens is not None and config.token_counter is not None:
        output = _apply_token_budget(output, config.max_tokens, config.token_counter)

    if config.top_k is not None and len(output) > config.top_k:
        output = output[: config.top_k]

    log.debug(
        "reorder: strategy=%s received=%d scored=%d returned=%d",
        config.strategy,
        received,
        len(scored),
        len(output),
    )
    return output


class Reorderer:
    """Reorders retrieved chunks so the strongest sit at the edges of the context.

    The configuration is resolved and validated once, here, and is frozen
    afterwards, so one instance can serve concurrent calls.  Keyword
    overrides on each call derive a fresh, re-validated configuration::

        reorderer = Reorderer(strategy="score_spread", top_k=8)
        ordered = reorderer.reorder_sync(chunks, min_score=0.3)
        ordered = await reorderer.reorder(chunks, query="...", weights={"time": 0.2})

    Raises:
        ValidationError: If the configuration is invalid.
    """

    def __init__(
        self,
        config: ReorderConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> None:
        self._config = build_config(config, **options)

    @classmethod
    def from_settings(cls, settings: Optional[AppSettings] = None, **options: Any) -> Reorderer:
        """Build a reorderer from environment-driven ``AppSettings``."""
        from context_reorder.core.config import AppSettings

        settings = settings or AppSettings()
        return cls(settings.to_reorder_config(**options))

    def get_config(self) -> ReorderConfig:
        """Return an independent copy of the resolved configuration."""
        return self._config.model_copy(update={"weights": self._config.weights.model_copy()})

    def _resolve(self, overrides: Mapping[str, Any]) -> ReorderConfig:
        return merge_config(self._config, overrides)

    def reorder_sync(self, chunks: Sequence[Chunk], **overrides: Any) -> list[Chunk]:
        """Reorder without a reranker.

        Raises:
            ValidationError: If the overrides carry a ``reranker`` (use
                ``reorder``) or produce an invalid configuration, or a chunk
                is malformed.
        """
        if overrides.get("reranker") is not None:
            raise ValidationError(
                "reranker cannot be used with reorder_sync(); use the async reorder() instead"
            )
        return run_pipeline(chunks, self._resolve(overrides))

    async def reorder(
        self,
        chunks: Sequence[Chunk],
        query: Optional[str] = None,
        **overrides: Any,
    ) -> list[Chunk]:
        """Reorder, first letting the configured reranker refine scores.

        The reranker runs only when a non-empty *query* is given.  If it
        raises, the error goes to ``on_reranker_error`` and the original
        chunks are used; a reranker failure never fails the call.
        """
        config = self._resolve(overrides)

        if not chunks:
            return []

        working: Sequence[Chunk] = chunks
        if config.reranker is not None and query:
            try:
                working = await config.reranker.rerank(list(chunks), query)
            except Exception as e:
                log.debug("Reranker failed, using original scores: %s", e)
                if config.on_reranker_error is not None:
                    config.on_reranker_error(e)

        return run_pipeline(working, config)

    async def reorder_stream(
        self,
        chunks: Sequence[Chunk],
        query: Optional[str] = None,
        **overrides: Any,
    ) -> AsyncIterator[Chunk]:
        """Yield the result of ``reorder`` one chunk at a time.

        The full result is computed before the first chunk is yielded, so this
        saves neither memory nor time-to-first-chunk over ``reorder``.
        """
        for chunk in await self.reorder(chunks, query, **overrides):
            yield chunk
