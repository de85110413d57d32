"""Reordering strategies and the dispatcher the pipeline uses.

Each strategy is a pure function over a list of ``ScoredChunk`` and returns
a new list.  Every sort is stable with ``original_index`` as the final
tie-breaker.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Callable

from context_reorder.exceptions import ValidationError
from context_reorder.models import ScoredChunk
from context_reorder.strategies.chronological import chronological
from context_reorder.strategies.custom import custom_sort
from context_reorder.strategies.preserve_order import preserve_order
from context_reorder.strategies.score_spread import rank_by_priority, score_spread

if TYPE_CHECKING:
    from context_reorder.config import ReorderConfig

__all__ = [
    "STRATEGIES",
    "apply_strategy",
    "chronological",
    "custom_sort",
    "preserve_order",
    "rank_by_priority",
    "score_spread",
]

STRATEGIES: dict[str, Callable[[Sequence[ScoredChunk], ReorderConfig], list[ScoredChunk]]] = {
    "score_spread": lambda chunks, cfg: score_spread(chunks, cfg.start_count, cfg.end_count),
    "preserve_order": lambda chunks, cfg: preserve_order(chunks),
    "chronological": lambda chunks, cfg: chronological(chunks),
    "custom": lambda chunks, cfg: custom_sort(chunks, cfg.custom_comparator),
}


def apply_strategy(chunks: Sequence[ScoredChunk], config: ReorderConfig) -> list[ScoredChunk]:
    """Run the strategy named by ``config.strategy`` over *chunks*."""
    try:
        strategy = STRATEGIES[config.strategy]
    except KeyError:
        raise ValidationError(
            f"Unknown strategy {config.strategy!r}. Choose from: {', '.join(sorted(STRATEGIES))}"
        ) from None
    return strategy(chunks, config)
