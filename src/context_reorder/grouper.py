"""Partition scored chunks by a metadata field and order the groups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from context_reorder.models import ScoredChunk

DEFAULT_GROUP = "__default__"


def group_key(metadata: Mapping[str, Any], field: str, default: str = DEFAULT_GROUP) -> str:
    """String-coerced value of *field*, or *default* when missing or ``None``."""
    value = metadata.get(field)
    return default if value is None else str(value)


def group_chunks(
    chunks: Iterable[ScoredChunk],
    field: str,
    *,
    default: str = DEFAULT_GROUP,
) -> dict[str, list[ScoredChunk]]:
    """Group chunks by ``metadata[field]``.

    Groups appear in first-seen order and members keep their relative order.
    """
    groups: dict[str, list[ScoredChunk]] = {}
    for chunk in chunks:
        groups.setdefault(group_key(chunk.metadata, field, default), []).append(chunk)
    return groups


def order_groups(groups: Mapping[str, list[ScoredChunk]]) -> list[tuple[str, list[ScoredChunk]]]:
    """Order groups by their highest ``priority_score``, descending.

    Groups with equal maxima keep their first-seen order.
    """
    return sorted(
        groups.items(),
        key=lambda item: -max((c.priority_score for c in item[1]), default=float("-inf")),
    )
