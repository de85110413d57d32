"""Preserve-order strategy — keep each source document in reading order."""

from __future__ import annotations

from collections.abc import Sequence

from context_reorder.grouper import group_chunks, order_groups
from context_reorder.models import SOURCE_ID, ScoredChunk


def _reading_position(chunk: ScoredChunk) -> tuple[float, int]:
    section = chunk.chunk.section_index
    return (chunk.original_index if section is None else section, chunk.original_index)


def preserve_order(chunks: Sequence[ScoredChunk]) -> list[ScoredChunk]:
    """Group by ``source_id`` and restore document order within each group.

    Chunks sort by ``section_index`` (falling back to ``original_index``),
    and the group holding the highest-priority chunk comes first.  Chunks
    without a ``source_id`` share one group.
    """
    if not chunks:
        return []

    groups = group_chunks(chunks, SOURCE_ID, default="")
    for members in groups.values():
        members.sort(key=_reading_position)

    return [chunk for _, members in order_groups(groups) for chunk in members]
