"""Data models for context-reorder.

``Chunk`` is the public record callers pass in and get back.  ``ScoredChunk``
is pipeline-internal: it wraps a chunk with the values computed during a
single reorder call and is unwrapped before results are returned, so the
public model never carries pipeline state.
"""

from __future__ import annotations

import dataclasses
import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Strategy = Literal["score_spread", "preserve_order", "chronological", "custom"]
KeepPolicy = Literal["highest_score", "first", "last"]

# ── Well-known metadata keys ─────────────────────────────────────────

TIMESTAMP = "timestamp"
SECTION_INDEX = "section_index"
SOURCE_ID = "source_id"
PAGE = "page"
PRIORITY_SCORE = "priority_score"

_NUMERIC_KEYS = (TIMESTAMP, SECTION_INDEX, PAGE)


def is_number(value: Any) -> bool:
    """True for int/float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Chunk(BaseModel):
    """A retrieved passage with text, relevance score, and optional metadata.

    ``metadata`` is an open mapping.  The keys ``timestamp``, ``section_index``
    and ``page`` must hold finite numbers and ``source_id`` a string when
    present; ``None`` counts as absent.  Any other key passes through as-is.

    Well-known keys are snake_case.  camelCase spellings such as
    ``sectionIndex`` or ``sourceId`` are ordinary opaque keys and take no
    part in scoring, grouping or ordering; rename them before loading.

    Top-level fields beyond ``id``, ``text``, ``score`` and ``metadata`` (a
    retriever's ``source`` or ``embedding_id``) are kept and serialized back
    out unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(min_length=1, strict=True)
    text: str = Field(strict=True)
    score: float = Field(strict=True, allow_inf_nan=False)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("metadata")
    @classmethod
    def _check_known_keys(cls, value: dict[str, Any]) -> dict[str, Any]:
        for key in _NUMERIC_KEYS:
            v = value.get(key)
            if v is not None and not (is_number(v) and math.isfinite(v)):
                raise ValueError(f"metadata.{key} must be a finite number")
        source_id = value.get(SOURCE_ID)
        if source_id is not None and not isinstance(source_id, str):
            raise ValueError(f"metadata.{SOURCE_ID} must be a string")
        return value

    # Convenience getters (do not throw)

    @property
    def timestamp(self) -> Optional[float]:
        return self.metadata.get(TIMESTAMP)

    @property
    def section_index(self) -> Optional[float]:
        return self.metadata.get(SECTION_INDEX)

    @property
    def source_id(self) -> Optional[str]:
        return self.metadata.get(SOURCE_ID)

    @property
    def page(self) -> Optional[float]:
        return self.metadata.get(PAGE)


@dataclasses.dataclass(frozen=True)
class ScoredChunk:
    """A chunk paired with its composite priority and input position.

    ``original_index`` is the tie-breaker for every sort in the pipeline.
    """

    chunk: Chunk
    priority_score: float
    original_index: int

    @property
    def score(self) -> float:
        return self.chunk.score

    @property
    def metadata(self) -> dict[str, Any]:
        return self.chunk.metadata

    def unwrap(self, *, include_priority_score: bool = False) -> Chunk:
        """Return the public chunk, optionally with ``priority_score`` in metadata."""
        if not include_priority_score:
            return self.chunk
        metadata = {**self.chunk.metadata, PRIORITY_SCORE: self.priority_score}
        return self.chunk.model_copy(update={"metadata": metadata})
