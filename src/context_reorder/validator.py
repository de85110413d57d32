"""Structural chunk validation run before scoring."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from context_reorder.exceptions import ValidationError
from context_reorder.models import Chunk, is_number


def validate_chunks(chunks: Sequence[Any]) -> None:
    """Check every chunk has a non-empty string id, string text and finite score.

    ``Chunk`` enforces this at construction, but chunks can still arrive
    malformed from ``model_construct`` or from a reranker returning other
    objects, so the pipeline checks again.

    Raises:
        ValidationError: On the first invalid chunk, naming its index.
    """
    for i, chunk in enumerate(chunks):
        if not isinstance(chunk, Chunk):
            raise ValidationError(
                f"Chunk at index {i} is not a Chunk (got {type(chunk).__name__})"
            )
        if not isinstance(getattr(chunk, "id", None), str):
            raise ValidationError(f"Chunk at index {i} is missing required field 'id'")
        if not chunk.id:
            raise ValidationError(f"Chunk at index {i} has an empty 'id'")
        if not isinstance(getattr(chunk, "text", None), str):
            raise ValidationError(f"Chunk at index {i} is missing required field 'text'")
        if not (is_number(getattr(chunk, "score", None)) and math.isfinite(chunk.score)):
            raise ValidationError(
                f"Chunk at index {i} has an invalid 'score' (must be a finite number)"
            )
