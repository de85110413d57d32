"""Reorder configuration — defaults, validation and per-call override merging.

A ``ReorderConfig`` is frozen once built.  Per-call overrides never mutate
it; ``merge_config`` derives a new, re-validated instance instead::

    base = build_config(strategy="chronological", weights={"time": 0.5})
    call = merge_config(base, {"top_k": 5, "weights": {"section": 0.2}})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from context_reorder.exceptions import ValidationError
from context_reorder.models import SOURCE_ID, KeepPolicy, Strategy
from context_reorder.protocols import (
    CustomComparator,
    IReranker,
    RerankerErrorHandler,
    TokenCounterFn,
)


class ScoringWeights(BaseModel):
    """Linear weights for the composite priority score."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    similarity: float = Field(default=1.0, ge=0.0, strict=True, allow_inf_nan=False)
    time: float = Field(default=0.0, ge=0.0, strict=True, allow_inf_nan=False)
    section: float = Field(default=0.0, ge=0.0, strict=True, allow_inf_nan=False)


class ReorderConfig(BaseModel):
    """Fully resolved reorder options.  Every field has a default."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    strategy: Strategy = "score_spread"
    weights: ScoringWeights = Field(default_factory=ScoringWeights)

    # score_spread only: top N at the start, next M at the end
    start_count: Optional[int] = Field(default=None, ge=0, strict=True)
    end_count: Optional[int] = Field(default=None, ge=0, strict=True)

    group_by: Optional[str] = Field(default=None, strict=True)

    reranker: Optional[IReranker] = None
    on_reranker_error: Optional[RerankerErrorHandler] = None
    custom_comparator: Optional[CustomComparator] = None

    min_score: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False)
    max_tokens: Optional[float] = Field(default=None, ge=0, strict=True, allow_inf_nan=False)
    token_counter: Optional[TokenCounterFn] = None

    include_priority_score: bool = Field(default=False, strict=True)

    deduplicate: bool = Field(default=False, strict=True)
    deduplicate_threshold: float = Field(default=1.0, ge=0.0, le=1.0, strict=True)
    deduplicate_keep: KeepPolicy = "highest_score"

    top_k: Optional[int] = Field(default=None, ge=1, strict=True)

    @model_validator(mode="after")
    def _check_combinations(self) -> ReorderConfig:
        if self.strategy == "custom" and self.custom_comparator is None:
            raise ValueError("custom strategy requires a custom_comparator function")
        if self.strategy == "preserve_order" and self.group_by == SOURCE_ID:
            raise ValueError(
                "preserve_order already groups by source_id internally; "
                "remove group_by or use a different strategy"
            )
        if self.max_tokens is not None and self.token_counter is None:
            raise ValueError("max_tokens requires a token_counter function")
        return self


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _validate(data: Mapping[str, Any]) -> ReorderConfig:
    try:
        return ReorderConfig.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid reorder config: {_describe(e)}") from e


def build_config(
    config: ReorderConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> ReorderConfig:
    """Resolve *config* and keyword *options* into a validated config.

    Raises:
        ValidationError: If any option is unknown or invalid.
    """
    if isinstance(config, ReorderConfig):
        return merge_config(config, options)
    return _validate({**(config or {}), **options})


def merge_config(base: ReorderConfig, overrides: Mapping[str, Any] | None) -> ReorderConfig:
    """Shallow-replace top-level fields of *base*; merge ``weights`` field-wise.

    The merged result is re-validated.  With no overrides *base* is returned.

    Raises:
        ValidationError: If the merged configuration is invalid.
    """
    if not overrides:
        return base

    data = dict(base)
    data.update(overrides)

    weights = overrides.get("weights")
    if weights is None:
        data["weights"] = base.weights
    else:
        if isinstance(weights, ScoringWeights):
            weights = weights.model_dump()
        elif not isinstance(weights, Mapping):
            raise ValidationError("Invalid reorder config: weights must be a mapping")
        data["weights"] = {**base.weights.model_dump(), **weights}

    return _validate(data)
