"""Nested pydantic-settings configuration.

Each group reads its own ``REORDER_<GROUP>_*`` env vars::

    export REORDER_STRATEGY=chronological
    export REORDER_TIME_WEIGHT=0.3
    export REORDER_TOKENIZER_METHOD=tiktoken
    export REORDER_OBSERVABILITY_LOG_LEVEL=DEBUG

Callables (reranker, token counter, comparator) cannot come from the
environment; pass them to ``AppSettings.to_reorder_config``.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from context_reorder.config import ReorderConfig, build_config


class ReorderSettings(BaseSettings):
    """Defaults for the reorder pipeline.

    Env vars use ``REORDER_`` prefix.
    """

    model_config = {"env_prefix": "REORDER_"}

    strategy: Literal["score_spread", "preserve_order", "chronological", "custom"] = "score_spread"
    similarity_weight: float = Field(default=1.0, ge=0.0)
    time_weight: float = Field(default=0.0, ge=0.0)
    section_weight: float = Field(default=0.0, ge=0.0)
    start_count: Optional[int] = Field(default=None, ge=0)
    end_count: Optional[int] = Field(default=None, ge=0)
    group_by: Optional[str] = None
    min_score: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, ge=0)
    include_priority_score: bool = False
    deduplicate: bool = False
    deduplicate_threshold: float = Field(default=1.0, ge=0.0, le=1.0)
    deduplicate_keep: Literal["highest_score", "first", "last"] = "highest_score"
    top_k: Optional[int] = Field(default=None, ge=1)


class TokenizerConfig(BaseSettings):
    """Tokenizer configuration for the token budget.

    Env vars use ``REORDER_TOKENIZER_`` prefix.
    """

    model_config = {"env_prefix": "REORDER_TOKENIZER_"}

    method: Literal["approximate", "tiktoken"] = "approximate"
    model: str = "gpt-4o"
    char_to_token_ratio: int = Field(default=4, ge=1)
    fallback_encoding: str = "cl100k_base"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``REORDER_OBSERVABILITY_`` prefix.  ``json_logs`` left unset
    picks JSON lines when stderr is not a terminal.
    """

    model_config = {"env_prefix": "REORDER_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    reorder: ReorderSettings = Field(default_factory=ReorderSettings)
    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def to_reorder_config(self, **options: Any) -> ReorderConfig:
        """Build a validated ``ReorderConfig`` from these settings.

        Keyword *options* win over settings.  When a token budget is set and
        no ``token_counter`` is given, a ``TokenCounter`` built from the
        tokenizer settings is used.
        """
        r = self.reorder
        data: dict[str, Any] = r.model_dump(
            exclude={"similarity_weight", "time_weight", "section_weight"},
        )
        weights = {
            "similarity": r.similarity_weight,
            "time": r.time_weight,
            "section": r.section_weight,
        }
        data.update(options)
        override = options.get("weights")
        data["weights"] = {**weights, **override} if isinstance(override, dict) else override or weights

        if data.get("max_tokens") is not None and data.get("token_counter") is None:
            from context_reorder.tokenizer import TokenCounter

            t = self.tokenizer
            data["token_counter"] = TokenCounter(
                method=t.method,
                model=t.model,
                char_to_token_ratio=t.char_to_token_ratio,
                fallback_encoding=t.fallback_encoding,
            )
        return build_config(data)
