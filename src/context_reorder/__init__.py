"""context-reorder: place the most relevant retrieved chunks where LLMs look.

Long-context models attend best to the start and end of their input and
worst to the middle.  ``Reorderer`` takes pre-scored chunks and moves the
strongest to the edges, with optional filtering, deduplication, grouping,
token budgeting and a result cap::

    from context_reorder import Chunk, Reorderer

    reorderer = Reorderer(strategy="score_spread", top_k=10)
    ordered = reorderer.reorder_sync(chunks)
    ordered = await reorderer.reorder(chunks, query="...")  # with a reranker
"""

from __future__ import annotations

from context_reorder.config import ReorderConfig, ScoringWeights, build_config, merge_config
from context_reorder.core.config import AppSettings
from context_reorder.deduplicator import deduplicate_chunks, trigram_similarity
from context_reorder.evaluation import (
    key_point_precision,
    key_point_recall,
    ndcg,
    position_effectiveness,
)
from context_reorder.exceptions import ReorderError, TokenizerError, ValidationError
from context_reorder.grouper import group_chunks, order_groups
from context_reorder.models import Chunk, KeepPolicy, ScoredChunk, Strategy
from context_reorder.protocols import CustomComparator, IReranker, TokenCounterFn
from context_reorder.reorderer import Reorderer
from context_reorder.scorer import score_chunks
from context_reorder.serializer import deserialize_chunks, serialize_chunks
from context_reorder.tokenizer import TokenCounter
from context_reorder.validator import validate_chunks

__all__ = [
    # Models
    "Chunk",
    "ScoredChunk",
    "Strategy",
    "KeepPolicy",
    # Configuration
    "ReorderConfig",
    "ScoringWeights",
    "AppSettings",
    "build_config",
    "merge_config",
    # Pipeline
    "Reorderer",
    "score_chunks",
    "validate_chunks",
    "deduplicate_chunks",
    "trigram_similarity",
    "group_chunks",
    "order_groups",
    # Collaborators
    "IReranker",
    "TokenCounterFn",
    "CustomComparator",
    "TokenCounter",
    # Serialization / evaluation
    "serialize_chunks",
    "deserialize_chunks",
    "key_point_recall",
    "key_point_precision",
    "position_effectiveness",
    "ndcg",
    # Errors
    "ReorderError",
    "ValidationError",
    "TokenizerError",
]
