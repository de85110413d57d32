"""Pluggable token counter for the ``max_tokens`` budget.

Modes:
  - ``approximate``: chars / ratio (no dependencies, fast)
  - ``tiktoken``: OpenAI tiktoken (requires the ``tiktoken`` extra)

Instances are callable, so one can be passed straight in as ``token_counter``::

    Reorderer(max_tokens=2000, token_counter=TokenCounter(method="tiktoken"))
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from context_reorder.exceptions import TokenizerError

log = logging.getLogger(__name__)

# Cache for tiktoken encoders
_tiktoken_cache: dict[str, object] = {}


class TokenCounter:
    """Count tokens using the configured method."""

    def __init__(
        self,
        method: Literal["approximate", "tiktoken"] = "approximate",
        model: str = "gpt-4o",
        char_to_token_ratio: int = 4,
        fallback_encoding: str = "cl100k_base",
    ) -> None:
        if method not in ("approximate", "tiktoken"):
            raise TokenizerError(f"Unknown tokenizer method: {method!r}")
        if char_to_token_ratio < 1:
            raise TokenizerError("char_to_token_ratio must be at least 1")

        self.method = method
        self.model = model
        self._char_to_token_ratio = char_to_token_ratio
        self._fallback_encoding = fallback_encoding

        if method == "tiktoken":
            try:
                import tiktoken  # noqa: F401
            except ImportError as e:
                raise TokenizerError(
                    "tiktoken not installed. Install with: pip install context-reorder[tiktoken]"
                ) from e

    def __call__(self, text: str) -> int:
        return self.count(text)

    def count(self, text: str, model: Optional[str] = None) -> int:
        """Return the token count for *text*."""
        if not text:
            return 0

        if self.method == "approximate":
            return self._count_approximate(text)
        return self._count_tiktoken(text, model or self.model)

    # ── Backends ─────────────────────────────────────────────────────

    def _count_approximate(self, text: str) -> int:
        return max(1, len(text) // self._char_to_token_ratio)

    def _count_tiktoken(self, text: str, model: str) -> int:
        import tiktoken

        cache_key = f"{model}:{self._fallback_encoding}"
        if cache_key not in _tiktoken_cache:
            try:
                _tiktoken_cache[cache_key] = tiktoken.encoding_for_model(model)
            except KeyError:
                log.debug("No tiktoken encoding for %r, using %s", model, self._fallback_encoding)
                _tiktoken_cache[cache_key] = tiktoken.get_encoding(self._fallback_encoding)
        enc = _tiktoken_cache[cache_key]
        return len(enc.encode(text))  # type: ignore[attr-defined]
