"""Structured logging configuration using structlog.

Library modules log through stdlib ``logging.getLogger(__name__)``; this
routes those records through structlog's formatter.  JSON lines in
production, colored console output in development.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Optional

import structlog

if TYPE_CHECKING:
    from context_reorder.core.config import ObservabilityConfig


def setup_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure structured logging on the root logger."""
    if config is None:
        from context_reorder.core.config import ObservabilityConfig

        config = ObservabilityConfig()

    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    json_logs = config.json_logs if config.json_logs is not None else not sys.stderr.isatty()
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("context_reorder").setLevel(level)
