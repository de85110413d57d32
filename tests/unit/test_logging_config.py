"""Tests for structlog-backed logging setup."""

from __future__ import annotations

import logging

import pytest
import structlog

from context_reorder.core.config import ObservabilityConfig
from context_reorder.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_installs_single_structlog_handler(self) -> None:
        setup_logging(ObservabilityConfig(json_logs=True))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.INFO

    def test_level_from_config(self) -> None:
        setup_logging(ObservabilityConfig(log_level="debug", json_logs=False))
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("context_reorder").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging(ObservabilityConfig(log_level="chatty", json_logs=True))
        assert logging.getLogger().level == logging.INFO

    def test_env_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REORDER_OBSERVABILITY_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("REORDER_OBSERVABILITY_JSON_LOGS", "true")
        setup_logging()
        assert logging.getLogger().level == logging.WARNING
