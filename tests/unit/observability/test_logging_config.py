# tests/unit/observability/test_logging_config.py
"""
测试日志配置模块：PanelRenderer 渲染与 setup_logging 的全局配置行为。
"""

import logging
from unittest.mock import Mock

import pytest
import structlog
from rich.console import Console

from transflow.bootstrap import create_container
from transflow.config import LoggingSettings, TransflowConfig
from transflow.observability.logging_config import (
    APP_LOGGER_NAME,
    PanelRenderer,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def _renderer(**kwargs) -> PanelRenderer:
    console = Console(width=100, color_system=None, force_terminal=False)
    return PanelRenderer(console=console, **kwargs)


class TestPanelRenderer:
    def test_empty_event_returns_empty_string(self):
        assert _renderer()(Mock(), "info", {"event": ""}) == ""
        assert _renderer()(Mock(), "info", {}) == ""

    def test_renders_event_level_and_key_values(self):
        out = _renderer()(
            Mock(),
            "info",
            {
                "event": "文档状态变更",
                "level": "info",
                "logger": "transflow.lifecycle",
                "timestamp": "2024-01-01 00:00:00",
                "document_id": "doc-1",
            },
        )
        assert "文档状态变更" in out
        assert "INFO" in out
        assert "transflow.lifecycle" in out
        assert "document_id" in out
        assert "doc-1" in out

    def test_logger_name_can_be_hidden(self):
        out = _renderer(show_logger_name=False)(
            Mock(), "info", {"event": "hi", "logger": "transflow.secret"}
        )
        assert "transflow.secret" not in out

    def test_long_string_values_lose_quotes(self):
        renderer = _renderer(kv_truncate_at=10)
        assert renderer._format_value("x" * 20) == "x" * 20
        assert renderer._format_value("short") == "'short'"


class TestSetupLogging:
    def test_configures_root_and_app_levels(self):
        setup_logging(log_level="DEBUG", log_format="json")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.WARNING
        assert logging.getLogger(APP_LOGGER_NAME).level == logging.DEBUG

    def test_noisy_libraries_are_silenced(self):
        logging.getLogger("httpx").setLevel(logging.DEBUG)
        setup_logging(log_level="INFO", log_format="console")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_service_is_bound_to_context(self):
        setup_logging(log_level="INFO", log_format="json", service="transflow-api")
        assert structlog.contextvars.get_contextvars()["service"] == "transflow-api"

    def test_container_initializes_logging_from_config(self):
        cfg = TransflowConfig(
            service_name="transflow-worker", logging=LoggingSettings(level="DEBUG")
        )
        container = create_container(cfg)
        assert logging.getLogger(APP_LOGGER_NAME).level == logging.DEBUG
        assert structlog.contextvars.get_contextvars()["service"] == "transflow-worker"
        container.shutdown_resources()
