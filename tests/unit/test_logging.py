"""
Unit tests for structured logging setup.
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from docharvest.config.config import MonitoringConfig
from docharvest.observability.logging import add_document_url, configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_sets_root_level(self):
        configure_logging(MonitoringConfig(log_level="warning"))

        assert logging.getLogger().level == logging.WARNING

    def test_file_output_is_json(self, tmp_path):
        log_file = tmp_path / "out" / "docharvest.log"
        configure_logging(MonitoringConfig(log_level="INFO", log_file=log_file))

        structlog.get_logger("docharvest.test").info("Discovery completed", tables=2)
        logging.getLogger("docharvest.extractor.tables").warning("Requested table %d not found", 5)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert lines[-2]["event"] == "Discovery completed"
        assert lines[-2]["tables"] == 2
        assert lines[-2]["level"] == "info"
        assert lines[-1]["event"] == "Requested table 5 not found"
        assert lines[-1]["logger"] == "docharvest.extractor.tables"


class TestProcessors:
    def test_document_url_from_context(self):
        structlog.contextvars.bind_contextvars(document_url="https://example.com/page")

        event = add_document_url(None, "info", {"event": "x"})

        assert event["document_url"] == "https://example.com/page"

    def test_no_document_url(self):
        assert add_document_url(None, "info", {"event": "x"}) == {"event": "x"}
