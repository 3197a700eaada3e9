"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from squarectl.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("squarectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("squarectl").level == logging.WARNING

    def test_stdlib_records_render_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("squarectl.infrastructure.store").warning("Filtered out %d squares", 2)

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Filtered out 2 squares"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "squarectl.infrastructure.store"
        assert "timestamp" in parsed

    def test_structlog_records_render_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("squarectl.test").warning("placed", row=1, column=2)

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "placed"
        assert parsed["row"] == 1
        assert parsed["column"] == 2

    def test_exceptions_rendered_in_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        try:
            raise OSError("disk full")
        except OSError:
            logging.getLogger("squarectl.services").error("create failed", exc_info=True)

        parsed = json.loads(capfd.readouterr().err.strip())
        assert "disk full" in parsed["exception"]

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("squarectl.services").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
