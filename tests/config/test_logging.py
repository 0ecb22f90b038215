"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from telemconf.config.logging import BINDING_LOGGER, configure_logging, logger_levels


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    managed = [logging.getLogger(name) for name in ("telemconf", BINDING_LOGGER)]
    levels = [logger.level for logger in managed]
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    for logger, level in zip(managed, levels, strict=True):
        logger.setLevel(level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("telemconf").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("telemconf").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("telemconf.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "telemconf.test"
        assert "timestamp" in parsed

    def test_stdlib_binder_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True, trace_binding=True)

        logging.getLogger("telemconf.binding.binder").debug("Skipping read-only property Name")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Skipping read-only property Name"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "telemconf.binding.binder"

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("telemconf.factory").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_pluggy_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pluggy").debug("hook call noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestBindingLogLevels:
    def test_verbose_keeps_binder_at_info(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(BINDING_LOGGER).level == logging.INFO
        assert logging.getLogger("telemconf").level == logging.DEBUG

    def test_trace_binding_implies_verbose(self) -> None:
        configure_logging(trace_binding=True)
        assert logging.getLogger(BINDING_LOGGER).level == logging.DEBUG
        assert logging.getLogger("telemconf").level == logging.DEBUG

    def test_quiet_binder_by_default(self) -> None:
        assert logger_levels(verbose=False, trace_binding=False)[BINDING_LOGGER] == logging.WARNING

    def test_verbose_suppresses_binder_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("telemconf.binding.binder").debug("Created InMemoryChannel")
        assert capfd.readouterr().err == ""
