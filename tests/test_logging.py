"""Tests for reggen.logging."""

from __future__ import annotations

import logging

from reggen.logging import StatusFormatter, configure_logging, get_logger


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("reggen.orchestrator", level, __file__, 1, message, (), None)


def test_status_lines_are_printed_without_level() -> None:
    formatter = StatusFormatter("%(message)s")
    assert formatter.format(_record(logging.INFO, "  button (added)")) == "[reggen]   button (added)"


def test_diagnostics_carry_their_level() -> None:
    formatter = StatusFormatter("%(message)s")
    assert (
        formatter.format(_record(logging.WARNING, "Skipping x: no source files found"))
        == "[reggen] WARNING Skipping x: no source files found"
    )
    assert formatter.format(_record(logging.DEBUG, "clsx -> package")) == "[reggen] DEBUG clsx -> package"


def test_get_logger_nests_under_reggen() -> None:
    assert get_logger("scanner").name == "reggen.scanner"
    assert get_logger().name == "reggen"


def test_configure_logging_levels() -> None:
    assert configure_logging().handlers[0].level == logging.INFO
    assert configure_logging(verbose=True).handlers[0].level == logging.DEBUG
    quiet = configure_logging(quiet=True)
    assert quiet.handlers[0].level == logging.WARNING
    assert len(quiet.handlers) == 1
    assert quiet.propagate is False
