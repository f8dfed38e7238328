"""Logging setup for reggen runs.

Per-entity status lines (added, updated, skipped) are INFO records and are
printed bare; diagnostics carry their level so they stand out in the run log.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "reggen"
_PREFIX = "[reggen]"


class StatusFormatter(logging.Formatter):
    """Console formatter: ``[reggen] message`` for INFO, ``[reggen] LEVEL message`` otherwise."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return f"{_PREFIX} {message}"
        return f"{_PREFIX} {record.levelname} {message}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the reggen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and optional file sink on the reggen logger.

    ``verbose`` shows per-import classification (DEBUG); ``quiet`` keeps only
    diagnostics (WARNING and above). The file sink always records DEBUG.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(StatusFormatter("%(message)s"))
    logger.addHandler(console)

    logger_level = level
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    return logger


__all__ = ["StatusFormatter", "configure_logging", "get_logger"]
