from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.registry_builder import RegistryBuilder


@pytest.fixture
def registry_builder(tmp_path: Path) -> RegistryBuilder:
    """Provide a reusable registry project rooted at the pytest tmp_path."""
    return RegistryBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_reggen_logger():
    """Undo configure_logging so caplog sees reggen records in every test."""
    yield
    logger = logging.getLogger("reggen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
