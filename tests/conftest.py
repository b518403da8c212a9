from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture
def tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TreeBuilder:
    """Provide a workspace rooted at tmp_path and make it the working directory."""
    monkeypatch.chdir(tmp_path)
    return TreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_ngpack_logger():
    """Undo CLI logging configuration so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("ngpack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
