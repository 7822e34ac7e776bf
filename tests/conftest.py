from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder
from versiondocs.remote import LATEST_TAG_ENV_VAR


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable checkout builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _no_latest_tag_override(monkeypatch) -> None:
    monkeypatch.delenv(LATEST_TAG_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def _reset_versiondocs_logger():
    logger = logging.getLogger("versiondocs")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)
