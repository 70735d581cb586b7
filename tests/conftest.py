"""Shared pytest fixtures for appendsw tests.

Factory functions live in ``_helpers.py``; this module re-exports them as
pytest fixtures so tests can receive them via dependency injection.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from appendsw.build.build_log import ConsoleHandler, get_logger
from appendsw.core.config import ConfigManager

from _helpers import (  # noqa: F401 (re-exported for fixture use)
    FakeBundler,
    make_config_manager,
    make_fake_bundler_class,
    make_pipeline_context,
    make_project,
    make_registry,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logger():
    """Drop console handlers installed by a CLI run so tests stay independent."""
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def config_manager(tmp_path: Path) -> ConfigManager:
    """A real ConfigManager backed by default config (no YAML/env file)."""
    return make_config_manager(tmp_path)


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A project layout with src/sw-extra.js and an existing build/service-worker.js."""
    make_project(tmp_path, base_sw="// base\n")
    return tmp_path
