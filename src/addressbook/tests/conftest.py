"""
Core pytest configuration for the entire test suite.

This module provides the database setup and logging installation needed across all
test packages (repositories, importer, exporter, cli, ...).

Domain-specific fixtures live in:
- tests/test_fixtures/repository_fixtures.py

and are imported at the bottom of this file so they are globally available.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from pathlib import Path
from typing import Generator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before importing modules
# that might initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "sqlalchemy.pool",
    "markdown_it",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest
from sqlalchemy.engine import Engine

from addressbook.config.settings import Settings
from addressbook.core.logging.builder import setup_logging
from addressbook.database.session import create_db_engine

logger = logging.getLogger(__name__)


def make_test_settings(tmp_path: Path, **overrides) -> Settings:
    """
    Settings pointing every path (database, logs, exports) into `tmp_path`.

    Constructed directly (not via get_settings()) so a developer's .env cannot leak in.
    """
    values = dict(
        ENV="testing",
        DATABASE_DIR=tmp_path / "Database",
        DATABASE_FILENAME="test.db",
        EXPORT_DIR=tmp_path / "Address Books",
        LOG_DIR=tmp_path / "logs",
        LOG_TO_STDOUT=True,
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="text",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


# -------------------------------
# Logging: install application logging once per session
# -------------------------------
# The `autouse=True` part means pytest uses this fixture without tests asking for it.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest, tmp_path_factory: pytest.TempPathFactory):
    """
    Install the application's dictConfig logging for the whole test session.

    dictConfig can remove pytest's capture handler, so it is re-attached afterwards
    (best-effort) to keep `caplog.records` working.
    """
    settings = make_test_settings(tmp_path_factory.mktemp("logging"))
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    return make_test_settings(tmp_path)


@pytest.fixture()
def engine(test_settings: Settings) -> Generator[Engine, None, None]:
    """
    A fresh sqlite file per test under tmp_path.

    Each test gets its own database file, so no transaction tricks are needed for
    isolation and DDL (CREATE/DROP TABLE) behaves exactly as in production.
    """
    engine = create_db_engine(test_settings)
    yield engine
    engine.dispose()


# Repository test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    patterns,
    repo,
    sample_entries,
    sample_entry,
    populated_repo,
)
