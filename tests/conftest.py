"""
Centralized test configuration and fixtures for dbtester.

This module provides shared test fixtures that:
1. Configure logging for the test run
2. Provide sample migrations and migration directories
3. Detect whether MySQL / PostgreSQL servers are reachable for integration tests
"""

import logging
import os
import socket

import pytest

from dbtester.config.config_manager import ConfigManager
from dbtester.database.migration_manager import Migration

pytest_plugins = ["pytester"]

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


TODO_MIGRATIONS = [
    Migration(1, "create todos", "CREATE TABLE todos (id SERIAL PRIMARY KEY, title TEXT NOT NULL);"),
    Migration(2, "add done flag", "ALTER TABLE todos ADD COLUMN done BOOLEAN NOT NULL DEFAULT FALSE;"),
]


def server_reachable(host: str, port: int, timeout: float = 1.0) -> bool:
    """Check whether a TCP server accepts connections."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


@pytest.fixture
def todo_migrations():
    """Two-step migration creating a todos table."""
    return list(TODO_MIGRATIONS)


@pytest.fixture
def migrations_dir(tmp_path):
    """Migrations directory holding the todo migrations as SQL files."""
    directory = tmp_path / "migrations"
    directory.mkdir()
    (directory / "001_create_todos.sql").write_text(TODO_MIGRATIONS[0].sql)
    (directory / "002_add_done_flag.sql").write_text(TODO_MIGRATIONS[1].sql)
    return directory


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every dbtester setting from the environment."""
    for key in list(os.environ):
        if key.startswith(("TEST_DB_", "TEST_MYSQL_", "TEST_PG_")):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


def _require_server(engine: str) -> ConfigManager:
    config = ConfigManager()
    server = config.server_config(engine)
    if not server_reachable(server.host, server.port):
        pytest.skip(f"{engine} server not reachable at {server.host}:{server.port}")
    return config


@pytest.fixture
def mysql_config():
    """ConfigManager for a reachable MySQL server, or skip."""
    return _require_server('mysql')


@pytest.fixture
def pg_config():
    """ConfigManager for a reachable PostgreSQL server, or skip."""
    return _require_server('postgres')
