"""
Database package for dbtester.

Provides engine connectors, connection URL construction and migrations.
"""

from .connection_manager import (
    AdminCommandError,
    BaseConnector,
    DatabaseConnectionError,
    DatabaseSetupError,
    DatabaseTeardownError,
    DatabaseTesterError,
    MySqlConnector,
    PostgresConnector,
    build_database_url,
    build_server_url,
    generate_database_name,
    get_connector
)
from .migration_manager import (
    DirectoryMigrationSource,
    Migration,
    MigrationError,
    MigrationSource,
    Migrator,
    StaticMigrationSource
)

__all__ = [
    'AdminCommandError',
    'BaseConnector',
    'DatabaseConnectionError',
    'DatabaseSetupError',
    'DatabaseTeardownError',
    'DatabaseTesterError',
    'MySqlConnector',
    'PostgresConnector',
    'build_database_url',
    'build_server_url',
    'generate_database_name',
    'get_connector',
    'DirectoryMigrationSource',
    'Migration',
    'MigrationError',
    'MigrationSource',
    'Migrator',
    'StaticMigrationSource'
]
