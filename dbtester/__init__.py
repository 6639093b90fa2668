"""
dbtester

Disposable, migrated databases for automated tests on MySQL and PostgreSQL.
"""

from dbtester.config.config_manager import ConfigManager, ConfigValidationError
from dbtester.database.connection_manager import (
    AdminCommandError,
    DatabaseConnectionError,
    DatabaseSetupError,
    DatabaseTeardownError,
    DatabaseTesterError
)
from dbtester.database.migration_manager import (
    DirectoryMigrationSource,
    Migration,
    MigrationError,
    MigrationSource,
    StaticMigrationSource
)
from dbtester.testing.test_database import EphemeralDatabase, TestMysql, TestPg

__version__ = "0.1.0"

__all__ = [
    'ConfigManager',
    'ConfigValidationError',
    'AdminCommandError',
    'DatabaseConnectionError',
    'DatabaseSetupError',
    'DatabaseTeardownError',
    'DatabaseTesterError',
    'DirectoryMigrationSource',
    'Migration',
    'MigrationError',
    'MigrationSource',
    'StaticMigrationSource',
    'EphemeralDatabase',
    'TestMysql',
    'TestPg'
]
