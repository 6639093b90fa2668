"""
dbtester Testing Infrastructure

Ephemeral, migrated databases for tests, plus tools for cleaning up the ones
that were leaked.
"""

from .test_database import (
    EphemeralDatabase,
    TestMysql,
    TestPg,
    drop_leaked_databases,
    find_leaked_databases,
    run_blocking
)

__all__ = [
    'EphemeralDatabase',
    'TestMysql',
    'TestPg',
    'drop_leaked_databases',
    'find_leaked_databases',
    'run_blocking'
]
