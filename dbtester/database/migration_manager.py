"""
dbtester Migration Manager
Resolves ordered migration sources and applies them to a freshly created database.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol, Union, runtime_checkable

from dbtester.database.connection_manager import BaseConnector, DatabaseTesterError

logger = logging.getLogger(__name__)


class MigrationError(DatabaseTesterError):
    """Raised when a migration source is invalid or a migration fails to apply."""

    def __init__(self, message: str, version: Optional[int] = None):
        super().__init__(message)
        self.version = version


@dataclass(frozen=True)
class Migration:
    """A single ordered schema change."""

    version: int
    description: str
    sql: str = field(repr=False)

    @property
    def checksum(self) -> str:
        """SHA-256 hex digest of the migration SQL."""
        return hashlib.sha256(self.sql.encode('utf-8')).hexdigest()


@runtime_checkable
class MigrationSource(Protocol):
    """Anything that can enumerate migrations in a stable order."""

    def resolve(self) -> List[Migration]:
        ...


class DirectoryMigrationSource:
    """
    Migrations stored as SQL files in a directory.

    Files are named <version>_<description>.sql (e.g. 001_create_todos.sql) or
    <version>_<description>.up.sql. Reversal scripts (.down.sql, _rollback.sql)
    are ignored since a fresh database only ever migrates forward.
    """

    REVERSAL_SUFFIXES = ('.down.sql', '_rollback.sql')

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"DirectoryMigrationSource({str(self.path)!r})"

    def resolve(self) -> List[Migration]:
        if not self.path.is_dir():
            raise MigrationError(f"Migrations directory not found: {self.path}")

        migrations = []
        for file_path in self.path.glob("*.sql"):
            if file_path.name.startswith((".", "__")):
                continue
            if file_path.name.endswith(self.REVERSAL_SUFFIXES):
                continue

            stem = file_path.name[:-len(".up.sql")] if file_path.name.endswith(".up.sql") else file_path.stem
            version_str, _, description = stem.partition('_')
            try:
                version = int(version_str)
            except ValueError:
                logger.warning(f"Invalid migration filename format: {file_path.name}")
                continue

            sql = file_path.read_text(encoding='utf-8')
            migrations.append(Migration(version, description.replace('_', ' '), sql))

        return sorted(migrations, key=lambda m: m.version)


class StaticMigrationSource:
    """Migrations supplied in memory, e.g. embedded in a test module."""

    def __init__(self, migrations: Iterable[Migration]):
        self.migrations = list(migrations)

    def __repr__(self) -> str:
        return f"StaticMigrationSource({len(self.migrations)} migrations)"

    def resolve(self) -> List[Migration]:
        return sorted(self.migrations, key=lambda m: m.version)


def as_migration_source(source: Any) -> MigrationSource:
    """
    Coerce a value into a MigrationSource.

    Accepts an existing source, a directory path, or a sequence of Migration.
    """
    if isinstance(source, (str, Path)):
        return DirectoryMigrationSource(source)
    if isinstance(source, MigrationSource):
        return source
    if isinstance(source, (list, tuple)) and all(isinstance(m, Migration) for m in source):
        return StaticMigrationSource(source)
    raise MigrationError(f"Unsupported migration source: {source!r}")


class Migrator:
    """Applies every migration from a source, in version order, to one connection."""

    def __init__(self, source: Any, connector: BaseConnector):
        self.source = as_migration_source(source)
        self.connector = connector

    def resolve(self) -> List[Migration]:
        """
        Resolve and validate the migrations of the source.

        Raises:
            MigrationError: If the source cannot be read or repeats a version
        """
        migrations = self.source.resolve()
        seen = set()
        for migration in migrations:
            if migration.version in seen:
                raise MigrationError(
                    f"Duplicate migration version {migration.version} in {self.source!r}",
                    version=migration.version
                )
            seen.add(migration.version)
        return migrations

    async def run(self, conn: Any) -> List[Migration]:
        """
        Apply all pending migrations in order.

        Args:
            conn: Open connection to the target database

        Returns:
            The migrations applied by this call

        Raises:
            MigrationError: On the first migration that fails; later ones are not attempted
        """
        migrations = self.resolve()
        try:
            await self.connector.ensure_migrations_table(conn)
            applied_versions = await self.connector.applied_versions(conn)
        except self.connector.driver_errors as e:
            raise MigrationError(f"Failed to prepare migrations table: {e}") from e

        logger.info(f"Found {len(applied_versions)} applied migrations")
        logger.info(f"Found {len(migrations)} available migrations")

        applied = []
        for migration in migrations:
            if migration.version in applied_versions:
                logger.debug(f"Migration {migration.version} already applied, skipping")
                continue

            if not migration.sql.strip():
                logger.warning(f"Migration {migration.version} ({migration.description}) is empty")

            logger.info(f"Applying migration {migration.version}: {migration.description}")
            try:
                await self.connector.apply_migration(conn, migration)
            except self.connector.driver_errors as e:
                raise MigrationError(
                    f"Failed to apply migration {migration.version} ({migration.description}): {e}",
                    version=migration.version
                ) from e
            applied.append(migration)

        logger.info(f"Successfully applied {len(applied)} migrations")
        return applied
