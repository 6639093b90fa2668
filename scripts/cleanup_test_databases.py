#!/usr/bin/env python3
"""
Utility script to drop leaked test databases (test_<32 hex chars>).
Run this if tests were interrupted or a test database failed to set up,
and no tests are currently running against the same server.

Usage:
    python scripts/cleanup_test_databases.py [--engine mysql|postgres] [--dry-run]
"""

import argparse
import logging
import sys

from dbtester.config.config_manager import ConfigManager, ConfigValidationError
from dbtester.database.connection_manager import DatabaseTesterError, build_server_url, get_connector
from dbtester.testing.test_database import drop_leaked_databases


def cleanup_test_databases(engine: str, dry_run: bool = False) -> int:
    """Drop all leaked test databases on the configured server for an engine."""
    config = ConfigManager()
    server = config.server_config(engine)
    connector = get_connector(engine)
    server_url = build_server_url(connector.scheme, server.host, server.port, server.user, server.password)

    print(f"🧹 Looking for leaked test databases on {server.host}:{server.port} ({engine})...")
    names = drop_leaked_databases(connector, server_url, dry_run=dry_run)

    for name in names:
        if dry_run:
            print(f"  [DRY RUN] Would drop database: {name}")
        else:
            print(f"  Dropped database: {name}")

    print("\n✅ Cleanup complete!")
    if dry_run:
        print("  This was a dry run - no databases were actually dropped.")
        print("  Run without --dry-run to actually drop them.")
    else:
        print(f"  Databases dropped: {len(names)}")
    return len(names)


def main():
    parser = argparse.ArgumentParser(
        description="Drop leaked ephemeral test databases"
    )
    parser.add_argument(
        "--engine",
        choices=ConfigManager.ENGINES,
        default="mysql",
        help="Database engine of the server to clean up"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be dropped without actually dropping anything"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        cleanup_test_databases(args.engine, dry_run=args.dry_run)
    except KeyboardInterrupt:
        print("\n\n⚠️  Cleanup interrupted by user")
        sys.exit(1)
    except (ConfigValidationError, DatabaseTesterError) as e:
        print(f"\n❌ Cleanup failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
