#!/usr/bin/env python3
"""
Apply the marketplace schema.

Runs every SQL file under docker/init in name order. Files are written with
IF NOT EXISTS guards, so running them again is harmless.

Usage:
    python scripts/run_migrations.py [--database DATABASE] [--verbose]
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import psycopg2

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def get_db_connection(database: str = None) -> psycopg2.extensions.connection:
    """Get database connection from environment variables."""
    database_url = os.getenv("DATABASE_URL")

    try:
        if database_url and not database:
            conn = psycopg2.connect(database_url)
        else:
            conn = psycopg2.connect(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=os.getenv("POSTGRES_PORT", "5432"),
                database=database or os.getenv("POSTGRES_DB", "marketplace_db"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            )
        conn.autocommit = True  # Each statement executes immediately
        return conn
    except psycopg2.Error as e:
        logger.error(f"Failed to connect to database: {e}")
        sys.exit(1)


def run_migration(conn: psycopg2.extensions.connection, migration_file: Path, verbose: bool = False) -> bool:
    """Run a single migration file.

    Args:
        conn: Database connection
        migration_file: Path to migration SQL file
        verbose: If True, show detailed information

    Returns:
        True if migration succeeded, False otherwise
    """
    try:
        migration_sql = migration_file.read_text(encoding="utf-8")

        if verbose:
            logger.info(f"Running migration: {migration_file.name}")

        with conn.cursor() as cur:
            cur.execute(migration_sql)

        if verbose:
            logger.info(f"Migration completed: {migration_file.name}")
        return True

    except (psycopg2.errors.DuplicateTable, psycopg2.errors.DuplicateObject) as e:
        if verbose:
            logger.info(f"Migration already applied (skipped): {migration_file.name} - {e}")
        return True
    except psycopg2.Error as e:
        logger.error(f"Migration failed: {migration_file.name} - {e}")
        return False


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Apply the marketplace schema")
    parser.add_argument("--database", "-d", help="Database name (default: from POSTGRES_DB env var)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed information")

    args = parser.parse_args()

    migrations_dir = Path(__file__).parent.parent / "docker" / "init"
    migration_files = sorted(migrations_dir.glob("*.sql"))
    if not migration_files:
        logger.error(f"No migration files found in {migrations_dir}")
        sys.exit(1)

    conn = get_db_connection(args.database)
    try:
        results = {f.name: run_migration(conn, f, args.verbose) for f in migration_files}
    finally:
        conn.close()

    total = len(results)
    passed = sum(1 for v in results.values() if v)
    logger.info(f"Summary: {passed}/{total} migrations succeeded")

    if passed < total:
        logger.warning("Failed migrations:")
        for name, status in results.items():
            if not status:
                logger.warning(f"  - {name}: FAILED")
        sys.exit(1)

    logger.info("All migrations completed successfully!")


if __name__ == "__main__":
    main()
