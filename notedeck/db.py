"""SQLite database creation and schema migrations."""

from __future__ import annotations

import hashlib
import logging
import re
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .config import server_directory

logger = logging.getLogger(__name__)

DB_PATH = "sqlite.db"

_MIGRATION_NAME = re.compile(r"^(\d+)_(.+?)(?:\.up)?\.sql$")

_MIGRATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS _migrations (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    checksum BLOB NOT NULL,
    installed_on TEXT NOT NULL
)
"""


class MigrationError(Exception):
    """Raised when migrations cannot be found, validated or applied."""


@dataclass(frozen=True)
class _Migration:
    version: int
    description: str
    sql: str

    @property
    def checksum(self) -> bytes:
        return hashlib.sha384(self.sql.encode("utf-8")).digest()


def _load_migrations(migrations_dir: Path) -> list[_Migration]:
    if not migrations_dir.is_dir():
        raise MigrationError(f"migrations directory not found: {migrations_dir}")
    migrations: dict[int, _Migration] = {}
    for path in migrations_dir.iterdir():
        if not path.is_file() or path.name.endswith(".down.sql"):
            continue
        match = _MIGRATION_NAME.match(path.name)
        if match is None:
            raise MigrationError(f"invalid migration file name: {path.name}")
        version = int(match.group(1))
        if version in migrations:
            raise MigrationError(f"duplicate migration version {version}")
        migrations[version] = _Migration(
            version=version,
            description=match.group(2).replace("_", " "),
            sql=path.read_text(encoding="utf-8"),
        )
    return sorted(migrations.values(), key=lambda m: m.version)


def run_migrations(
    connection: sqlite3.Connection, migrations_dir: Union[str, Path]
) -> list[int]:
    """Apply pending migrations in version order; return the versions applied."""
    migrations = _load_migrations(Path(migrations_dir))
    try:
        connection.execute(_MIGRATIONS_TABLE)
        connection.commit()
        applied = {
            version: checksum
            for version, checksum in connection.execute(
                "SELECT version, checksum FROM _migrations"
            )
        }
    except sqlite3.Error as exc:
        raise MigrationError(str(exc)) from exc

    known = {m.version for m in migrations}
    for version in sorted(applied):
        if version not in known:
            raise MigrationError(f"applied migration {version} is missing from the source")

    newly_applied = []
    for migration in migrations:
        if migration.version in applied:
            if bytes(applied[migration.version]) != migration.checksum:
                raise MigrationError(
                    f"migration {migration.version} was modified after it was applied"
                )
            continue
        try:
            connection.executescript("BEGIN;\n" + migration.sql)
            connection.execute(
                "INSERT INTO _migrations (version, description, checksum, installed_on)"
                " VALUES (?, ?, ?, ?)",
                (
                    migration.version,
                    migration.description,
                    migration.checksum,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            connection.commit()
        except sqlite3.Error as exc:
            if connection.in_transaction:
                connection.rollback()
            raise MigrationError(
                f"migration {migration.version} failed: {exc}"
            ) from exc
        logger.info("Applied migration %d (%s)", migration.version, migration.description)
        newly_applied.append(migration.version)
    return newly_applied


def create_database(
    path: Union[str, Path] = DB_PATH,
    migrations_dir: Optional[Union[str, Path]] = None,
) -> sqlite3.Connection:
    """Open (creating if needed) the database at ``path`` and bring its schema up to date."""
    path = Path(path)
    if path.exists():
        logger.info("Database already exists")
    else:
        logger.info("Creating database %s", path)

    try:
        connection = sqlite3.connect(str(path), check_same_thread=False)
    except sqlite3.Error as exc:
        raise MigrationError(f"cannot open database {path}: {exc}") from exc

    if migrations_dir is None:
        migrations_dir = Path(server_directory()) / "migrations"
    try:
        run_migrations(connection, migrations_dir)
    except MigrationError:
        connection.close()
        raise
    logger.info("Migration success")
    return connection