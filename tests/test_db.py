import sqlite3

import pytest

from notedeck.db import MigrationError, create_database, run_migrations

NOTES_SQL = (
    "CREATE TABLE Notes (id BLOB PRIMARY KEY NOT NULL, owner BLOB NOT NULL, "
    "content TEXT NOT NULL, checked BOOLEAN NOT NULL);"
)


@pytest.fixture
def migrations(tmp_path):
    directory = tmp_path / "migrations"
    directory.mkdir()
    (directory / "1_create_notes.sql").write_text(NOTES_SQL)
    return directory


def _tables(connection):
    return {row[0] for row in connection.execute("SELECT name FROM sqlite_master WHERE type='table'")}


def test_create_database_applies_migrations(tmp_path, migrations):
    connection = create_database(tmp_path / "app.db", migrations)
    try:
        assert "Notes" in _tables(connection)
    finally:
        connection.close()
    assert (tmp_path / "app.db").exists()


def test_migrations_run_once(tmp_path, migrations):
    create_database(tmp_path / "app.db", migrations).close()
    connection = create_database(tmp_path / "app.db", migrations)
    try:
        assert run_migrations(connection, migrations) == []
    finally:
        connection.close()


def test_migrations_applied_in_numeric_order(tmp_path):
    directory = tmp_path / "m"
    directory.mkdir()
    (directory / "10_second.sql").write_text("ALTER TABLE t ADD COLUMN b TEXT;")
    (directory / "2_first.sql").write_text("CREATE TABLE t (a TEXT);")
    (directory / "3_first.down.sql").write_text("this is ignored")
    connection = sqlite3.connect(":memory:")
    assert run_migrations(connection, directory) == [2, 10]
    columns = [row[1] for row in connection.execute("PRAGMA table_info(t)")]
    assert columns == ["a", "b"]


def test_modified_migration_is_rejected(tmp_path, migrations):
    connection = sqlite3.connect(":memory:")
    run_migrations(connection, migrations)
    (migrations / "1_create_notes.sql").write_text(NOTES_SQL + "\n-- changed")
    with pytest.raises(MigrationError):
        run_migrations(connection, migrations)


def test_missing_applied_migration_is_rejected(tmp_path, migrations):
    connection = sqlite3.connect(":memory:")
    run_migrations(connection, migrations)
    (migrations / "1_create_notes.sql").unlink()
    with pytest.raises(MigrationError):
        run_migrations(connection, migrations)


def test_failing_migration_is_not_recorded(tmp_path):
    directory = tmp_path / "m"
    directory.mkdir()
    (directory / "1_broken.sql").write_text("CREATE TABLE ok (a TEXT); NOT SQL AT ALL;")
    connection = sqlite3.connect(":memory:")
    with pytest.raises(MigrationError):
        run_migrations(connection, directory)
    assert connection.execute("SELECT COUNT(*) FROM _migrations").fetchone()[0] == 0
    assert "ok" not in _tables(connection)


def test_missing_directory(tmp_path):
    with pytest.raises(MigrationError):
        run_migrations(sqlite3.connect(":memory:"), tmp_path / "absent")


def test_bad_file_name(tmp_path):
    directory = tmp_path / "m"
    directory.mkdir()
    (directory / "create.sql").write_text(NOTES_SQL)
    with pytest.raises(MigrationError):
        run_migrations(sqlite3.connect(":memory:"), directory)