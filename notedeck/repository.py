"""Persistence of notes in the SQLite database."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from typing import Iterator

from .model import Note, NoteId, UserId

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """A database operation failed."""


class NoteNotFound(RepositoryError):
    """No note with the requested id exists for the owner."""


@contextmanager
def _database_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise RepositoryError(str(exc)) from exc


def _row_to_note(row: tuple) -> Note:
    note_id, owner, content, checked = row
    return Note(
        id=uuid.UUID(bytes=bytes(note_id)),
        owner=uuid.UUID(bytes=bytes(owner)),
        content=content,
        checked=bool(checked),
    )


class NoteRepository:
    """Reads and writes rows of the Notes table, always scoped to an owner."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _write(self, sql: str, params: tuple) -> int:
        with _database_errors():
            with self._connection:
                return self._connection.execute(sql, params).rowcount

    def create(self, owner: UserId, content: str) -> NoteId:
        note_id = uuid.uuid4()
        logger.debug("Creating note for %s", owner)
        self._write(
            "INSERT INTO Notes (id, owner, content, checked) VALUES (?, ?, ?, ?)",
            (note_id.bytes, owner.bytes, content, False),
        )
        return note_id

    def delete(self, owner: UserId, note_id: NoteId) -> int:
        return self._write(
            "DELETE FROM Notes WHERE owner = ? AND id = ?",
            (owner.bytes, note_id.bytes),
        )

    def find_by_id(self, owner: UserId, note_id: NoteId) -> Note:
        with _database_errors():
            row = self._connection.execute(
                "SELECT id, owner, content, checked FROM Notes WHERE owner = ? AND id = ?",
                (owner.bytes, note_id.bytes),
            ).fetchone()
        if row is None:
            raise NoteNotFound(f"note {note_id} not found")
        return _row_to_note(row)

    def find_all(self, owner: UserId) -> list[Note]:
        with _database_errors():
            rows = self._connection.execute(
                "SELECT id, owner, content, checked FROM Notes WHERE owner = ?",
                (owner.bytes,),
            ).fetchall()
        return [_row_to_note(row) for row in rows]

    def update_checked(self, owner: UserId, note_id: NoteId, checked: bool) -> int:
        return self._write(
            "UPDATE Notes SET checked = ? WHERE owner = ? AND id = ?",
            (checked, owner.bytes, note_id.bytes),
        )

    def update_content(self, owner: UserId, note_id: NoteId, content: str) -> int:
        return self._write(
            "UPDATE Notes SET content = ? WHERE owner = ? AND id = ?",
            (content, owner.bytes, note_id.bytes),
        )