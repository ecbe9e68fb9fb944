"""Note operations on behalf of a user, with failures logged and raised."""

from __future__ import annotations

import logging

from .model import Note, NoteId, UserId
from .repository import NoteRepository, RepositoryError

logger = logging.getLogger(__name__)


class NoteServiceError(Exception):
    """A note operation could not be carried out."""


class NoteService:
    """The application's entry point for reading and changing notes."""

    def __init__(self, repository: NoteRepository) -> None:
        self._repository = repository

    def __repr__(self) -> str:
        return f"NoteService(repository={self._repository!r})"

    @staticmethod
    def _fail(message: str, error: RepositoryError) -> NoteServiceError:
        logger.error("%s: %r", message, error)
        return NoteServiceError(f"{message}: {error}")

    def create_note(self, user_id: UserId, content: str) -> Note:
        try:
            note_id = self._repository.create(user_id, content)
        except RepositoryError as error:
            raise self._fail("Failed to create note", error) from error
        return Note(id=note_id, owner=user_id, content=content, checked=False)

    def get_note(self, user_id: UserId, note_id: NoteId) -> Note:
        try:
            return self._repository.find_by_id(user_id, note_id)
        except RepositoryError as error:
            raise self._fail("Failed to get note", error) from error

    def get_notes(self, user_id: UserId) -> list[Note]:
        try:
            return self._repository.find_all(user_id)
        except RepositoryError as error:
            raise self._fail("Failed to get notes", error) from error

    def update_note_content(self, user_id: UserId, note_id: NoteId, content: str) -> Note:
        try:
            self._repository.update_content(user_id, note_id, content)
        except RepositoryError as error:
            raise self._fail("Failed to update note", error) from error
        return self.get_note(user_id, note_id)

    def update_note_checked(self, user_id: UserId, note_id: NoteId, checked: bool) -> Note:
        try:
            self._repository.update_checked(user_id, note_id, checked)
        except RepositoryError as error:
            raise self._fail("Failed to update note", error) from error
        return self.get_note(user_id, note_id)

    def delete_note(self, user_id: UserId, note_id: NoteId) -> int:
        try:
            return self._repository.delete(user_id, note_id)
        except RepositoryError as error:
            raise self._fail("Failed to delete note", error) from error