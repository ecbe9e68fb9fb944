"""Application state and the note request handlers, each returning SSE events."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Union

import sqlite3

from .fragments import NOTE_LIST_ID, note_fragment, note_selector
from .model import ApplicationSignals, Note, NoteId, UserId
from .repository import NoteRepository
from .service import NoteService
from .sse import FragmentMergeMode, MergeFragments, MergeSignals, RemoveFragments

Render = Callable[[Note], str]
Signals = Union[str, bytes, bytearray, Mapping[str, Any]]


@dataclass(frozen=True)
class AppState:
    """State shared by all request handlers."""

    notes: NoteService

    @classmethod
    def from_database(cls, connection: sqlite3.Connection) -> "AppState":
        return cls(notes=NoteService(NoteRepository(connection)))


def _content_from(signals: Signals) -> str:
    payload = signals if isinstance(signals, Mapping) else json.loads(signals)
    if not isinstance(payload, Mapping):
        raise ValueError("signals must be a JSON object")
    content = payload.get("content")
    if not isinstance(content, str):
        raise ValueError("signals must contain a string field 'content'")
    return content


def delete_note(notes: NoteService, user_id: UserId, note_id: NoteId) -> list[RemoveFragments]:
    notes.delete_note(user_id, note_id)
    return [RemoveFragments(note_selector(note_id))]


def get_note(
    notes: NoteService, user_id: UserId, note_id: NoteId, render: Render
) -> list[MergeFragments]:
    note = notes.get_note(user_id, note_id)
    return [note_fragment(note, render(note))]


def edit_note_view(
    notes: NoteService, user_id: UserId, note_id: NoteId, render: Render
) -> list[MergeFragments]:
    """Replace a note with its edit form; ``render`` produces the form's HTML."""
    note = notes.get_note(user_id, note_id)
    return [note_fragment(note, render(note))]


def update_note(
    notes: NoteService, user_id: UserId, note_id: NoteId, signals: Signals, render: Render
) -> list[MergeFragments]:
    """Store new content taken from the ``content`` signal."""
    note = notes.update_note_content(user_id, note_id, _content_from(signals))
    return [note_fragment(note, render(note))]


def new_note(
    notes: NoteService, user_id: UserId, signals: ApplicationSignals, render: Render
) -> list[Union[MergeSignals, MergeFragments]]:
    """Create a note, clear the input field and append the note to the list."""
    note = notes.create_note(user_id, signals.note)
    fragment = replace(
        note_fragment(note, render(note)),
        selector=NOTE_LIST_ID,
        merge_mode=FragmentMergeMode.APPEND,
    )
    return [MergeSignals("{ note: '' }"), fragment]


def check_note(
    notes: NoteService, user_id: UserId, note_id: NoteId, render: Render
) -> list[MergeFragments]:
    note = notes.update_note_checked(user_id, note_id, True)
    return [note_fragment(note, render(note))]


def uncheck_note(
    notes: NoteService, user_id: UserId, note_id: NoteId, render: Render
) -> list[MergeFragments]:
    note = notes.update_note_checked(user_id, note_id, False)
    return [note_fragment(note, render(note))]