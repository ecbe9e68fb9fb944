"""HTML fragments for notes and the selectors they replace."""

from __future__ import annotations

from .model import Note, NoteId
from .sse import FragmentMergeMode, MergeFragments

NOTE_LIST_ID = "#note-list"


def note_selector(note_id: NoteId) -> str:
    """CSS selector of the element showing a note."""
    return f"#note-{note_id}"


def note_fragment(note: Note, html: str) -> MergeFragments:
    """Event that replaces a note's element with freshly rendered HTML."""
    return MergeFragments(
        html,
        selector=note_selector(note.id),
        merge_mode=FragmentMergeMode.OUTER,
    )