import uuid

from notedeck.fragments import NOTE_LIST_ID, note_fragment, note_selector
from notedeck.model import Note
from notedeck.sse import FragmentMergeMode


def _note():
    return Note(id=uuid.uuid4(), owner=uuid.uuid4(), content="milk", checked=False)


def test_note_selector_format():
    note_id = uuid.UUID("12345678-1234-4234-8234-123456789abc")
    assert note_selector(note_id) == "#note-12345678-1234-4234-8234-123456789abc"


def test_note_selector_differs_from_list_id():
    selector = note_selector(uuid.uuid4())
    assert NOTE_LIST_ID == "#note-list"
    assert selector.startswith("#note-")
    assert selector != NOTE_LIST_ID


def test_note_fragment_targets_note_outer():
    note = _note()
    event = note_fragment(note, "<li>milk</li>")
    assert event.selector == note_selector(note.id)
    assert event.merge_mode is FragmentMergeMode.OUTER
    assert event.fragments == "<li>milk</li>"


def test_note_fragment_serialises_selector():
    note = _note()
    out = note_fragment(note, "<li>milk</li>").to_sse()
    assert f"data: selector #note-{note.id}\n" in out
    assert "data: fragments <li>milk</li>\n" in out