import uuid
from datetime import datetime, timedelta, timezone

import pytest

from notedeck.model import (
    ApplicationSignals,
    CheckNote,
    CreateNote,
    DeleteNote,
    EditNote,
    Note,
    PendingAction,
    SessionUser,
    UncheckNote,
)


def test_signals_from_json_string():
    assert ApplicationSignals.from_json('{"note": "buy milk"}').note == "buy milk"


def test_signals_from_bytes_and_dict():
    assert ApplicationSignals.from_json(b'{"note": "a"}') == ApplicationSignals("a")
    assert ApplicationSignals.from_json({"note": "b"}) == ApplicationSignals("b")


def test_signals_ignore_unknown_keys():
    signals = ApplicationSignals.from_json('{"note": "x", "other": 1}')
    assert signals == ApplicationSignals(note="x")


@pytest.mark.parametrize("data", ['{}', '{"note": 3}', '[1, 2]', 'not json'])
def test_signals_reject_bad_input(data):
    with pytest.raises(ValueError):
        ApplicationSignals.from_json(data)


def test_pending_actions_are_values():
    note_id = uuid.uuid4()
    assert CheckNote(note_id) == CheckNote(note_id)
    assert CheckNote(note_id) != UncheckNote(note_id)
    assert EditNote(note_id, "text").content == "text"
    assert DeleteNote(note_id).note_id == note_id
    for action in (CheckNote(note_id), UncheckNote(note_id), CreateNote("c")):
        assert isinstance(action, PendingAction)


def test_note_defaults_to_unchecked():
    note = Note(id=uuid.uuid4(), owner=uuid.uuid4(), content="c")
    assert note.checked is False


def test_session_user_repr_redacts_secrets():
    user = SessionUser(
        id=uuid.uuid4(),
        access_token="token",
        access_token_hash=b"token",
        expiration=timedelta(seconds=60),
        last_health_check=datetime(2024, 1, 1, tzinfo=timezone.utc),
        pending_action=CreateNote("later"),
    )
    text = repr(user)
    assert "'token'" not in text
    assert text.count("<redacted>") == 2
    assert "CreateNote(content='later')" in text
    assert user.session_auth_hash == b"token"