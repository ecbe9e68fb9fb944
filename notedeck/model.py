"""Domain types shared by the repository, the service and the request handlers."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional, Union

NoteId = uuid.UUID
UserId = uuid.UUID


@dataclass(frozen=True)
class Note:
    """A single to-do entry owned by one user."""

    id: NoteId
    owner: UserId
    content: str
    checked: bool = False


class PendingAction:
    """An action a user attempted before logging in, replayed after login."""

    __slots__ = ()


@dataclass(frozen=True)
class CheckNote(PendingAction):
    note_id: NoteId


@dataclass(frozen=True)
class UncheckNote(PendingAction):
    note_id: NoteId


@dataclass(frozen=True)
class EditNote(PendingAction):
    note_id: NoteId
    content: str


@dataclass(frozen=True)
class DeleteNote(PendingAction):
    note_id: NoteId


@dataclass(frozen=True)
class CreateNote(PendingAction):
    content: str


@dataclass(frozen=True)
class ApplicationSignals:
    """Client-side signals sent with every request."""

    note: str

    @classmethod
    def from_json(cls, data: Union[str, bytes, bytearray, dict]) -> "ApplicationSignals":
        """Build signals from a JSON document or an already decoded mapping.

        Unknown keys are ignored; a missing or non-string ``note`` raises ValueError.
        """
        payload: Any = data if isinstance(data, dict) else json.loads(data)
        if not isinstance(payload, dict):
            raise ValueError("signals must be a JSON object")
        note = payload.get("note")
        if not isinstance(note, str):
            raise ValueError("signals must contain a string field 'note'")
        return cls(note=note)


@dataclass(repr=False)
class SessionUser:
    """The authenticated user stored in the session."""

    id: UserId
    access_token: str
    access_token_hash: bytes
    expiration: timedelta
    last_health_check: datetime
    pending_action: Optional[PendingAction] = field(default=None)

    @property
    def session_auth_hash(self) -> bytes:
        return self.access_token_hash

    def __repr__(self) -> str:
        return (
            f"SessionUser(id={self.id!r}, access_token='<redacted>', "
            f"access_token_hash='<redacted>', pending_action={self.pending_action!r}, "
            f"expiration={self.expiration!r}, last_health_check={self.last_health_check!r})"
        )