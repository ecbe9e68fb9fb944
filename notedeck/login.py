"""Login redirection and replay of actions attempted before login."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Callable, Optional

from .model import (
    ApplicationSignals,
    CheckNote,
    CreateNote,
    DeleteNote,
    EditNote,
    PendingAction,
    UncheckNote,
    UserId,
)
from .service import NoteService, NoteServiceError
from .sse import FragmentMergeMode, MergeFragments

logger = logging.getLogger(__name__)

_NOTE_PATH = re.compile(
    r"/note/([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})(/:(check|uncheck))?"
)


def parse_pending_action(
    method: str, next_path: str, signals: ApplicationSignals
) -> Optional[PendingAction]:
    """Turn the path a client was sent away from into the action it attempted."""
    method = method.upper()
    match = _NOTE_PATH.fullmatch(next_path)
    if match is not None:
        note_id = uuid.UUID(match.group(1))
        verb = match.group(3) or ""
        if verb == "check":
            return CheckNote(note_id)
        if verb == "uncheck":
            return UncheckNote(note_id)
        if method == "DELETE":
            return DeleteNote(note_id)
        if method == "PUT":
            return EditNote(note_id, signals.note)
        logger.warning("Couldn't parse the next query parameter: %s", next_path)
        return None
    if next_path == "/note":
        return CreateNote(signals.note)
    logger.warning("Login redirect for a PUT/POST/DELETE method, but no action!")
    return None


def redirect_fragment(uri: str) -> MergeFragments:
    """A meta refresh appended to the page head, which redirects without inline script."""
    return MergeFragments(
        f"<meta http-equiv='Refresh' content='0; URL={uri}'/>",
        selector="head",
        merge_mode=FragmentMergeMode.APPEND,
    )


def apply_pending_action(
    notes: NoteService, user_id: UserId, action: PendingAction
) -> None:
    """Carry out an action replayed after login; failures are logged and ignored."""
    logger.debug("Processing pending action for user")
    try:
        match action:
            case CheckNote(note_id=note_id):
                notes.update_note_checked(user_id, note_id, True)
            case UncheckNote(note_id=note_id):
                notes.update_note_checked(user_id, note_id, False)
            case EditNote(note_id=note_id, content=content):
                notes.update_note_content(user_id, note_id, content)
            case DeleteNote(note_id=note_id):
                notes.delete_note(user_id, note_id)
            case CreateNote(content=content):
                notes.create_note(user_id, content)
            case _:
                raise TypeError(f"unknown pending action: {action!r}")
    except NoteServiceError as error:
        logger.warning("Pending action failed: %s", error)


def login_events(
    method: str,
    next_path: Optional[str],
    signals: ApplicationSignals,
    authentication_url: Callable[[Optional[PendingAction]], str],
) -> list[MergeFragments]:
    """Events sent to a client that must log in before its request can proceed.

    ``authentication_url`` receives the action to replay after login and returns
    the identity provider's URL to send the client to.
    """
    if next_path is None:
        uri = "/login"
    else:
        action = parse_pending_action(method, next_path, signals)
        uri = authentication_url(action)
    return [redirect_fragment(uri)]