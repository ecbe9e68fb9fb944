# notedeck

notedeck is the core of a small multi-user to-do list. It keeps each
user's notes in SQLite and turns every change into server-sent events
that a Datastar-style hypermedia front end can merge straight into the
page.

Every repository and service operation is scoped to an owner: a user can
only read, edit, check, uncheck or delete their own notes.

The package uses only the standard library.

## What is inside

- `notedeck.model`: the frozen dataclass `Note` (`id`, `owner`, `content`,
  `checked`); the `PendingAction` family (`CheckNote`, `UncheckNote`,
  `EditNote`, `DeleteNote`, `CreateNote`); `ApplicationSignals`, whose
  `from_json` accepts a JSON string, bytes or a dict and requires a string
  `note` field (raising `ValueError` otherwise); and `SessionUser`, whose
  `repr` shows `<redacted>` in place of the access token and its hash.
- `notedeck.db`: `create_database(path="sqlite.db", migrations_dir=None)`
  opens (or creates) the SQLite file and applies the migrations found in
  `migrations_dir`, which defaults to `migrations/` under
  `config.server_directory()`. `run_migrations(connection, migrations_dir)`
  does the second half on an existing connection and returns the versions
  it applied. Failures raise `MigrationError`.
- `notedeck.repository`: `NoteRepository`, plain SQL over the `Notes`
  table. `create` returns the new note's id; `delete`, `update_checked` and
  `update_content` return the number of rows changed. A missing note in
  `find_by_id` raises `NoteNotFound`; other database failures raise
  `RepositoryError`.
- `notedeck.service`: `NoteService`, the operations the handlers use
  (`create_note`, `get_note`, `get_notes`, `update_note_content`,
  `update_note_checked`, `delete_note`). Failures are logged and raised as
  `NoteServiceError`.
- `notedeck.sse`: the event types `MergeFragments`, `RemoveFragments` and
  `MergeSignals`, each with `to_sse()`; the `FragmentMergeMode` enum; and
  `format_stream`, which joins a sequence of events into the text of an
  event stream.
- `notedeck.fragments`: `NOTE_LIST_ID`, `note_selector` (`#note-<id>`) and
  `note_fragment`, which places rendered note HTML over that element with
  the `outer` merge mode.
- `notedeck.handlers`: `AppState` (built with `AppState.from_database`)
  and one function per note endpoint. Each takes the service and the
  user's id and returns a list of events:
  - `get_note`, `edit_note_view`, `check_note`, `uncheck_note` take a note
    id and a `render` callable that turns a `Note` into HTML;
  - `update_note` takes a note id, signals carrying a string `content`
    field (JSON text, bytes or a mapping) and `render`;
  - `new_note` takes `ApplicationSignals` and `render`, and returns a
    signal merge that clears the input field followed by the new note
    appended to `#note-list`;
  - `delete_note` takes a note id and returns a `RemoveFragments` event.
- `notedeck.login`: login helpers. `parse_pending_action` turns the path
  an unauthenticated request was aimed at (`/note`, `/note/<id>`,
  `/note/<id>/:check`, `/note/<id>/:uncheck`) and its HTTP method into the
  action it wanted; `login_events` answers with a meta-refresh redirect,
  either to `/login` or to the URL your `authentication_url` callable
  returns for that action; `apply_pending_action` carries the action out
  once the user is back, logging and ignoring service failures.
- `notedeck.config`: `server_directory` (the `NOTEDECK_SERVER_DIR`
  environment variable, else the working directory), the
  `content_security_policy` and `default_http_headers` meant for every
  response, and `init_logging`, which sets the `notedeck` logger's level
  from `NOTEDECK_LOG` (default `info`).

## Migrations

Migration files are named `<version>_<description>.sql` (or `.up.sql`);
`.down.sql` files are ignored. Applied versions are recorded with a
checksum in a `_migrations` table, and a migration changed after it was
applied raises `MigrationError`. The package ships no migrations; the
repository expects a table such as:

```sql
CREATE TABLE Notes (
    id BLOB PRIMARY KEY,
    owner BLOB NOT NULL,
    content TEXT NOT NULL,
    checked BOOLEAN NOT NULL
);
```

Ids and owners are stored as the 16 raw bytes of their UUIDs.

## Example

```python
import uuid

from notedeck.db import create_database
from notedeck.repository import NoteRepository
from notedeck.service import NoteService

connection = create_database("notes.db", "migrations")
notes = NoteService(NoteRepository(connection))

owner = uuid.uuid4()
note = notes.create_note(owner, "Buy milk")
notes.update_note_checked(owner, note.id, True)

for item in notes.get_notes(owner):
    print(item.content, item.checked)
```

Serving the events for a request is a matter of handing a handler's
output to `format_stream`:

```python
from notedeck import handlers
from notedeck.sse import format_stream

def render(note):
    return f"<li id='note-{note.id}'>{note.content}</li>"

body = format_stream(handlers.get_note(notes, owner, note.id, render))
```

## What it does not do

notedeck has no web server, routing or command to start one, no session
handling, and no identity-provider client: building the authentication
URL and checking the login callback are left to the caller, who passes
`authentication_url` to `login_events`. It ships no HTML templates or
static files either; note HTML comes from the `render` callable you
supply.

## Tests

The test suite uses pytest and is installed with the `test` extra.