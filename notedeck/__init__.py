"""Per-user to-do notes in SQLite, served as server-sent event fragments."""

__version__ = "0.1.0"