from __future__ import annotations

from .repository import NoteRepository, PostgresNoteRepository


def get_note_repository() -> NoteRepository:
    return PostgresNoteRepository()
