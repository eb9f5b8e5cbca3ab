"""
Note business logic.
"""

from __future__ import annotations

from uuid import UUID

from . import schemas
from .repository import NoteRepository


def _clean_tags(tags: list[str]) -> list[str]:
    # Keep order, drop blanks.
    return [tag.strip() for tag in tags if tag and tag.strip()]


async def create_note(
    payload: schemas.CreateNoteRequest,
    *,
    owner_id: UUID,
    notes: NoteRepository,
) -> schemas.Note:
    return await notes.create(owner_id, payload.title, payload.content, _clean_tags(payload.tags))


async def update_note(
    note_id: UUID,
    payload: schemas.UpdateNoteRequest,
    *,
    owner_id: UUID,
    notes: NoteRepository,
) -> None:
    await notes.update(
        owner_id,
        note_id,
        title=payload.title,
        content=payload.content,
        tags=_clean_tags(payload.tags) if payload.tags is not None else None,
    )


async def delete_note(note_id: UUID, *, owner_id: UUID, notes: NoteRepository) -> None:
    await notes.delete(note_id, owner_id)


async def get_note(note_id: UUID, *, owner_id: UUID, notes: NoteRepository) -> schemas.Note:
    return await notes.get_by_id(note_id, owner_id)


async def list_notes(*, owner_id: UUID, notes: NoteRepository) -> list[schemas.NoteSummary]:
    # No notes is an empty list, not an error.
    return [summary async for summary in notes.list_summaries_by_owner(owner_id)]
