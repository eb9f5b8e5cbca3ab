"""
Note persistence (raw SQL).

Every statement filters on both the note id and its owner, so a note that
belongs to someone else behaves exactly like a note that does not exist.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Protocol
from uuid import UUID, uuid4

from pydantic import ValidationError

from core import db, errors

from .schemas import Note, NoteSummary

logger = logging.getLogger(__name__)

_NOTE_COLUMNS = "id, owner_id, title, content, tags, todo_list_refs"


class NoteRepository(Protocol):
    async def create(self, owner_id: UUID, title: str, content: str, tags: list[str]) -> Note: ...

    async def delete(self, note_id: UUID, owner_id: UUID) -> None: ...

    async def update(
        self,
        owner_id: UUID,
        note_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
    ) -> None: ...

    async def get_by_id(self, note_id: UUID, owner_id: UUID) -> Note: ...

    def list_summaries_by_owner(self, owner_id: UUID) -> AsyncIterator[NoteSummary]: ...

    async def add_todo_list_ref(self, note_id: UUID, owner_id: UUID, todo_list_id: UUID) -> None: ...

    async def remove_todo_list_ref(self, note_id: UUID, owner_id: UUID, todo_list_id: UUID) -> None: ...


def _to_note(row: dict) -> Note:
    return Note(
        id=row["id"],
        owner_id=row["owner_id"],
        title=row["title"],
        content=row["content"],
        tags=list(row["tags"] or []),
        todo_list_refs=list(row["todo_list_refs"] or []),
    )


class PostgresNoteRepository:
    async def create(self, owner_id: UUID, title: str, content: str, tags: list[str]) -> Note:
        row = await db.fetch_one(
            f"""
            INSERT INTO notes (id, owner_id, title, content, tags)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {_NOTE_COLUMNS}
            """,
            uuid4(),
            owner_id,
            title,
            content,
            list(tags),
        )
        if row is None:
            raise errors.NothingChanged("Note was not created.")
        return _to_note(row)

    async def delete(self, note_id: UUID, owner_id: UUID) -> None:
        row = await db.fetch_one(
            """
            DELETE FROM notes
            WHERE id = $1
              AND owner_id = $2
            RETURNING id
            """,
            note_id,
            owner_id,
        )
        if row is None:
            raise errors.NotFound("Note not found.")

    async def update(
        self,
        owner_id: UUID,
        note_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
    ) -> None:
        # todo_list_refs is only ever changed through pin/unpin.
        row = await db.fetch_one(
            """
            UPDATE notes
            SET title = COALESCE($3, title),
                content = COALESCE($4, content),
                tags = COALESCE($5::text[], tags),
                updated_at = now()
            WHERE id = $1
              AND owner_id = $2
            RETURNING id
            """,
            note_id,
            owner_id,
            title,
            content,
            list(tags) if tags is not None else None,
        )
        if row is None:
            raise errors.NotFound("Note not found.")

    async def get_by_id(self, note_id: UUID, owner_id: UUID) -> Note:
        row = await db.fetch_one(
            f"""
            SELECT {_NOTE_COLUMNS}
            FROM notes
            WHERE id = $1
              AND owner_id = $2
            """,
            note_id,
            owner_id,
        )
        if row is None:
            raise errors.NotFound("Note not found.")
        return _to_note(row)

    async def list_summaries_by_owner(self, owner_id: UUID) -> AsyncIterator[NoteSummary]:
        rows = db.iterate(
            """
            SELECT id, title, tags
            FROM notes
            WHERE owner_id = $1
            """,
            owner_id,
        )
        async for row in rows:
            try:
                yield NoteSummary(id=row["id"], title=row["title"], tags=list(row["tags"] or []))
            except ValidationError:
                # One broken row must not hide the rest of the listing.
                logger.warning("note_summary_skipped note_id=%s owner_id=%s", row.get("id"), owner_id)

    async def add_todo_list_ref(self, note_id: UUID, owner_id: UUID, todo_list_id: UUID) -> None:
        # Pinning the same list twice keeps a single reference.
        row = await db.fetch_one(
            """
            UPDATE notes
            SET todo_list_refs = CASE
                    WHEN $3 = ANY(todo_list_refs) THEN todo_list_refs
                    ELSE array_append(todo_list_refs, $3)
                END,
                updated_at = now()
            WHERE id = $1
              AND owner_id = $2
            RETURNING id
            """,
            note_id,
            owner_id,
            todo_list_id,
        )
        if row is None:
            raise errors.NotFound("Note not found.")

    async def remove_todo_list_ref(self, note_id: UUID, owner_id: UUID, todo_list_id: UUID) -> None:
        row = await db.fetch_one(
            """
            UPDATE notes
            SET todo_list_refs = array_remove(todo_list_refs, $3),
                updated_at = now()
            WHERE id = $1
              AND owner_id = $2
              AND $3 = ANY(todo_list_refs)
            RETURNING id
            """,
            note_id,
            owner_id,
            todo_list_id,
        )
        if row is None:
            raise errors.NotFound("Todo list is not pinned to this note.")
