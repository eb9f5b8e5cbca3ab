"""
Pinning: attaching a user's todo lists to one of their notes by reference.

The list is checked before the note is written to, but the two steps are
separate statements. A list deleted in between leaves a dangling reference,
which `pinned_todo_lists` silently skips.
"""

from __future__ import annotations

from uuid import UUID

from notes.repository import NoteRepository
from todos.repository import TodoListRepository
from todos.schemas import TodoList


async def pin(
    *,
    owner_id: UUID,
    note_id: UUID,
    list_id: UUID,
    notes: NoteRepository,
    todo_lists: TodoListRepository,
) -> None:
    # Raises NotFound for missing lists and other users' lists alike.
    todo_list = await todo_lists.get_by_id(list_id, owner_id)
    await notes.add_todo_list_ref(note_id, owner_id, todo_list.id)


async def unpin(
    *,
    owner_id: UUID,
    note_id: UUID,
    list_id: UUID,
    notes: NoteRepository,
) -> None:
    await notes.remove_todo_list_ref(note_id, owner_id, list_id)


async def pinned_todo_lists(
    *,
    owner_id: UUID,
    note_id: UUID,
    notes: NoteRepository,
    todo_lists: TodoListRepository,
) -> list[TodoList]:
    note = await notes.get_by_id(note_id, owner_id)
    return await todo_lists.get_many(note.todo_list_refs, owner_id)
