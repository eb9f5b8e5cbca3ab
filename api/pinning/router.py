"""
Pinning API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.schemas import User
from notes.dependencies import get_note_repository
from notes.repository import NoteRepository
from todos.dependencies import get_todo_list_repository
from todos.repository import TodoListRepository
from todos.schemas import TodoList

from . import service

router = APIRouter(prefix="/notes", dependencies=[Depends(auth_dependencies.get_current_user)])


@router.get("/{note_id}/todo-lists")
async def get_pinned_todo_lists(
    note_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> list[TodoList]:
    return await service.pinned_todo_lists(
        owner_id=current_user.id,
        note_id=note_id,
        notes=notes,
        todo_lists=todo_lists,
    )


@router.post("/{note_id}/todo-lists/{list_id}")
async def pin_todo_list(
    note_id: UUID,
    list_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> dict:
    await service.pin(
        owner_id=current_user.id,
        note_id=note_id,
        list_id=list_id,
        notes=notes,
        todo_lists=todo_lists,
    )
    return {"ok": True, "noteId": str(note_id), "todoListId": str(list_id)}


@router.delete("/{note_id}/todo-lists/{list_id}")
async def unpin_todo_list(
    note_id: UUID,
    list_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
) -> dict:
    await service.unpin(owner_id=current_user.id, note_id=note_id, list_id=list_id, notes=notes)
    return {"ok": True, "noteId": str(note_id), "todoListId": str(list_id)}
