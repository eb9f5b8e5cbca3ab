"""
Note API endpoints. All routes require a bearer access token.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from auth.schemas import User

from . import schemas, service
from .dependencies import get_note_repository
from .repository import NoteRepository

router = APIRouter(prefix="/notes", dependencies=[Depends(auth_dependencies.get_current_user)])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: schemas.CreateNoteRequest,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
) -> schemas.Note:
    return await service.create_note(payload, owner_id=current_user.id, notes=notes)


@router.get("")
async def list_notes(
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
) -> list[schemas.NoteSummary]:
    return await service.list_notes(owner_id=current_user.id, notes=notes)


@router.get("/{note_id}")
async def get_note(
    note_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
) -> schemas.Note:
    return await service.get_note(note_id, owner_id=current_user.id, notes=notes)


@router.patch("/{note_id}")
async def update_note(
    note_id: UUID,
    payload: schemas.UpdateNoteRequest,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
) -> dict:
    await service.update_note(note_id, payload, owner_id=current_user.id, notes=notes)
    return {"ok": True, "id": str(note_id)}


@router.delete("/{note_id}")
async def delete_note(
    note_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    notes: NoteRepository = Depends(get_note_repository),
) -> dict:
    await service.delete_note(note_id, owner_id=current_user.id, notes=notes)
    return {"ok": True, "id": str(note_id)}
