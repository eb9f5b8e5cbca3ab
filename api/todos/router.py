"""
Todo list API endpoints. All routes require a bearer access token.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from auth.schemas import User

from . import schemas, service
from .dependencies import get_todo_list_repository
from .repository import TodoListRepository

router = APIRouter(prefix="/todo-lists", dependencies=[Depends(auth_dependencies.get_current_user)])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_todo_list(
    payload: schemas.TodoListTitleRequest,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> schemas.TodoList:
    return await service.create_todo_list(payload, owner_id=current_user.id, todo_lists=todo_lists)


@router.get("")
async def list_todo_lists(
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> list[schemas.TodoList]:
    return await service.list_todo_lists(owner_id=current_user.id, todo_lists=todo_lists)


@router.get("/{list_id}")
async def get_todo_list(
    list_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> schemas.TodoList:
    return await service.get_todo_list(list_id, owner_id=current_user.id, todo_lists=todo_lists)


@router.patch("/{list_id}")
async def rename_todo_list(
    list_id: UUID,
    payload: schemas.TodoListTitleRequest,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> dict:
    await service.rename_todo_list(list_id, payload, owner_id=current_user.id, todo_lists=todo_lists)
    return {"ok": True, "id": str(list_id)}


@router.delete("/{list_id}")
async def delete_todo_list(
    list_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> dict:
    await service.delete_todo_list(list_id, owner_id=current_user.id, todo_lists=todo_lists)
    return {"ok": True, "id": str(list_id)}


@router.post("/{list_id}/todos", status_code=status.HTTP_201_CREATED)
async def create_todo(
    list_id: UUID,
    payload: schemas.TodoRequest,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> dict:
    await service.create_todo(list_id, payload, owner_id=current_user.id, todo_lists=todo_lists)
    return {"ok": True, "id": str(list_id)}


@router.put("/{list_id}/todos/{todo_id}")
async def modify_todo(
    list_id: UUID,
    todo_id: UUID,
    payload: schemas.TodoRequest,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> dict:
    await service.modify_todo(list_id, todo_id, payload, owner_id=current_user.id, todo_lists=todo_lists)
    return {"ok": True, "id": str(todo_id)}


@router.delete("/{list_id}/todos/{todo_id}")
async def delete_todo(
    list_id: UUID,
    todo_id: UUID,
    current_user: User = Depends(auth_dependencies.get_current_user),
    todo_lists: TodoListRepository = Depends(get_todo_list_repository),
) -> dict:
    await service.delete_todo(list_id, todo_id, owner_id=current_user.id, todo_lists=todo_lists)
    return {"ok": True, "id": str(todo_id)}
