"""
Todo list business logic.
"""

from __future__ import annotations

from uuid import UUID

from . import schemas
from .repository import TodoListRepository


async def create_todo_list(
    payload: schemas.TodoListTitleRequest,
    *,
    owner_id: UUID,
    todo_lists: TodoListRepository,
) -> schemas.TodoList:
    return await todo_lists.create(owner_id, payload.title)


async def list_todo_lists(*, owner_id: UUID, todo_lists: TodoListRepository) -> list[schemas.TodoList]:
    return await todo_lists.get_all_by_owner(owner_id)


async def get_todo_list(list_id: UUID, *, owner_id: UUID, todo_lists: TodoListRepository) -> schemas.TodoList:
    return await todo_lists.get_by_id(list_id, owner_id)


async def rename_todo_list(
    list_id: UUID,
    payload: schemas.TodoListTitleRequest,
    *,
    owner_id: UUID,
    todo_lists: TodoListRepository,
) -> None:
    await todo_lists.rename(list_id, owner_id, payload.title)


async def delete_todo_list(list_id: UUID, *, owner_id: UUID, todo_lists: TodoListRepository) -> None:
    await todo_lists.delete(list_id, owner_id)


async def create_todo(
    list_id: UUID,
    payload: schemas.TodoRequest,
    *,
    owner_id: UUID,
    todo_lists: TodoListRepository,
) -> None:
    await todo_lists.create_todo(list_id, owner_id, payload.title, payload.status, payload.priority)


async def modify_todo(
    list_id: UUID,
    todo_id: UUID,
    payload: schemas.TodoRequest,
    *,
    owner_id: UUID,
    todo_lists: TodoListRepository,
) -> None:
    await todo_lists.modify_todo(
        list_id,
        owner_id,
        todo_id,
        payload.title,
        payload.status,
        payload.priority,
    )


async def delete_todo(
    list_id: UUID,
    todo_id: UUID,
    *,
    owner_id: UUID,
    todo_lists: TodoListRepository,
) -> None:
    await todo_lists.delete_todo(list_id, owner_id, todo_id)
