from __future__ import annotations

from .repository import PostgresTodoListRepository, TodoListRepository


def get_todo_list_repository() -> TodoListRepository:
    return PostgresTodoListRepository()
