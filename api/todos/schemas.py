"""
Pydantic schemas for todo lists and their embedded todos.
"""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from pydantic import Field

from core.schemas import ApiModel, Title


class Priority(str, Enum):
    HIGH = "High"
    NORMAL = "Normal"
    LOW = "Low"


class Todo(ApiModel):
    id: UUID
    title: str
    status: bool = False
    priority: Priority = Priority.NORMAL


class TodoList(ApiModel):
    id: UUID
    owner_id: UUID
    title: str
    todos: list[Todo] = Field(default_factory=list)


class TodoListTitleRequest(ApiModel):
    title: Title


class TodoRequest(ApiModel):
    title: Title
    status: bool = False
    priority: Priority = Priority.NORMAL
