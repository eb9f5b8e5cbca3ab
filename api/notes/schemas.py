"""
Pydantic schemas for notes.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from core.schemas import ApiModel, Title


class Note(ApiModel):
    id: UUID
    owner_id: UUID
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    todo_list_refs: list[UUID] = Field(default_factory=list)


class NoteSummary(ApiModel):
    id: UUID
    title: str
    tags: list[str] = Field(default_factory=list)


class CreateNoteRequest(ApiModel):
    title: Title
    content: str = Field(default="", max_length=100_000)
    tags: list[str] = Field(default_factory=list)


class UpdateNoteRequest(ApiModel):
    """
    Fields left out (or null) keep their stored value.
    """

    title: Title | None = None
    content: str | None = Field(default=None, max_length=100_000)
    tags: list[str] | None = None
