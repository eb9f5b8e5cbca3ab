"""
Todo list persistence (raw SQL).

A todo list is one row; its todos live in a jsonb array on that row. Todos
are addressed by their `id` inside the array, never by position, and every
change to the array is a single UPDATE.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID, uuid4

from core import db, errors

from .schemas import Priority, TodoList

_LIST_COLUMNS = "id, owner_id, title, todos"


class TodoListRepository(Protocol):
    async def create(self, owner_id: UUID, title: str) -> TodoList: ...

    async def get_all_by_owner(self, owner_id: UUID) -> list[TodoList]: ...

    async def get_many(self, ids: Iterable[UUID], owner_id: UUID) -> list[TodoList]: ...

    async def get_by_id(self, list_id: UUID, owner_id: UUID) -> TodoList: ...

    async def rename(self, list_id: UUID, owner_id: UUID, title: str) -> None: ...

    async def delete(self, list_id: UUID, owner_id: UUID) -> None: ...

    async def create_todo(
        self, list_id: UUID, owner_id: UUID, title: str, status: bool, priority: Priority
    ) -> None: ...

    async def modify_todo(
        self,
        list_id: UUID,
        owner_id: UUID,
        todo_id: UUID,
        title: str,
        status: bool,
        priority: Priority,
    ) -> None: ...

    async def delete_todo(self, list_id: UUID, owner_id: UUID, todo_id: UUID) -> None: ...


def _to_todo_list(row: dict) -> TodoList:
    return TodoList.model_validate(
        {
            "id": row["id"],
            "owner_id": row["owner_id"],
            "title": row["title"],
            "todos": row["todos"] or [],
        }
    )


def _todo_document(todo_id: UUID, title: str, status: bool, priority: Priority) -> dict:
    return {
        "id": str(todo_id),
        "title": title,
        "status": bool(status),
        "priority": Priority(priority).value,
    }


def _not_found() -> errors.NotFound:
    return errors.NotFound("Todo list not found.")


class PostgresTodoListRepository:
    async def create(self, owner_id: UUID, title: str) -> TodoList:
        row = await db.fetch_one(
            f"""
            INSERT INTO todo_lists (id, owner_id, title)
            VALUES ($1, $2, $3)
            RETURNING {_LIST_COLUMNS}
            """,
            uuid4(),
            owner_id,
            title,
        )
        if row is None:
            raise errors.NothingChanged("Todo list was not created.")
        return _to_todo_list(row)

    async def get_all_by_owner(self, owner_id: UUID) -> list[TodoList]:
        rows = await db.fetch_all(
            f"""
            SELECT {_LIST_COLUMNS}
            FROM todo_lists
            WHERE owner_id = $1
            ORDER BY created_at ASC
            """,
            owner_id,
        )
        # Unlike notes, having no lists at all is reported as NotFound.
        if not rows:
            raise errors.NotFound("No todo lists found.")
        return [_to_todo_list(row) for row in rows]

    async def get_many(self, ids: Iterable[UUID], owner_id: UUID) -> list[TodoList]:
        found: list[TodoList] = []
        for list_id in ids:
            row = await db.fetch_one(
                f"""
                SELECT {_LIST_COLUMNS}
                FROM todo_lists
                WHERE id = $1
                  AND owner_id = $2
                """,
                list_id,
                owner_id,
            )
            if row is not None:
                found.append(_to_todo_list(row))
        return found

    async def get_by_id(self, list_id: UUID, owner_id: UUID) -> TodoList:
        row = await db.fetch_one(
            f"""
            SELECT {_LIST_COLUMNS}
            FROM todo_lists
            WHERE id = $1
              AND owner_id = $2
            """,
            list_id,
            owner_id,
        )
        if row is None:
            raise _not_found()
        return _to_todo_list(row)

    async def rename(self, list_id: UUID, owner_id: UUID, title: str) -> None:
        todo_list = await self.get_by_id(list_id, owner_id)

        # Ownership is settled above; update by primary key only.
        row = await db.fetch_one(
            """
            UPDATE todo_lists
            SET title = $2,
                updated_at = now()
            WHERE id = $1
            RETURNING id
            """,
            todo_list.id,
            title,
        )
        if row is None:
            raise _not_found()

    async def delete(self, list_id: UUID, owner_id: UUID) -> None:
        row = await db.fetch_one(
            """
            DELETE FROM todo_lists
            WHERE id = $1
              AND owner_id = $2
            RETURNING id
            """,
            list_id,
            owner_id,
        )
        if row is None:
            raise _not_found()

    async def create_todo(
        self, list_id: UUID, owner_id: UUID, title: str, status: bool, priority: Priority
    ) -> None:
        todo = _todo_document(uuid4(), title, status, priority)
        row = await db.fetch_one(
            """
            UPDATE todo_lists
            SET todos = todos || jsonb_build_array($3::jsonb),
                updated_at = now()
            WHERE id = $1
              AND owner_id = $2
            RETURNING id
            """,
            list_id,
            owner_id,
            todo,
        )
        if row is None:
            raise _not_found()

    async def modify_todo(
        self,
        list_id: UUID,
        owner_id: UUID,
        todo_id: UUID,
        title: str,
        status: bool,
        priority: Priority,
    ) -> None:
        todo = _todo_document(todo_id, title, status, priority)
        row = await db.fetch_one(
            """
            UPDATE todo_lists
            SET todos = (
                    SELECT jsonb_agg(
                        CASE WHEN item ->> 'id' = $3 THEN $4::jsonb ELSE item END
                        ORDER BY position
                    )
                    FROM jsonb_array_elements(todos) WITH ORDINALITY AS t(item, position)
                ),
                updated_at = now()
            WHERE id = $1
              AND owner_id = $2
              AND todos @> jsonb_build_array(jsonb_build_object('id', $3::text))
            RETURNING id
            """,
            list_id,
            owner_id,
            str(todo_id),
            todo,
        )
        if row is None:
            raise errors.NotFound("Todo not found.")

    async def delete_todo(self, list_id: UUID, owner_id: UUID, todo_id: UUID) -> None:
        row = await db.fetch_one(
            """
            UPDATE todo_lists
            SET todos = COALESCE(
                    (
                        SELECT jsonb_agg(item ORDER BY position)
                        FROM jsonb_array_elements(todos) WITH ORDINALITY AS t(item, position)
                        WHERE item ->> 'id' <> $3
                    ),
                    '[]'::jsonb
                ),
                updated_at = now()
            WHERE id = $1
              AND owner_id = $2
              AND todos @> jsonb_build_array(jsonb_build_object('id', $3::text))
            RETURNING id
            """,
            list_id,
            owner_id,
            str(todo_id),
        )
        if row is None:
            raise errors.NotFound("Todo not found.")
