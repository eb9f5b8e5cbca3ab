"""
Postgres repositories with `core.db` helpers monkeypatched.

These check the statements each operation sends and how results map onto
the error taxonomy; SQL semantics themselves are not exercised here.
"""

from __future__ import annotations

from uuid import uuid4

import asyncpg
import pytest

from auth.repository import PostgresUserRepository
from core import db, errors
from notes.repository import PostgresNoteRepository
from todos.repository import PostgresTodoListRepository
from todos.schemas import Priority

pytestmark = pytest.mark.anyio


class RecordingDb:
    def __init__(self, monkeypatch, results=None, stream=None) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self._results = list(results or [])
        self._stream = list(stream or [])
        monkeypatch.setattr(db, "fetch_one", self.fetch_one)
        monkeypatch.setattr(db, "fetch_all", self.fetch_all)
        monkeypatch.setattr(db, "iterate", self.iterate)

    async def fetch_one(self, sql, *args):
        self.calls.append((sql, args))
        result = self._results.pop(0) if self._results else None
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetch_all(self, sql, *args):
        self.calls.append((sql, args))
        return self._results.pop(0) if self._results else []

    async def iterate(self, sql, *args):
        self.calls.append((sql, args))
        for row in self._stream:
            yield row


def _list_row(list_id, owner_id, title="Home", todos=None) -> dict:
    return {"id": list_id, "owner_id": owner_id, "title": title, "todos": todos or []}


async def test_create_user_hashes_and_normalizes_email(monkeypatch):
    user_id = uuid4()
    fake = RecordingDb(monkeypatch)

    async def fetch_one(sql, *args):
        fake.calls.append((sql, args))
        return {"id": user_id, "username": args[1], "email": args[2], "password_hash": args[3]}

    monkeypatch.setattr(db, "fetch_one", fetch_one)

    user = await PostgresUserRepository(bcrypt_rounds=4).create_user("alice", " Alice@X.com ", "pw123")

    _, args = fake.calls[0]
    assert args[1:3] == ("alice", "alice@x.com")
    assert args[3] != "pw123" and args[3].startswith("$2")
    assert user.id == user_id


async def test_create_user_unique_violation_is_user_exists(monkeypatch):
    RecordingDb(monkeypatch, results=[asyncpg.UniqueViolationError("duplicate key")])

    with pytest.raises(errors.UserExists):
        await PostgresUserRepository(bcrypt_rounds=4).create_user("alice", "a@x.com", "pw123")


async def test_get_user_missing_is_unauthorized(monkeypatch):
    RecordingDb(monkeypatch, results=[None])

    with pytest.raises(errors.Unauthorized):
        await PostgresUserRepository().get_user("ghost")


async def test_user_exists_checks_username_or_email(monkeypatch):
    fake = RecordingDb(monkeypatch, results=[{"ok": 1}])

    assert await PostgresUserRepository().user_exists("alice", "A@x.com")
    sql, args = fake.calls[0]
    assert "OR email = $2" in sql
    assert args == ("alice", "a@x.com")


async def test_note_statements_filter_on_owner(monkeypatch):
    owner, note_id = uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[None, None, None])
    repo = PostgresNoteRepository()

    for call in (
        repo.get_by_id(note_id, owner),
        repo.delete(note_id, owner),
        repo.update(owner, note_id, title="x"),
    ):
        with pytest.raises(errors.NotFound):
            await call

    for sql, args in fake.calls:
        assert "owner_id = $2" in sql
        assert args[:2] == (note_id, owner)


async def test_note_update_leaves_refs_alone(monkeypatch):
    owner, note_id = uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[{"id": note_id}])

    await PostgresNoteRepository().update(owner, note_id, tags=["a"])

    sql, args = fake.calls[0]
    assert "todo_list_refs" not in sql
    assert args == (note_id, owner, None, None, ["a"])


async def test_note_summaries_skip_undecodable_rows(monkeypatch):
    owner = uuid4()
    good = {"id": uuid4(), "title": "ok", "tags": ["a"]}
    broken = {"id": uuid4(), "title": None, "tags": []}
    RecordingDb(monkeypatch, stream=[good, broken, {**good, "id": uuid4(), "tags": None}])

    summaries = [s async for s in PostgresNoteRepository().list_summaries_by_owner(owner)]

    assert [s.title for s in summaries] == ["ok", "ok"]
    assert summaries[1].tags == []


async def test_unpin_requires_reference_present(monkeypatch):
    owner, note_id, list_id = uuid4(), uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[None])

    with pytest.raises(errors.NotFound):
        await PostgresNoteRepository().remove_todo_list_ref(note_id, owner, list_id)

    sql, args = fake.calls[0]
    assert "$3 = ANY(todo_list_refs)" in sql
    assert args == (note_id, owner, list_id)


async def test_get_all_todo_lists_empty_is_not_found(monkeypatch):
    RecordingDb(monkeypatch, results=[[]])

    with pytest.raises(errors.NotFound):
        await PostgresTodoListRepository().get_all_by_owner(uuid4())


async def test_get_many_omits_unresolved_ids(monkeypatch):
    owner, found_id, missing_id = uuid4(), uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[None, _list_row(found_id, owner)])

    lists = await PostgresTodoListRepository().get_many([missing_id, found_id], owner)

    assert [t.id for t in lists] == [found_id]
    assert [args for _, args in fake.calls] == [(missing_id, owner), (found_id, owner)]


async def test_rename_checks_ownership_then_updates_by_id(monkeypatch):
    owner, list_id = uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[_list_row(list_id, owner), {"id": list_id}])

    await PostgresTodoListRepository().rename(list_id, owner, "House")

    (check_sql, check_args), (update_sql, update_args) = fake.calls
    assert check_args == (list_id, owner)
    assert "owner_id" not in update_sql
    assert update_args == (list_id, "House")


async def test_rename_missing_list_does_not_update(monkeypatch):
    fake = RecordingDb(monkeypatch, results=[None])

    with pytest.raises(errors.NotFound):
        await PostgresTodoListRepository().rename(uuid4(), uuid4(), "House")

    assert len(fake.calls) == 1


async def test_create_todo_appends_document_with_fresh_id(monkeypatch):
    owner, list_id = uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[{"id": list_id}])

    await PostgresTodoListRepository().create_todo(list_id, owner, "milk", False, Priority.HIGH)

    _, args = fake.calls[0]
    todo = args[2]
    assert args[:2] == (list_id, owner)
    assert todo["title"] == "milk" and todo["status"] is False and todo["priority"] == "High"
    assert todo["id"]


async def test_modify_todo_matches_by_todo_id(monkeypatch):
    owner, list_id, todo_id = uuid4(), uuid4(), uuid4()
    fake = RecordingDb(monkeypatch, results=[None])

    with pytest.raises(errors.NotFound):
        await PostgresTodoListRepository().modify_todo(list_id, owner, todo_id, "x", True, Priority.LOW)

    _, args = fake.calls[0]
    assert args[:3] == (list_id, owner, str(todo_id))
    assert args[3] == {"id": str(todo_id), "title": "x", "status": True, "priority": "Low"}


async def test_todo_list_decodes_embedded_todos(monkeypatch):
    owner, list_id, todo_id = uuid4(), uuid4(), uuid4()
    todos = [{"id": str(todo_id), "title": "milk", "status": True, "priority": "Normal"}]
    RecordingDb(monkeypatch, results=[_list_row(list_id, owner, todos=todos)])

    todo_list = await PostgresTodoListRepository().get_by_id(list_id, owner)

    assert todo_list.todos[0].id == todo_id
    assert todo_list.todos[0].priority is Priority.NORMAL
