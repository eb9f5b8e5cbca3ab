"""
Shared fixtures: in-memory repositories and a TestClient wired to them.

The in-memory repositories implement the same protocols as the Postgres ones
and apply the same owner filters, so HTTP tests exercise the real services,
routers and auth dependency without a database.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from auth import dependencies as auth_dependencies
from auth import security
from auth.schemas import User
from core import errors
from core.config import Settings
from main import app
from notes.dependencies import get_note_repository
from notes.schemas import Note, NoteSummary
from todos.dependencies import get_todo_list_repository
from todos.schemas import Priority, Todo, TodoList

TEST_SECRET = "test-secret-key-with-enough-bytes-for-hs256"


class FakeClock:
    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    async def get_user(self, username: str) -> User:
        user = self.users.get(username)
        if user is None:
            raise errors.Unauthorized()
        return user

    async def user_exists(self, username: str, email: str) -> bool:
        email = email.strip().lower()
        return any(u.username == username or u.email == email for u in self.users.values())

    async def create_user(self, username: str, email: str, password: str) -> User:
        user = User(
            id=uuid4(),
            username=username,
            email=email.strip().lower(),
            password_hash=security.hash_password(password, rounds=4),
        )
        self.users[username] = user
        return user


class InMemoryNoteRepository:
    def __init__(self) -> None:
        self.rows: dict[UUID, Note] = {}
        self.ref_writes = 0

    def _owned(self, note_id: UUID, owner_id: UUID) -> Note:
        note = self.rows.get(note_id)
        if note is None or note.owner_id != owner_id:
            raise errors.NotFound("Note not found.")
        return note

    async def create(self, owner_id: UUID, title: str, content: str, tags: list[str]) -> Note:
        note = Note(id=uuid4(), owner_id=owner_id, title=title, content=content, tags=list(tags))
        self.rows[note.id] = note
        return note.model_copy(deep=True)

    async def delete(self, note_id: UUID, owner_id: UUID) -> None:
        self._owned(note_id, owner_id)
        del self.rows[note_id]

    async def update(self, owner_id, note_id, *, title=None, content=None, tags=None) -> None:
        note = self._owned(note_id, owner_id)
        if title is not None:
            note.title = title
        if content is not None:
            note.content = content
        if tags is not None:
            note.tags = list(tags)

    async def get_by_id(self, note_id: UUID, owner_id: UUID) -> Note:
        return self._owned(note_id, owner_id).model_copy(deep=True)

    async def list_summaries_by_owner(self, owner_id: UUID) -> AsyncIterator[NoteSummary]:
        for note in list(self.rows.values()):
            if note.owner_id == owner_id:
                yield NoteSummary(id=note.id, title=note.title, tags=list(note.tags))

    async def add_todo_list_ref(self, note_id: UUID, owner_id: UUID, todo_list_id: UUID) -> None:
        note = self._owned(note_id, owner_id)
        self.ref_writes += 1
        if todo_list_id not in note.todo_list_refs:
            note.todo_list_refs.append(todo_list_id)

    async def remove_todo_list_ref(self, note_id: UUID, owner_id: UUID, todo_list_id: UUID) -> None:
        note = self.rows.get(note_id)
        if note is None or note.owner_id != owner_id or todo_list_id not in note.todo_list_refs:
            raise errors.NotFound("Todo list is not pinned to this note.")
        self.ref_writes += 1
        note.todo_list_refs.remove(todo_list_id)


class InMemoryTodoListRepository:
    def __init__(self) -> None:
        self.rows: dict[UUID, TodoList] = {}

    def _owned(self, list_id: UUID, owner_id: UUID) -> TodoList:
        todo_list = self.rows.get(list_id)
        if todo_list is None or todo_list.owner_id != owner_id:
            raise errors.NotFound("Todo list not found.")
        return todo_list

    async def create(self, owner_id: UUID, title: str) -> TodoList:
        todo_list = TodoList(id=uuid4(), owner_id=owner_id, title=title)
        self.rows[todo_list.id] = todo_list
        return todo_list.model_copy(deep=True)

    async def get_all_by_owner(self, owner_id: UUID) -> list[TodoList]:
        found = [t.model_copy(deep=True) for t in self.rows.values() if t.owner_id == owner_id]
        if not found:
            raise errors.NotFound("No todo lists found.")
        return found

    async def get_many(self, ids: Iterable[UUID], owner_id: UUID) -> list[TodoList]:
        found = []
        for list_id in ids:
            todo_list = self.rows.get(list_id)
            if todo_list is not None and todo_list.owner_id == owner_id:
                found.append(todo_list.model_copy(deep=True))
        return found

    async def get_by_id(self, list_id: UUID, owner_id: UUID) -> TodoList:
        return self._owned(list_id, owner_id).model_copy(deep=True)

    async def rename(self, list_id: UUID, owner_id: UUID, title: str) -> None:
        self._owned(list_id, owner_id).title = title

    async def delete(self, list_id: UUID, owner_id: UUID) -> None:
        self._owned(list_id, owner_id)
        del self.rows[list_id]

    async def create_todo(self, list_id, owner_id, title, status, priority) -> None:
        todo_list = self._owned(list_id, owner_id)
        todo_list.todos.append(Todo(id=uuid4(), title=title, status=status, priority=Priority(priority)))

    def _todo_index(self, todo_list: TodoList, todo_id: UUID) -> int:
        for index, todo in enumerate(todo_list.todos):
            if todo.id == todo_id:
                return index
        raise errors.NotFound("Todo not found.")

    async def modify_todo(self, list_id, owner_id, todo_id, title, status, priority) -> None:
        todo_list = self._owned(list_id, owner_id)
        index = self._todo_index(todo_list, todo_id)
        todo_list.todos[index] = Todo(id=todo_id, title=title, status=status, priority=Priority(priority))

    async def delete_todo(self, list_id, owner_id, todo_id) -> None:
        todo_list = self._owned(list_id, owner_id)
        del todo_list.todos[self._todo_index(todo_list, todo_id)]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(settings: Settings, clock: FakeClock) -> security.TokenService:
    return security.TokenService(settings, clock=clock)


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def notes() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture
def todo_lists() -> InMemoryTodoListRepository:
    return InMemoryTodoListRepository()


@pytest.fixture
def client(token_service, users, notes, todo_lists):
    app.dependency_overrides[auth_dependencies.get_token_service] = lambda: token_service
    app.dependency_overrides[auth_dependencies.get_user_repository] = lambda: users
    app.dependency_overrides[get_note_repository] = lambda: notes
    app.dependency_overrides[get_todo_list_repository] = lambda: todo_lists
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def register(client: TestClient, username: str, email: str | None = None, password: str = "pw123") -> dict:
    resp = client.post(
        "/auth/register",
        json={"username": username, "email": email or f"{username}@x.com", "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(tokens: dict) -> dict:
    return {"Authorization": f"Bearer {tokens['accessToken']}"}
