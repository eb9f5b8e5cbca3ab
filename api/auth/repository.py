"""
Credential store: user persistence (raw SQL).
"""

from __future__ import annotations

from typing import Protocol
from uuid import uuid4

import asyncpg

from core import db, errors

from . import security
from .schemas import User


class UserRepository(Protocol):
    async def get_user(self, username: str) -> User: ...

    async def user_exists(self, username: str, email: str) -> bool: ...

    async def create_user(self, username: str, email: str, password: str) -> User: ...


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _to_user(row: dict) -> User:
    return User(
        id=row["id"],
        username=str(row["username"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
    )


class PostgresUserRepository:
    def __init__(self, *, bcrypt_rounds: int = 12) -> None:
        self._bcrypt_rounds = bcrypt_rounds

    async def get_user(self, username: str) -> User:
        row = await db.fetch_one(
            """
            SELECT id, username, email, password_hash
            FROM users
            WHERE username = $1
            """,
            username,
        )
        if row is None:
            raise errors.Unauthorized()
        return _to_user(row)

    async def user_exists(self, username: str, email: str) -> bool:
        row = await db.fetch_one(
            """
            SELECT 1 AS ok
            FROM users
            WHERE username = $1
               OR email = $2
            LIMIT 1
            """,
            username,
            normalize_email(email),
        )
        return row is not None

    async def create_user(self, username: str, email: str, password: str) -> User:
        password_hash = security.hash_password(password, rounds=self._bcrypt_rounds)
        try:
            row = await db.fetch_one(
                """
                INSERT INTO users (id, username, email, password_hash)
                VALUES ($1, $2, $3, $4)
                RETURNING id, username, email, password_hash
                """,
                uuid4(),
                username,
                normalize_email(email),
                password_hash,
            )
        except asyncpg.UniqueViolationError as exc:
            # Lost a race against a concurrent registration.
            raise errors.UserExists() from exc
        if row is None:
            raise errors.NothingChanged("User was not created.")
        return _to_user(row)
