"""
Table definitions, applied idempotently on startup.

Notes and todo lists are stored one row per document: tags and pinned todo
list ids are Postgres arrays, embedded todos are a jsonb array of objects.
"""

from __future__ import annotations

from . import db

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id uuid PRIMARY KEY,
    username text NOT NULL UNIQUE,
    email text NOT NULL UNIQUE,
    password_hash text NOT NULL,
    created_at timestamptz NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS notes (
    id uuid PRIMARY KEY,
    owner_id uuid NOT NULL REFERENCES users (id) ON DELETE CASCADE,
    title text NOT NULL,
    content text NOT NULL DEFAULT '',
    tags text[] NOT NULL DEFAULT '{}',
    todo_list_refs uuid[] NOT NULL DEFAULT '{}',
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS notes_owner_id_idx ON notes (owner_id);

CREATE TABLE IF NOT EXISTS todo_lists (
    id uuid PRIMARY KEY,
    owner_id uuid NOT NULL REFERENCES users (id) ON DELETE CASCADE,
    title text NOT NULL,
    todos jsonb NOT NULL DEFAULT '[]'::jsonb,
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS todo_lists_owner_id_idx ON todo_lists (owner_id);
"""


async def ensure_schema() -> None:
    await db.execute(SCHEMA_SQL)
