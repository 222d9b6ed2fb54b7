"""
User persistence (raw SQL over an injected asyncpg pool).

Every method borrows one connection for the duration of a single statement
and gives it back on every exit path. Driver failures are re-raised as
`StoreError` so the service never sees asyncpg types.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from core import db


class StoreError(RuntimeError):
    pass


class DuplicateEmailError(StoreError):
    pass


_STORE_FAILURES = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class UserRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateEmailError("Email already exists.") from exc
        except _STORE_FAILURES as exc:
            raise StoreError(f"User store failure: {exc}") from exc

    async def select_all(self) -> list[dict]:
        async with self._connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, name, email
                FROM users
                ORDER BY id ASC
                """
            )
        return [db.record_to_dict(r) for r in rows]

    async def select_by_id(self, user_id: int) -> dict | None:
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, name, email
                FROM users
                WHERE id = $1
                """,
                user_id,
            )
        return db.record_to_dict(row) if row is not None else None

    async def select_by_email(self, email: str) -> dict | None:
        # Exact, case-sensitive match; mirrors the UNIQUE constraint.
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, name, email
                FROM users
                WHERE email = $1
                LIMIT 1
                """,
                email,
            )
        return db.record_to_dict(row) if row is not None else None

    async def insert(self, *, name: str, email: str) -> dict:
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO users (name, email)
                VALUES ($1, $2)
                RETURNING id, name, email
                """,
                name,
                email,
            )
        if row is None:
            raise StoreError("Failed to insert user.")
        return db.record_to_dict(row)

    async def update_by_id(self, user_id: int, *, name: str, email: str) -> dict | None:
        """
        Replace name and email of one row. Returns None when the row is gone.
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                UPDATE users
                SET name = $2,
                    email = $3
                WHERE id = $1
                RETURNING id, name, email
                """,
                user_id,
                name,
                email,
            )
        return db.record_to_dict(row) if row is not None else None
