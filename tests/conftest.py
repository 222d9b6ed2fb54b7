"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import app
from users.dependencies import get_repository
from users.repository import DuplicateEmailError, StoreError

SEED_USERS = [
    {"id": 1, "name": "Aqib Shabir", "email": "aqib@email.com"},
    {"id": 2, "name": "Georgie Roberts", "email": "georgie@email.com"},
]


class InMemoryUserRepository:
    """Dict-backed stand-in for UserRepository with a unique email rule."""

    def __init__(self, rows: list[dict] | None = None) -> None:
        self.rows: dict[int, dict] = {}
        for row in rows or []:
            self.rows[row["id"]] = dict(row)
        self.next_id = max(self.rows, default=0) + 1
        self.calls: list[str] = []
        self.fail_on: set[str] = set()
        # Simulates a concurrent writer: the pre-check sees nothing.
        self.stale_email_check = False

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise StoreError(f"connection reset during {name}")

    def _email_taken(self, email: str, *, exclude_id: int | None = None) -> bool:
        return any(r["email"] == email and r["id"] != exclude_id for r in self.rows.values())

    async def select_all(self) -> list[dict]:
        self._call("select_all")
        return [dict(self.rows[k]) for k in sorted(self.rows)]

    async def select_by_id(self, user_id: int) -> dict | None:
        self._call("select_by_id")
        row = self.rows.get(user_id)
        return dict(row) if row is not None else None

    async def select_by_email(self, email: str) -> dict | None:
        self._call("select_by_email")
        if self.stale_email_check:
            return None
        for row in self.rows.values():
            if row["email"] == email:
                return dict(row)
        return None

    async def insert(self, *, name: str, email: str) -> dict:
        self._call("insert")
        if self._email_taken(email):
            raise DuplicateEmailError("Email already exists.")
        row = {"id": self.next_id, "name": name, "email": email}
        self.rows[row["id"]] = row
        self.next_id += 1
        return dict(row)

    async def update_by_id(self, user_id: int, *, name: str, email: str) -> dict | None:
        self._call("update_by_id")
        if user_id not in self.rows:
            return None
        if self._email_taken(email, exclude_id=user_id):
            raise DuplicateEmailError("Email already exists.")
        self.rows[user_id].update(name=name, email=email)
        return dict(self.rows[user_id])


@pytest.fixture
def repo() -> InMemoryUserRepository:
    """Store seeded with the two reference users."""
    return InMemoryUserRepository(SEED_USERS)


@pytest.fixture
def empty_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def make_client():
    """Build a TestClient wired to the given repository."""

    def _make(store: InMemoryUserRepository) -> TestClient:
        app.dependency_overrides[get_repository] = lambda: store
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, repo) -> TestClient:
    return make_client(repo)
