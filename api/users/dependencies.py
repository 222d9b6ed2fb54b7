"""
Dependency providers for user routes.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from .repository import UserRepository


def get_repository(request: Request) -> UserRepository:
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not available.",
        )
    return UserRepository(pool)
