"""
FastAPI router for user endpoints.

Path ids are declared as `str` on purpose: the service owns id parsing so
malformed ids get the same 400 as every other validation failure.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas, service
from .dependencies import get_repository
from .repository import UserRepository

router = APIRouter()


@router.get("/users", response_model=list[schemas.UserResponse])
async def list_users(
    repo: UserRepository = Depends(get_repository),
) -> list[schemas.UserResponse]:
    return await service.list_users(repo=repo)


@router.get("/users/{user_id}", response_model=schemas.UserResponse)
async def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_repository),
) -> schemas.UserResponse:
    return await service.get_user(user_id, repo=repo)


@router.post(
    "/users",
    response_model=schemas.UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: schemas.UserPayload | None = None,
    repo: UserRepository = Depends(get_repository),
) -> schemas.UserResponse:
    return await service.create_user(payload or schemas.UserPayload(), repo=repo)


@router.put("/users/{user_id}", response_model=schemas.UserResponse)
async def update_user(
    user_id: str,
    payload: schemas.UserPayload | None = None,
    repo: UserRepository = Depends(get_repository),
) -> schemas.UserResponse:
    return await service.update_user(user_id, payload or schemas.UserPayload(), repo=repo)
