"""
User business logic.

Each operation walks the same stages and stops at the first failure:
id check, body check, email uniqueness, existence, then the write.
Repository failures are logged and collapsed into a generic 500 so driver
details never reach the client.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import schemas, validation
from .repository import DuplicateEmailError, StoreError, UserRepository

logger = logging.getLogger(__name__)

INVALID_ID_DETAIL = "Provide Valid ID"
NOT_FOUND_DETAIL = "User Not Found"
DUPLICATE_EMAIL_DETAIL = "Email Already Exists"
INTERNAL_ERROR_DETAIL = "Internal Server Error"


def _to_user_response(row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
    )


def _internal_error(operation: str, exc: StoreError) -> HTTPException:
    logger.exception("user_store_failed operation=%s error=%s", operation, exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_DETAIL,
    )


def _duplicate_email() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=DUPLICATE_EMAIL_DETAIL,
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=NOT_FOUND_DETAIL,
    )


def _require_user_id(raw_id: str) -> int:
    parsed = validation.parse_user_id(raw_id)
    if isinstance(parsed, validation.InvalidId):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_ID_DETAIL,
        )
    return parsed.value


def _require_valid_payload(payload: schemas.UserPayload) -> tuple[str, str]:
    outcome = validation.validate(payload.name, payload.email)
    if outcome is not validation.ValidationOutcome.VALID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=outcome.message,
        )
    return payload.name, payload.email


async def list_users(*, repo: UserRepository) -> list[schemas.UserResponse]:
    try:
        rows = await repo.select_all()
    except StoreError as exc:
        raise _internal_error("list", exc) from exc
    return [_to_user_response(row) for row in rows]


async def get_user(raw_id: str, *, repo: UserRepository) -> schemas.UserResponse:
    user_id = _require_user_id(raw_id)

    try:
        row = await repo.select_by_id(user_id)
    except StoreError as exc:
        raise _internal_error("get", exc) from exc

    if row is None:
        raise _not_found()
    return _to_user_response(row)


async def create_user(payload: schemas.UserPayload, *, repo: UserRepository) -> schemas.UserResponse:
    name, email = _require_valid_payload(payload)

    try:
        # Fast path only; the UNIQUE constraint is what actually guards emails.
        existing = await repo.select_by_email(email)
        if existing is not None:
            raise _duplicate_email()
        row = await repo.insert(name=name, email=email)
    except DuplicateEmailError as exc:
        raise _duplicate_email() from exc
    except StoreError as exc:
        raise _internal_error("create", exc) from exc

    logger.info("user_created user_id=%s", row["id"])
    return _to_user_response(row)


async def update_user(
    raw_id: str,
    payload: schemas.UserPayload,
    *,
    repo: UserRepository,
) -> schemas.UserResponse:
    user_id = _require_user_id(raw_id)
    name, email = _require_valid_payload(payload)

    try:
        # Keeping one's own email is not a conflict.
        existing = await repo.select_by_email(email)
        if existing is not None and int(existing["id"]) != user_id:
            raise _duplicate_email()

        if await repo.select_by_id(user_id) is None:
            raise _not_found()

        row = await repo.update_by_id(user_id, name=name, email=email)
    except DuplicateEmailError as exc:
        raise _duplicate_email() from exc
    except StoreError as exc:
        raise _internal_error("update", exc) from exc

    if row is None:
        # Deleted between the existence check and the write.
        raise _not_found()

    logger.info("user_updated user_id=%s", user_id)
    return _to_user_response(row)
