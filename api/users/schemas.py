"""
Pydantic schemas for user endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class UserPayload(BaseModel):
    # Left untyped so the validator, not pydantic, reports bad values.
    name: Any = None
    email: Any = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
