"""
Pure input checks for user payloads and path ids.

Nothing here touches the database; the service decides what to do with the
outcome.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
ID_PATTERN = re.compile(r"[0-9]+")

# Upper bound of a Postgres `integer` / SERIAL column.
MAX_USER_ID = 2_147_483_647


class ValidationOutcome(Enum):
    VALID = None
    MISSING_FIELDS = "Missing Field(s)"
    NAME_NOT_STRING = "Name Must Be a String"
    INVALID_EMAIL = "Invalid Email Address"

    @property
    def message(self) -> str | None:
        return self.value


def validate(name: Any, email: Any) -> ValidationOutcome:
    """
    Check a candidate (name, email) pair.

    Rules are applied in a fixed order and the first failing one wins:
    missing fields, then name type, then email shape.
    """
    if not name or not email:
        return ValidationOutcome.MISSING_FIELDS
    if not isinstance(name, str):
        return ValidationOutcome.NAME_NOT_STRING
    if not isinstance(email, str) or EMAIL_PATTERN.fullmatch(email) is None:
        return ValidationOutcome.INVALID_EMAIL
    return ValidationOutcome.VALID


@dataclass(frozen=True)
class ParsedPositiveInt:
    value: int


@dataclass(frozen=True)
class InvalidId:
    raw: str


def parse_user_id(raw: str | None) -> ParsedPositiveInt | InvalidId:
    """
    Classify a raw path segment as a usable user id.

    Only plain base-10 digits are accepted: no sign, whitespace, decimal
    point or exponent. Zero and values beyond the store's id range are
    rejected too.
    """
    text = raw if isinstance(raw, str) else ""
    if ID_PATTERN.fullmatch(text) is None:
        return InvalidId(raw=text)

    value = int(text)
    if value <= 0 or value > MAX_USER_ID:
        return InvalidId(raw=text)
    return ParsedPositiveInt(value=value)
