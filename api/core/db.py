"""
Async database wiring using asyncpg.

This module builds the connection pool. FastAPI creates it on startup and
closes it on shutdown (see `api/main.py`); the pool itself lives on
`app.state.pool` and is handed to repositories through a dependency, never
through a module-level global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def create_pool() -> asyncpg.Pool:
    min_size = config.db_pool_min_size()
    max_size = max(min_size, config.db_pool_max_size())
    pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=config.db_command_timeout(),
    )
    logger.info("db_pool_opened min_size=%s max_size=%s", min_size, max_size)
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


def record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)
