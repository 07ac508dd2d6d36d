from __future__ import annotations

import logging
from typing import List

from ncnews.core.errors import NotFound
from ncnews.db.pool import pool
from ncnews.models.schemas import User, UserCreate


logger = logging.getLogger("ncnews.users")

USER_COLUMNS = "username, name, avatar_url"


async def list_users() -> List[User]:
    p = pool()
    async with p.acquire() as conn:
        rows = await conn.fetch(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    return [User(**dict(r)) for r in rows]


async def get_user(username: str) -> User:
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", username)
    if not row:
        raise NotFound("Username not found")
    return User(**dict(row))


async def insert_user(payload: UserCreate) -> User:
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(
            f"INSERT INTO users ({USER_COLUMNS}) VALUES ($1, $2, $3) RETURNING {USER_COLUMNS}",
            payload.username,
            payload.name,
            payload.avatar_url,
        )
    logger.info("User created", extra={"event": "user_created", "username": row["username"]})
    return User(**dict(row))
