from __future__ import annotations

from typing import Any

from ncnews.db.pool import pool


# table -> key column used by existence checks
_LOOKUP_KEYS = {
    "users": "username",
    "topics": "slug",
    "articles": "article_id",
    "comments": "comment_id",
}


def existence_sql(table: str) -> str:
    column = _LOOKUP_KEYS[table]
    return f"SELECT EXISTS (SELECT 1 FROM {table} WHERE {column} = $1)"


async def row_exists(table: str, value: Any) -> bool:
    """Single-row existence lookup against one of the known tables."""
    p = pool()
    async with p.acquire() as conn:
        return bool(await conn.fetchval(existence_sql(table), value))


__all__ = ["existence_sql", "row_exists"]
