from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Tuple

from ncnews.core.errors import NotFound
from ncnews.db.pool import pool
from ncnews.models.schemas import Comment
from ncnews.services.articles_read import ARTICLE_NOT_FOUND
from ncnews.services.params import COMMENT_SORT_COLUMNS, ListingParams
from ncnews.services.utils import row_exists


logger = logging.getLogger("ncnews.comments")

COMMENT_NOT_FOUND = "Comment ID Not Found"
COMMENT_COLUMNS = "comment_id, article_id, author, body, votes, created_at"


def build_comments_query(article_id: int, params: ListingParams) -> Tuple[str, List[Any]]:
    if params.sort_by not in COMMENT_SORT_COLUMNS:
        raise ValueError(f"unsupported comment sort column: {params.sort_by}")
    direction = "ASC" if params.order == "asc" else "DESC"
    args: List[Any] = [article_id]
    page_sql = ""
    if params.paginated:
        args.extend([params.limit, params.offset])
        page_sql = "LIMIT $2 OFFSET $3"
    sql = f"""
        SELECT {COMMENT_COLUMNS}
        FROM comments
        WHERE article_id = $1
        ORDER BY {params.sort_by} {direction}, comment_id ASC
        {page_sql}
        """
    return sql, args


async def _fetch_comments(article_id: int, params: ListingParams) -> List[Comment]:
    sql, args = build_comments_query(article_id, params)
    p = pool()
    async with p.acquire() as conn:
        rows = await conn.fetch(sql, *args)
    return [Comment(**dict(r)) for r in rows]


async def list_comments(article_id: int, params: ListingParams) -> List[Comment]:
    """Comments of one article; an article without comments gives ``[]``, not 404."""
    exists, comments = await asyncio.gather(
        row_exists("articles", article_id),
        _fetch_comments(article_id, params),
    )
    if not exists:
        raise NotFound(ARTICLE_NOT_FOUND)
    return comments


INSERT_COMMENT_SQL = f"""
    INSERT INTO comments (article_id, author, body)
    VALUES ($1, $2, $3)
    RETURNING {COMMENT_COLUMNS}
    """


async def insert_comment(article_id: int, username: str, body: str) -> Comment:
    # unknown author/article surface as foreign-key violations
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(INSERT_COMMENT_SQL, article_id, username, body)
    comment = Comment(**dict(row))
    logger.info(
        "Comment created",
        extra={"event": "comment_created", "comment_id": comment.comment_id, "article_id": article_id},
    )
    return comment


UPDATE_VOTES_SQL = f"""
    UPDATE comments SET votes = votes + $2
    WHERE comment_id = $1
    RETURNING {COMMENT_COLUMNS}
    """


async def update_comment_votes(comment_id: int, inc_votes: Optional[int]) -> Comment:
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(UPDATE_VOTES_SQL, comment_id, inc_votes or 0)
    if not row:
        raise NotFound(COMMENT_NOT_FOUND)
    return Comment(**dict(row))


async def delete_comment(comment_id: int) -> None:
    p = pool()
    async with p.acquire() as conn:
        deleted = await conn.fetchval(
            "DELETE FROM comments WHERE comment_id = $1 RETURNING comment_id", comment_id
        )
    if deleted is None:
        raise NotFound(COMMENT_NOT_FOUND)
    logger.info("Comment deleted", extra={"event": "comment_deleted", "comment_id": comment_id})
