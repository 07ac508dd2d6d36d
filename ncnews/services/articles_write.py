from __future__ import annotations

import logging
from typing import Optional

from ncnews.core.errors import NotFound
from ncnews.db.pool import pool
from ncnews.models.schemas import Article, ArticleCreate
from ncnews.services.articles_read import ARTICLE_NOT_FOUND


logger = logging.getLogger("ncnews.articles")


UPDATE_VOTES_SQL = """
    WITH updated AS (
        UPDATE articles SET votes = votes + $2
        WHERE article_id = $1
        RETURNING article_id, title, body, topic, author, created_at, votes
    )
    SELECT
        u.*,
        (SELECT COUNT(*) FROM comments c WHERE c.article_id = u.article_id)::int AS comment_count
    FROM updated u
    """


async def update_article_votes(article_id: int, inc_votes: Optional[int]) -> Article:
    """Add ``inc_votes`` to the stored count; no delta leaves it unchanged."""
    delta = inc_votes or 0
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(UPDATE_VOTES_SQL, article_id, delta)
    if not row:
        raise NotFound(ARTICLE_NOT_FOUND)
    return Article(**dict(row))


INSERT_ARTICLE_SQL = """
    INSERT INTO articles (title, topic, author, body)
    VALUES ($1, $2, $3, $4)
    RETURNING article_id, title, body, topic, author, created_at, votes
    """


async def insert_article(payload: ArticleCreate) -> Article:
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(
            INSERT_ARTICLE_SQL, payload.title, payload.topic, payload.author, payload.body
        )
    article = Article(**dict(row), comment_count=0)
    logger.info(
        "Article created",
        extra={"event": "article_created", "article_id": article.article_id, "author": article.author},
    )
    return article


async def delete_article(article_id: int) -> None:
    p = pool()
    async with p.acquire() as conn:
        deleted = await conn.fetchval(
            "DELETE FROM articles WHERE article_id = $1 RETURNING article_id", article_id
        )
    if deleted is None:
        raise NotFound(ARTICLE_NOT_FOUND)
    logger.info("Article deleted", extra={"event": "article_deleted", "article_id": article_id})
