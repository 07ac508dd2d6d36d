from __future__ import annotations

import asyncio
from typing import Any, List, Tuple

from ncnews.core.errors import NotFound
from ncnews.db.pool import pool
from ncnews.models.schemas import Article, ArticleSummary
from ncnews.services.params import ARTICLE_SORT_COLUMNS, ListingParams
from ncnews.services.utils import row_exists


ARTICLE_NOT_FOUND = "Article ID Not Found"


def _sort_expression(column: str) -> str:
    if column not in ARTICLE_SORT_COLUMNS:
        raise ValueError(f"unsupported article sort column: {column}")
    # comment_count only exists as an aggregate alias
    return "comment_count" if column == "comment_count" else f"a.{column}"


def _where(params: ListingParams) -> Tuple[str, List[Any]]:
    filters = []
    args: List[Any] = []
    if params.author is not None:
        args.append(params.author)
        filters.append("a.author = $%d" % len(args))
    if params.topic is not None:
        args.append(params.topic)
        filters.append("a.topic = $%d" % len(args))
    where_sql = ("WHERE " + " AND ".join(filters)) if filters else ""
    return where_sql, args


def build_articles_query(params: ListingParams) -> Tuple[str, List[Any]]:
    """Page query for GET /api/articles.

    LEFT JOIN keeps articles without comments (``comment_count`` 0). Ties on
    the sort column fall back to ``article_id ASC`` so pages are stable.
    """
    where_sql, args = _where(params)
    direction = "ASC" if params.order == "asc" else "DESC"
    page_sql = ""
    if params.paginated:
        args.extend([params.limit, params.offset])
        page_sql = "LIMIT $%d OFFSET $%d" % (len(args) - 1, len(args))

    sql = f"""
        SELECT
            a.article_id, a.title, a.topic, a.author, a.created_at, a.votes,
            COUNT(c.comment_id)::int AS comment_count
        FROM articles a
        LEFT JOIN comments c ON c.article_id = a.article_id
        {where_sql}
        GROUP BY a.article_id
        ORDER BY {_sort_expression(params.sort_by)} {direction}, a.article_id ASC
        {page_sql}
        """
    return sql, args


def build_articles_count_query(params: ListingParams) -> Tuple[str, List[Any]]:
    where_sql, args = _where(params)
    return f"SELECT COUNT(*)::int FROM articles a {where_sql}", args


async def _fetch_page(params: ListingParams) -> List[ArticleSummary]:
    sql, args = build_articles_query(params)
    p = pool()
    async with p.acquire() as conn:
        rows = await conn.fetch(sql, *args)
    return [ArticleSummary(**dict(r)) for r in rows]


async def _fetch_total(params: ListingParams) -> int:
    sql, args = build_articles_count_query(params)
    p = pool()
    async with p.acquire() as conn:
        return int(await conn.fetchval(sql, *args) or 0)


async def _exists_or_skip(table: str, value: Any) -> bool:
    if value is None:
        return True
    return await row_exists(table, value)


async def list_articles(params: ListingParams) -> Tuple[List[ArticleSummary], int]:
    """Filtered, sorted, paginated articles plus the unpaginated total.

    The page, the total and both filter existence checks are independent,
    so they run together; a missing author is reported before a missing topic.
    """
    author_ok, topic_ok, articles, total = await asyncio.gather(
        _exists_or_skip("users", params.author),
        _exists_or_skip("topics", params.topic),
        _fetch_page(params),
        _fetch_total(params),
    )
    if not author_ok:
        raise NotFound("Author Not Found")
    if not topic_ok:
        raise NotFound("Topic Not Found")
    return articles, total


ARTICLE_BY_ID_SQL = """
    SELECT
        a.article_id, a.title, a.body, a.topic, a.author, a.created_at, a.votes,
        COUNT(c.comment_id)::int AS comment_count
    FROM articles a
    LEFT JOIN comments c ON c.article_id = a.article_id
    WHERE a.article_id = $1
    GROUP BY a.article_id
    """


async def get_article(article_id: int) -> Article:
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(ARTICLE_BY_ID_SQL, article_id)
    if not row:
        raise NotFound(ARTICLE_NOT_FOUND)
    return Article(**dict(row))
