"""Facade that re-exports article service functions.

Routers import ``ncnews.services.articles`` only; reads and writes live in
``articles_read`` and ``articles_write``.
"""

from .articles_read import (  # noqa: F401
    build_articles_count_query,
    build_articles_query,
    get_article,
    list_articles,
)
from .articles_write import delete_article, insert_article, update_article_votes  # noqa: F401

__all__ = [
    "build_articles_query",
    "build_articles_count_query",
    "list_articles",
    "get_article",
    "update_article_votes",
    "insert_article",
    "delete_article",
]
