"""Validation of list query strings (``sort_by``, ``order``, ``limit``, ``p``).

Everything here is pure: raw strings from the query string go in, an
immutable :class:`ListingParams` or a :class:`BadRequest` comes out.
Existence of ``author`` / ``topic`` filter targets needs a database lookup
and is checked by the article service, not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ncnews.config import DEFAULT_PAGE_SIZE
from ncnews.core.errors import BadRequest


ARTICLE_SORT_COLUMNS = frozenset(
    {"article_id", "title", "topic", "author", "created_at", "votes", "comment_count"}
)
COMMENT_SORT_COLUMNS = frozenset(
    {"comment_id", "author", "article_id", "votes", "created_at", "body"}
)

DEFAULT_SORT_BY = "created_at"
DEFAULT_ORDER = "desc"
ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class ListingParams:
    sort_by: str = DEFAULT_SORT_BY
    order: str = DEFAULT_ORDER
    limit: Optional[int] = None
    offset: int = 0
    author: Optional[str] = None
    topic: Optional[str] = None

    @property
    def paginated(self) -> bool:
        return self.limit is not None


def _blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def _positive_int(raw: str, name: str) -> int:
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        raise BadRequest(f"Bad Request - invalid {name} query")
    value = int(text)
    if value < 1:
        raise BadRequest(f"Bad Request - invalid {name} query")
    return value


def parse_listing_params(
    allowed_columns: frozenset,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    page: Optional[str] = None,
    author: Optional[str] = None,
    topic: Optional[str] = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> ListingParams:
    if _blank(sort_by):
        sort_by = DEFAULT_SORT_BY
    elif sort_by not in allowed_columns:
        raise BadRequest("Bad Request - invalid sort_by query")

    if order is None:
        order = DEFAULT_ORDER
    elif order not in ORDERS:
        raise BadRequest("Bad Request - invalid order query")

    page_size: Optional[int] = None
    page_no = 1
    if not _blank(limit):
        page_size = _positive_int(limit, "limit")
    if not _blank(page):
        page_no = _positive_int(page, "p")
        if page_size is None:
            page_size = default_page_size

    return ListingParams(
        sort_by=sort_by,
        order=order,
        limit=page_size,
        offset=(page_no - 1) * page_size if page_size is not None else 0,
        author=None if _blank(author) else author,
        topic=None if _blank(topic) else topic,
    )


def parse_article_params(**raw: Optional[str]) -> ListingParams:
    return parse_listing_params(ARTICLE_SORT_COLUMNS, **raw)


def parse_comment_params(**raw: Optional[str]) -> ListingParams:
    # comment listings are scoped by article, never by author/topic
    raw.pop("author", None)
    raw.pop("topic", None)
    return parse_listing_params(COMMENT_SORT_COLUMNS, **raw)
