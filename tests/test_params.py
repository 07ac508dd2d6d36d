from __future__ import annotations

import pytest

from ncnews.core.errors import BadRequest
from ncnews.services.params import (
    ARTICLE_SORT_COLUMNS,
    ListingParams,
    parse_article_params,
    parse_comment_params,
    parse_listing_params,
)


def test_defaults_are_created_at_desc_unpaginated():
    params = parse_article_params()
    assert params == ListingParams(sort_by="created_at", order="desc", limit=None, offset=0)
    assert not params.paginated


@pytest.mark.parametrize("column", sorted(ARTICLE_SORT_COLUMNS))
def test_every_whitelisted_article_column_is_accepted(column):
    assert parse_article_params(sort_by=column).sort_by == column


def test_sort_by_and_order_default_independently():
    assert parse_article_params(order="asc") == ListingParams(sort_by="created_at", order="asc")
    assert parse_article_params(sort_by="votes").order == "desc"


@pytest.mark.parametrize("sort_by", ["banana", "body", "VOTES", "votes; DROP TABLE articles"])
def test_unknown_article_sort_column_is_bad_request(sort_by):
    with pytest.raises(BadRequest) as exc:
        parse_article_params(sort_by=sort_by)
    assert exc.value.status_code == 400
    assert "Bad Request" in exc.value.msg


def test_comment_whitelist_differs_from_articles():
    assert parse_comment_params(sort_by="body").sort_by == "body"
    with pytest.raises(BadRequest):
        parse_comment_params(sort_by="title")


@pytest.mark.parametrize("order", ["banana", "ASC", "Desc", ""])
def test_order_is_case_sensitive(order):
    with pytest.raises(BadRequest) as exc:
        parse_article_params(order=order)
    assert exc.value.msg == "Bad Request - invalid order query"


def test_limit_and_page_give_offset():
    params = parse_article_params(limit="5", page="3")
    assert params.limit == 5
    assert params.offset == 10
    assert params.paginated


def test_limit_without_page_is_first_page():
    params = parse_article_params(limit="7")
    assert (params.limit, params.offset) == (7, 0)


def test_page_without_limit_uses_default_page_size():
    params = parse_listing_params(ARTICLE_SORT_COLUMNS, page="2", default_page_size=10)
    assert (params.limit, params.offset) == (10, 10)


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "²"])
def test_limit_must_be_positive_integer(raw):
    with pytest.raises(BadRequest) as exc:
        parse_article_params(limit=raw)
    assert exc.value.msg == "Bad Request - invalid limit query"


@pytest.mark.parametrize("raw", ["0", "x"])
def test_page_must_be_positive_integer(raw):
    with pytest.raises(BadRequest) as exc:
        parse_article_params(page=raw)
    assert exc.value.msg == "Bad Request - invalid p query"


def test_filters_pass_through_and_blank_means_absent():
    params = parse_article_params(author="butter_bridge", topic="")
    assert params.author == "butter_bridge"
    assert params.topic is None


def test_comment_params_drop_article_filters():
    params = parse_comment_params(author="x", topic="y")
    assert params.author is None and params.topic is None
