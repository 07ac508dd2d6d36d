from __future__ import annotations

import pytest

from conftest import article_row
from ncnews.core.errors import NotFound


def test_list_articles_default_sort(client, monkeypatch):
    from ncnews.services import articles as art_mod

    seen = {}

    async def fake_list_articles(params):
        seen["params"] = params
        return [article_row(3), article_row(2), article_row(1)], 3

    monkeypatch.setattr(art_mod, "list_articles", fake_list_articles)

    resp = client.get("/api/articles")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_count"] == 3
    assert {"author", "title", "article_id", "topic", "created_at", "votes", "comment_count"} <= set(
        body["articles"][0]
    )
    assert "body" not in body["articles"][0]
    created = [a["created_at"] for a in body["articles"]]
    assert created == sorted(created, reverse=True)
    assert (seen["params"].sort_by, seen["params"].order) == ("created_at", "desc")


def test_list_articles_passes_queries_to_service(client, monkeypatch):
    from ncnews.services import articles as art_mod

    seen = {}

    async def fake_list_articles(params):
        seen["params"] = params
        return [], 0

    monkeypatch.setattr(art_mod, "list_articles", fake_list_articles)

    resp = client.get("/api/articles?sort_by=votes&order=asc&author=butter_bridge&topic=mitch&limit=5&p=2")
    assert resp.status_code == 200
    assert resp.json() == {"articles": [], "total_count": 0}
    params = seen["params"]
    assert (params.sort_by, params.order, params.author, params.topic) == ("votes", "asc", "butter_bridge", "mitch")
    assert (params.limit, params.offset) == (5, 5)


def test_sort_by_votes_ascending_end_to_end(client, fake_pool):
    rows = [article_row(4, votes=-3), article_row(1, votes=0), article_row(2, votes=100)]

    def respond(method, sql, args):
        if sql.startswith("SELECT COUNT(*)"):
            return len(rows)
        assert "ORDER BY a.votes ASC, a.article_id ASC" in sql
        return rows

    fake_pool(respond)

    resp = client.get("/api/articles?sort_by=votes&order=asc")
    assert resp.status_code == 200
    votes = [a["votes"] for a in resp.json()["articles"]]
    assert votes == sorted(votes)


@pytest.mark.parametrize("query", ["sort_by=banana", "order=banana", "limit=0", "p=abc"])
def test_list_articles_bad_queries(client, query):
    resp = client.get(f"/api/articles?{query}")
    assert resp.status_code == 400
    assert "Bad Request" in resp.json()["msg"]


def test_unknown_topic_filter_is_404(client, fake_pool):
    def respond(method, sql, args):
        if sql.startswith("SELECT EXISTS"):
            return False
        if sql.startswith("SELECT COUNT(*)"):
            return 0
        return []

    fake_pool(respond)

    resp = client.get("/api/articles?topic=banana")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Topic Not Found"}


def test_unknown_author_filter_is_404(client, fake_pool):
    fake_pool(lambda method, sql, args: False if sql.startswith("SELECT EXISTS") else ([] if method == "fetch" else 0))

    resp = client.get("/api/articles?author=banana")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Author Not Found"}


def test_get_article_404_and_200(client, monkeypatch):
    from ncnews.services import articles as art_mod

    async def fake_get_article_missing(article_id: int):
        raise NotFound("Article ID Not Found")

    async def fake_get_article_ok(article_id: int):
        return article_row(article_id, comment_count=11)

    monkeypatch.setattr(art_mod, "get_article", fake_get_article_missing)
    resp = client.get("/api/articles/22222")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article ID Not Found"}

    monkeypatch.setattr(art_mod, "get_article", fake_get_article_ok)
    resp2 = client.get("/api/articles/2")
    assert resp2.status_code == 200
    article = resp2.json()["article"]
    assert article["article_id"] == 2
    assert set(article) == {"article_id", "title", "body", "votes", "topic", "author", "created_at", "comment_count"}


def test_patch_votes_sequence(client, fake_pool):
    votes = {2: 0}

    def respond(method, sql, args):
        article_id, delta = args
        votes[article_id] += delta
        return article_row(article_id, votes=votes[article_id])

    fake_pool(respond)

    assert client.patch("/api/articles/2", json={"inc_votes": 100}).json()["article"]["votes"] == 100
    resp = client.patch("/api/articles/2", json={"inc_votes": -50})
    assert resp.status_code == 200
    assert resp.json()["article"]["votes"] == 50


def test_patch_without_inc_votes_returns_current_article(client, fake_pool):
    fp = fake_pool(lambda method, sql, args: article_row(args[0], votes=42))

    resp = client.patch("/api/articles/2", json={"banana": 100})
    assert resp.status_code == 200
    assert resp.json()["article"]["votes"] == 42
    assert fp.calls[0][2] == (2, 0)


def test_patch_invalid_inc_votes_is_400(client):
    resp = client.patch("/api/articles/2", json={"inc_votes": "banana"})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Bad Request - invalid value"}


def test_patch_unknown_article_is_404(client, fake_pool):
    fake_pool(lambda method, sql, args: None)

    resp = client.patch("/api/articles/2222222", json={"inc_votes": 100})
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article ID Not Found"}


def test_post_article(client, fake_pool):
    def respond(method, sql, args):
        title, topic, author, body = args
        row = article_row(14, title=title, topic=topic, author=author, body=body)
        row.pop("comment_count")
        return row

    fake_pool(respond)

    resp = client.post(
        "/api/articles",
        json={"title": "New", "topic": "cats", "author": "lurker", "body": "Text"},
    )
    assert resp.status_code == 201
    article = resp.json()["article"]
    assert (article["article_id"], article["author"], article["comment_count"], article["votes"]) == (14, "lurker", 0, 0)


def test_post_article_missing_field(client):
    resp = client.post("/api/articles", json={"title": "New", "topic": "cats", "author": "lurker"})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Bad Request - Required input not provided"}


def test_delete_article(client, fake_pool):
    fake_pool(lambda method, sql, args: args[0] if args[0] == 1 else None)

    resp = client.delete("/api/articles/1")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = client.delete("/api/articles/999")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article ID Not Found"}


def test_api_index_lists_endpoints(client):
    resp = client.get("/api")
    assert resp.status_code == 200
    assert "GET /api/articles" in resp.json()["endpoints"]
