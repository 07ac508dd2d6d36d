from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

import pytest
import sys
from pathlib import Path

# Ensure repository root is on sys.path for `import ncnews`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from fastapi.testclient import TestClient


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


class FakeConnection:
    def __init__(self, pool):
        self._pool = pool

    async def fetch(self, sql, *args):
        return self._pool.respond("fetch", sql, args)

    async def fetchrow(self, sql, *args):
        return self._pool.respond("fetchrow", sql, args)

    async def fetchval(self, sql, *args):
        return self._pool.respond("fetchval", sql, args)


class FakePool:
    """Stands in for an asyncpg pool; ``responder(method, sql, args)`` decides each result.

    A responder may return an exception instance to have it raised, which is
    how database errors (unique/foreign-key violations) are simulated.
    """

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    def respond(self, method, sql, args):
        sql = " ".join(sql.split())
        self.calls.append((method, sql, args))
        result = self.responder(method, sql, args)
        if isinstance(result, BaseException):
            raise result
        return result

    @asynccontextmanager
    async def acquire(self):
        yield FakeConnection(self)


@pytest.fixture()
def fake_pool(monkeypatch):
    """Install a FakePool as the process pool: ``fake_pool(responder)``."""
    import ncnews.db.pool as db_pool

    def _install(responder):
        fp = FakePool(responder)
        monkeypatch.setattr(db_pool, "_pool", fp)
        return fp

    return _install


@pytest.fixture()
def client(monkeypatch):
    # Patch DB init/close in lifespan to no-op
    import ncnews.db.pool as db_pool
    import ncnews.db.sa as db_sa

    async def _noop(*args, **kwargs):
        return None

    monkeypatch.setattr(db_pool, "connect_db", _noop)
    monkeypatch.setattr(db_pool, "close_db", _noop)
    monkeypatch.setattr(db_sa, "init_sa_engine", _noop)
    monkeypatch.setattr(db_sa, "close_sa_engine", _noop)

    from ncnews import main as main_mod

    with TestClient(main_mod.app) as test_client:
        yield test_client


# --- row factories shared by the tests ---

BASE_TIME = datetime(2020, 1, 1, tzinfo=timezone.utc)


def article_row(article_id=1, **overrides):
    row = {
        "article_id": article_id,
        "title": f"Article {article_id}",
        "body": "Some text",
        "topic": "mitch",
        "author": "butter_bridge",
        "created_at": BASE_TIME + timedelta(days=article_id),
        "votes": 0,
        "comment_count": 0,
    }
    row.update(overrides)
    return row


def comment_row(comment_id=1, article_id=1, **overrides):
    row = {
        "comment_id": comment_id,
        "article_id": article_id,
        "author": "lurker",
        "body": "Nice",
        "votes": 0,
        "created_at": BASE_TIME + timedelta(hours=comment_id),
    }
    row.update(overrides)
    return row
