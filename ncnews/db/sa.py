from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ncnews.config import DB_DSN
from ncnews.db.base import Base


logger = logging.getLogger("ncnews.db")

_engine: Optional[AsyncEngine] = None


def _to_sqlalchemy_async_dsn(dsn: str | None) -> str:
    if not dsn:
        raise RuntimeError("DATABASE_URL is not configured")
    # Ensure SQLAlchemy asyncpg dialect
    if dsn.startswith("postgresql+asyncpg://"):
        return dsn
    if dsn.startswith("postgresql://"):
        return dsn.replace("postgresql://", "postgresql+asyncpg://", 1)
    if dsn.startswith("postgres://"):
        return dsn.replace("postgres://", "postgresql+asyncpg://", 1)
    return dsn


async def init_sa_engine() -> None:
    global _engine
    if _engine is None:
        _engine = create_async_engine(_to_sqlalchemy_async_dsn(DB_DSN), pool_pre_ping=True)


async def close_sa_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def engine() -> Optional[AsyncEngine]:
    return _engine


async def create_schema() -> None:
    """Create the topics/users/articles/comments tables if they are missing."""
    from ncnews.models import tables  # noqa: F401 ensure model registration

    if _engine is None:
        raise RuntimeError("SQLAlchemy engine is not initialized. Call init_sa_engine() first.")
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ensured", extra={"event": "schema_created", "tables": sorted(Base.metadata.tables)})
