from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI

from ncnews.api import articles, comments, index, topics, users
from ncnews.api.error_handlers import register_error_handlers
from ncnews.config import LOG_LEVEL, ROOT_PATH, SCHEMA_AUTO_CREATE
from ncnews.db import pool as db_pool
from ncnews.db import sa as db_sa


logger = logging.getLogger("ncnews")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # asyncpg serves the queries, SQLAlchemy only owns the schema
    await db_pool.connect_db()
    await db_sa.init_sa_engine()
    if SCHEMA_AUTO_CREATE and db_sa.engine() is not None:
        try:
            await db_sa.create_schema()
        except Exception:
            # schema may be managed externally with restricted privileges
            logger.warning("Schema creation skipped", exc_info=True, extra={"event": "schema_create_failed"})
    try:
        yield
    finally:
        await db_sa.close_sa_engine()
        await db_pool.close_db()


app = FastAPI(
    title="NC News",
    lifespan=lifespan,
    root_path=ROOT_PATH,
)
register_error_handlers(app)
app.include_router(index.router)
app.include_router(topics.router)
app.include_router(users.router)
app.include_router(articles.router)
app.include_router(comments.router)

# Basic logging configuration (can be overridden by server config)
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
