from __future__ import annotations

import logging
from typing import List

from ncnews.db.pool import pool
from ncnews.models.schemas import Topic, TopicCreate


logger = logging.getLogger("ncnews.topics")


async def list_topics() -> List[Topic]:
    p = pool()
    async with p.acquire() as conn:
        rows = await conn.fetch("SELECT slug, description FROM topics ORDER BY slug")
    return [Topic(**dict(r)) for r in rows]


async def insert_topic(payload: TopicCreate) -> Topic:
    # duplicate slugs raise a unique violation, mapped to 400 by the error handlers
    p = pool()
    async with p.acquire() as conn:
        row = await conn.fetchrow(
            "INSERT INTO topics (slug, description) VALUES ($1, $2) RETURNING slug, description",
            payload.slug,
            payload.description,
        )
    logger.info("Topic created", extra={"event": "topic_created", "slug": row["slug"]})
    return Topic(**dict(row))
