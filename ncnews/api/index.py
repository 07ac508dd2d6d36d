# ncnews/api/index.py
from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["index"])

ENDPOINTS = {
    "GET /api": "this description of every endpoint",
    "GET /api/topics": "all topics",
    "POST /api/topics": "create a topic: {slug, description}",
    "GET /api/users": "all users",
    "POST /api/users": "create a user: {username, name, avatar_url}",
    "GET /api/users/:username": "a single user",
    "GET /api/articles": "articles; queries sort_by, order, author, topic, limit, p",
    "POST /api/articles": "create an article: {title, topic, author, body}",
    "GET /api/articles/:article_id": "a single article with comment_count",
    "PATCH /api/articles/:article_id": "increment votes: {inc_votes}",
    "DELETE /api/articles/:article_id": "delete an article and its comments",
    "GET /api/articles/:article_id/comments": "comments of an article; queries sort_by, order, limit, p",
    "POST /api/articles/:article_id/comments": "add a comment: {username, body}",
    "PATCH /api/comments/:comment_id": "increment votes: {inc_votes}",
    "DELETE /api/comments/:comment_id": "delete a comment",
}


@router.get("", summary="Endpoint index")
async def api_index():
    return {"endpoints": ENDPOINTS}
