# ncnews/api/topics.py
from fastapi import APIRouter, status

from ncnews.models.schemas import TopicCreate, TopicResponse, TopicsResponse
from ncnews.services import topics as svc

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicsResponse, summary="All topics")
async def api_list_topics():
    return {"topics": await svc.list_topics()}


@router.post("", response_model=TopicResponse, status_code=status.HTTP_201_CREATED,
             summary="Create a topic")
async def api_post_topic(payload: TopicCreate):
    return {"topic": await svc.insert_topic(payload)}
