# ncnews/models/schemas.py
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


# --- Topics / users ---
class Topic(BaseModel):
    slug: str
    description: str


class User(BaseModel):
    username: str
    name: str
    avatar_url: str


# --- Articles ---
# List view: no body, used by GET /api/articles
class ArticleSummary(BaseModel):
    article_id: int
    title: str
    topic: str
    author: str
    created_at: datetime
    votes: int
    comment_count: int = 0


# Single article, returned by id lookups and mutations
class Article(ArticleSummary):
    body: str


# --- Comments ---
class Comment(BaseModel):
    comment_id: int
    article_id: int
    author: str
    body: str
    votes: int
    created_at: datetime


# --- Request bodies ---
class TopicCreate(BaseModel):
    slug: str
    description: str


class UserCreate(BaseModel):
    username: str
    name: str
    avatar_url: str


class ArticleCreate(BaseModel):
    title: str
    topic: str
    author: str
    body: str


class CommentCreate(BaseModel):
    username: str
    body: str


class VoteUpdate(BaseModel):
    inc_votes: Optional[int] = None


# --- Response envelopes ---
class TopicsResponse(BaseModel):
    topics: List[Topic]


class TopicResponse(BaseModel):
    topic: Topic


class UsersResponse(BaseModel):
    users: List[User]


class UserResponse(BaseModel):
    user: User


class ArticlesResponse(BaseModel):
    articles: List[ArticleSummary]
    total_count: int


class ArticleResponse(BaseModel):
    article: Article


class CommentsResponse(BaseModel):
    comments: List[Comment]


class CommentResponse(BaseModel):
    comment: Comment
