# ncnews/api/articles.py
from fastapi import APIRouter, Query, Response, status
from typing import Optional

from ncnews.models.schemas import (
    ArticleCreate,
    ArticleResponse,
    ArticlesResponse,
    CommentCreate,
    CommentResponse,
    CommentsResponse,
    VoteUpdate,
)
from ncnews.services import articles as svc
from ncnews.services import comments as comments_svc
from ncnews.services.params import parse_article_params, parse_comment_params

router = APIRouter(prefix="/api/articles", tags=["articles"])

# -----------------------
#  Collection
# -----------------------

@router.get("", response_model=ArticlesResponse, summary="Filtered, sorted, paginated articles")
async def api_list_articles(sort_by: Optional[str] = None,
                            order: Optional[str] = None,
                            author: Optional[str] = None,
                            topic: Optional[str] = None,
                            limit: Optional[str] = None,
                            p: Optional[str] = Query(None, description="Page number, 1-based")):
    """
    Articles without body, each with ``comment_count``; ``total_count`` ignores pagination.
    Query values arrive as raw strings and are validated by the params module.
    """
    params = parse_article_params(sort_by=sort_by, order=order, author=author,
                                  topic=topic, limit=limit, page=p)
    articles, total = await svc.list_articles(params)
    return {"articles": articles, "total_count": total}


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED,
             summary="Create an article")
async def api_post_article(payload: ArticleCreate):
    article = await svc.insert_article(payload)
    return {"article": article}

# -----------------------
#  Single article
# -----------------------

@router.get("/{article_id}", response_model=ArticleResponse, summary="Article by id")
async def api_get_article(article_id: int):
    article = await svc.get_article(article_id)
    return {"article": article}


@router.patch("/{article_id}", response_model=ArticleResponse, summary="Increment article votes")
async def api_patch_article(article_id: int, payload: Optional[VoteUpdate] = None):
    inc_votes = payload.inc_votes if payload else None
    article = await svc.update_article_votes(article_id, inc_votes)
    return {"article": article}


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an article")
async def api_delete_article(article_id: int):
    await svc.delete_article(article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# -----------------------
#  Comments of an article
# -----------------------

@router.get("/{article_id}/comments", response_model=CommentsResponse,
            summary="Comments of an article")
async def api_list_comments(article_id: int,
                            sort_by: Optional[str] = None,
                            order: Optional[str] = None,
                            limit: Optional[str] = None,
                            p: Optional[str] = Query(None, description="Page number, 1-based")):
    params = parse_comment_params(sort_by=sort_by, order=order, limit=limit, page=p)
    comments = await comments_svc.list_comments(article_id, params)
    return {"comments": comments}


@router.post("/{article_id}/comments", response_model=CommentResponse,
             status_code=status.HTTP_201_CREATED, summary="Add a comment to an article")
async def api_post_comment(article_id: int, payload: CommentCreate):
    comment = await comments_svc.insert_comment(article_id, payload.username, payload.body)
    return {"comment": comment}
