# ncnews/api/comments.py
from fastapi import APIRouter, Response, status
from typing import Optional

from ncnews.models.schemas import CommentResponse, VoteUpdate
from ncnews.services import comments as svc

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.patch("/{comment_id}", response_model=CommentResponse, summary="Increment comment votes")
async def api_patch_comment(comment_id: int, payload: Optional[VoteUpdate] = None):
    # no inc_votes: nothing changes, the current comment is returned
    inc_votes = payload.inc_votes if payload else None
    comment = await svc.update_comment_votes(comment_id, inc_votes)
    return {"comment": comment}


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a comment")
async def api_delete_comment(comment_id: int):
    await svc.delete_comment(comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
