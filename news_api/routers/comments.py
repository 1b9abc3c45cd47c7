from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.dependencies import CommentId
from news_api.schemas import CommentEnvelope, CommentPatch
from news_api.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/{comment_id}", response_model=CommentEnvelope)
async def get_comment(comment_id: CommentId, db: AsyncSession = Depends(get_db)):
    return {"comment": await comment_service.get_comment(db, comment_id)}


@router.patch("/{comment_id}", response_model=CommentEnvelope)
async def update_comment(
    comment_id: CommentId, patch: CommentPatch, db: AsyncSession = Depends(get_db)
):
    return {"comment": await comment_service.update_comment(db, comment_id, patch)}


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: CommentId, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id)
    return Response(status_code=204)
