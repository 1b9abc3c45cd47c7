from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.dependencies import ArticleId, ListQueryParams
from news_api.schemas import (
    ArticleCreate,
    ArticleEnvelope,
    ArticleListEnvelope,
    ArticlePatch,
    CommentCreate,
    CommentEnvelope,
    CommentListEnvelope,
)
from news_api.services import article_service, comment_service

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("", response_model=ArticleListEnvelope)
async def list_articles(
    params: ListQueryParams = Depends(),
    topic: str | None = Query(None, description="Only articles on this topic slug."),
    author: str | None = Query(None, description="Only articles by this username."),
    db: AsyncSession = Depends(get_db),
):
    return await article_service.list_articles(
        db,
        sort_by=params.sort_by,
        order=params.order,
        topic=topic,
        author=author,
        limit=params.limit,
        p=params.p,
    )


@router.post("", status_code=201, response_model=ArticleEnvelope)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.create_article(db, data)}


@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(article_id: ArticleId, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.get_article(db, article_id)}


@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def update_article(
    article_id: ArticleId, patch: ArticlePatch, db: AsyncSession = Depends(get_db)
):
    return {"article": await article_service.update_article(db, article_id, patch)}


@router.delete("/{article_id}", status_code=204)
async def delete_article(article_id: ArticleId, db: AsyncSession = Depends(get_db)):
    await article_service.delete_article(db, article_id)
    return Response(status_code=204)


@router.get("/{article_id}/comments", response_model=CommentListEnvelope)
async def list_comments(
    article_id: ArticleId,
    params: ListQueryParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    comments = await comment_service.list_comments_for_article(
        db,
        article_id,
        sort_by=params.sort_by,
        order=params.order,
        limit=params.limit,
        p=params.p,
    )
    return {"comments": comments}


@router.post("/{article_id}/comments", status_code=201, response_model=CommentEnvelope)
async def create_comment(
    article_id: ArticleId, data: CommentCreate, db: AsyncSession = Depends(get_db)
):
    return {"comment": await comment_service.create_comment(db, article_id, data)}
