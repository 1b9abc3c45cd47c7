"""
Comment service: comments always hang off an existing article.

The parent article (and, on create, the author) is existence-checked
before any comment statement runs, so a request against a missing
article never inserts anything.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.config import settings
from news_api.models import Article, Comment, User
from news_api.schemas import CommentCreate, CommentPatch
from news_api.services.querying import (
    check_exists,
    order_clause,
    resolve_order,
    resolve_page,
    resolve_sort_column,
)

_COLUMNS = (
    Comment.comment_id,
    Comment.article_id,
    Comment.author,
    Comment.body,
    Comment.votes,
    Comment.created_at,
)

SORTABLE_COLUMNS = {
    "comment_id": Comment.comment_id,
    "article_id": Comment.article_id,
    "author": Comment.author,
    "body": Comment.body,
    "votes": Comment.votes,
    "created_at": Comment.created_at,
}


async def _fetch_comment(db: AsyncSession, comment_id: int) -> dict:
    q = select(*_COLUMNS).where(Comment.comment_id == comment_id)
    return dict((await db.execute(q)).mappings().one())


def comment_patch(patch: CommentPatch) -> list[tuple[Any, Any]]:
    """Ordered ``(column, value)`` assignments for a comment PATCH payload."""
    assignments: list[tuple[Any, Any]] = []
    if patch.inc_votes is not None:
        assignments.append((Comment.votes, Comment.votes + patch.inc_votes))
    if patch.body is not None:
        assignments.append((Comment.body, patch.body))
    return assignments


async def list_comments_for_article(
    db: AsyncSession,
    article_id: int,
    sort_by: str = "created_at",
    order: str = "desc",
    limit: str | None = None,
    p: str | None = None,
) -> list[dict]:
    """
    Return one page of the article's comments, newest first by default.

    Raises ``NotFound`` when the article does not exist; an article with
    no comments yields an empty list.
    """
    await check_exists(db, Article, "article_id", article_id)

    direction = resolve_order(order)
    sort_column = resolve_sort_column(sort_by, SORTABLE_COLUMNS)
    window = resolve_page(
        limit if limit is not None else str(settings.DEFAULT_LIMIT),
        p if p is not None else str(settings.DEFAULT_PAGE),
    )

    q = (
        select(*_COLUMNS)
        .where(Comment.article_id == article_id)
        .order_by(order_clause(sort_column, direction))
    )
    rows = (await db.execute(window.apply(q))).mappings().all()
    return [dict(r) for r in rows]


async def get_comment(db: AsyncSession, comment_id: int) -> dict:
    row = await check_exists(db, Comment, "comment_id", comment_id)
    return dict(row)


async def create_comment(db: AsyncSession, article_id: int, data: CommentCreate) -> dict:
    """
    Post a comment on *article_id* as *data.username*.

    Both the article and the user must exist; ``votes`` starts at 0.
    """
    await check_exists(db, Article, "article_id", article_id)
    await check_exists(db, User, "username", data.username)

    stmt = (
        insert(Comment)
        .values(article_id=article_id, author=data.username, body=data.body)
        .returning(Comment.comment_id)
    )
    comment_id: int = (await db.execute(stmt)).scalar_one()
    return await _fetch_comment(db, comment_id)


async def update_comment(db: AsyncSession, comment_id: int, patch: CommentPatch) -> dict:
    await check_exists(db, Comment, "comment_id", comment_id)

    assignments = comment_patch(patch)
    if assignments:
        stmt = (
            update(Comment)
            .where(Comment.comment_id == comment_id)
            .values({column.key: value for column, value in assignments})
            .execution_options(synchronize_session=False)
        )
        await db.execute(stmt)

    return await _fetch_comment(db, comment_id)


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    await check_exists(db, Comment, "comment_id", comment_id)
    stmt = (
        delete(Comment)
        .where(Comment.comment_id == comment_id)
        .execution_options(synchronize_session=False)
    )
    await db.execute(stmt)
