"""
Article service: query construction for the Article aggregate.

Design notes
------------
- ``comment_count`` is never stored: every read outer-joins comments and
  groups by the article's primary key, so an article without comments
  reports 0.
- List reads return ``total_count`` computed with the same filters but
  without the LIMIT/OFFSET window, so clients can work out page counts.
- Writes are pre-checked with ``check_exists`` (author, topic, the
  article itself) inside the request-scoped transaction owned by
  ``get_db``.  The schema's foreign keys stay in force; if a referenced
  row disappears between check and write the resulting constraint error
  is classified by the error normalizer.
- Mutations return the re-read row so the response always carries the
  joined ``comment_count``.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.config import settings
from news_api.models import Article, Comment, Topic, User
from news_api.schemas import ArticleCreate, ArticlePatch
from news_api.services.querying import (
    ExistenceCheck,
    FilterCandidate,
    build_filters,
    check_exists,
    order_clause,
    resolve_order,
    resolve_page,
    resolve_sort_column,
    run_checks,
)

# ---------------------------------------------------------------------------
# Column sets
# ---------------------------------------------------------------------------

_COMMENT_COUNT = func.count(Comment.comment_id).label("comment_count")

# List view omits the body.
_SUMMARY_COLUMNS = (
    Article.article_id,
    Article.author,
    Article.title,
    Article.topic,
    Article.created_at,
    Article.votes,
    Article.article_img_url,
)

SORTABLE_COLUMNS = {
    "article_id": Article.article_id,
    "author": Article.author,
    "title": Article.title,
    "topic": Article.topic,
    "created_at": Article.created_at,
    "votes": Article.votes,
    "article_img_url": Article.article_img_url,
    "comment_count": _COMMENT_COUNT,
}


def _with_comment_count(*columns):
    return (
        select(*columns, _COMMENT_COUNT)
        .select_from(Article)
        .outerjoin(Comment, Comment.article_id == Article.article_id)
        .group_by(Article.article_id)
    )


async def _fetch_article(db: AsyncSession, article_id: int) -> dict:
    q = _with_comment_count(*_SUMMARY_COLUMNS, Article.body).where(
        Article.article_id == article_id
    )
    row = (await db.execute(q)).mappings().one()
    return dict(row)


# ---------------------------------------------------------------------------
# Patch mapping
# ---------------------------------------------------------------------------

def article_patch(patch: ArticlePatch) -> tuple[list[tuple[Any, Any]], list[ExistenceCheck]]:
    """
    Map a PATCH payload onto ordered ``(column, value)`` assignments plus
    the existence checks that must pass before they are applied.

    ``inc_votes`` becomes a relative ``votes + n`` expression; a new
    ``topic`` must already exist.  Absent fields contribute nothing, so an
    empty result means the request is a no-op.
    """
    assignments: list[tuple[Any, Any]] = []
    checks: list[ExistenceCheck] = []

    if patch.inc_votes is not None:
        assignments.append((Article.votes, Article.votes + patch.inc_votes))
    if patch.body is not None:
        assignments.append((Article.body, patch.body))
    if patch.title is not None:
        assignments.append((Article.title, patch.title))
    if patch.topic is not None:
        assignments.append((Article.topic, patch.topic))
        checks.append(ExistenceCheck(Topic, "slug", patch.topic))

    return assignments, checks


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_articles(
    db: AsyncSession,
    sort_by: str = "created_at",
    order: str = "desc",
    topic: str | None = None,
    author: str | None = None,
    limit: str | None = None,
    p: str | None = None,
) -> dict:
    """
    Return ``{"articles": [...], "total_count": n}``.

    Two SQL statements are issued once validation passes:
    1. SELECT with the comment-count join, filters, ORDER BY and window.
    2. COUNT over the same filters, ignoring the window.

    A ``topic`` or ``author`` that does not exist raises ``NotFound``; an
    existing one with no articles yields an empty list.
    """
    direction = resolve_order(order)
    sort_column = resolve_sort_column(sort_by, SORTABLE_COLUMNS)
    window = resolve_page(
        limit if limit is not None else str(settings.DEFAULT_LIMIT),
        p if p is not None else str(settings.DEFAULT_PAGE),
    )
    predicates = await build_filters(
        db,
        [
            FilterCandidate(topic, Topic, "slug", Article.topic),
            FilterCandidate(author, User, "username", Article.author),
        ],
    )

    q = (
        _with_comment_count(*_SUMMARY_COLUMNS)
        .where(*predicates)
        .order_by(order_clause(sort_column, direction))
    )
    rows = (await db.execute(window.apply(q))).mappings().all()

    count_q = select(func.count()).select_from(Article).where(*predicates)
    total: int = (await db.execute(count_q)).scalar_one()

    return {"articles": [dict(r) for r in rows], "total_count": total}


async def get_article(db: AsyncSession, article_id: int) -> dict:
    """Return the article with its body and ``comment_count``."""
    await check_exists(db, Article, "article_id", article_id)
    return await _fetch_article(db, article_id)


async def create_article(db: AsyncSession, data: ArticleCreate) -> dict:
    """
    Insert a new article and return it as stored.

    ``votes`` starts at 0, ``created_at`` is set by the database and a
    missing ``article_img_url`` falls back to the configured placeholder.
    """
    await run_checks(
        db,
        [
            ExistenceCheck(User, "username", data.author),
            ExistenceCheck(Topic, "slug", data.topic),
        ],
    )

    img_url = data.article_img_url
    if img_url is None:
        img_url = settings.DEFAULT_ARTICLE_IMG_URL

    stmt = (
        insert(Article)
        .values(
            author=data.author,
            title=data.title,
            body=data.body,
            topic=data.topic,
            article_img_url=img_url,
        )
        .returning(Article.article_id)
    )
    article_id: int = (await db.execute(stmt)).scalar_one()
    return await _fetch_article(db, article_id)


async def update_article(db: AsyncSession, article_id: int, patch: ArticlePatch) -> dict:
    """
    Apply a partial update and return the resulting article.

    A payload with no recognised keys returns the article unchanged.
    """
    await check_exists(db, Article, "article_id", article_id)

    assignments, checks = article_patch(patch)
    if assignments:
        await run_checks(db, checks)
        stmt = (
            update(Article)
            .where(Article.article_id == article_id)
            .values({column.key: value for column, value in assignments})
            .execution_options(synchronize_session=False)
        )
        await db.execute(stmt)

    return await _fetch_article(db, article_id)


async def delete_article(db: AsyncSession, article_id: int) -> None:
    """Delete the article; its comments go with it via ``ON DELETE CASCADE``."""
    await check_exists(db, Article, "article_id", article_id)
    stmt = (
        delete(Article)
        .where(Article.article_id == article_id)
        .execution_options(synchronize_session=False)
    )
    await db.execute(stmt)
