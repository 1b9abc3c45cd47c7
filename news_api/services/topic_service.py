"""
Topic service.

Slug uniqueness is left to the primary key; a duplicate insert raises
``IntegrityError``, which the error normalizer reports as 400.
"""
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import Topic
from news_api.schemas import TopicCreate


async def list_topics(db: AsyncSession) -> list[dict]:
    q = select(Topic.slug, Topic.description).order_by(Topic.slug)
    return [dict(r) for r in (await db.execute(q)).mappings().all()]


async def create_topic(db: AsyncSession, data: TopicCreate) -> dict:
    """Insert a topic; ``description`` defaults to the slug when omitted."""
    description = data.description if data.description is not None else data.slug
    stmt = (
        insert(Topic)
        .values(slug=data.slug, description=description)
        .returning(Topic.slug, Topic.description)
    )
    return dict((await db.execute(stmt)).mappings().one())
