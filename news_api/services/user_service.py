"""
User service: reads and inserts for the User aggregate.

Users are addressed by username, which is also their primary key; a
duplicate insert surfaces as a unique violation and is reported as 400
by the error normalizer.
"""
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import User
from news_api.schemas import UserCreate
from news_api.services.querying import check_exists

_COLUMNS = (User.username, User.name, User.avatar_url)


async def list_users(db: AsyncSession) -> list[dict]:
    q = select(*_COLUMNS).order_by(User.username)
    return [dict(r) for r in (await db.execute(q)).mappings().all()]


async def get_user(db: AsyncSession, username: str) -> dict:
    """
    Return the user row for *username*.

    The existence check already reads the full row, so no second query is
    issued.
    """
    row = await check_exists(db, User, "username", username)
    return dict(row)


async def create_user(db: AsyncSession, data: UserCreate) -> dict:
    stmt = (
        insert(User)
        .values(username=data.username, name=data.name, avatar_url=data.avatar_url)
        .returning(*_COLUMNS)
    )
    return dict((await db.execute(stmt)).mappings().one())
