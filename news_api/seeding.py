import logging

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import Article, Comment, Topic, User

logger = logging.getLogger(__name__)

# Parents before children so every foreign key resolves.
_INSERT_ORDER = (
    ("topics", Topic),
    ("users", User),
    ("articles", Article),
    ("comments", Comment),
)


async def seed(session: AsyncSession, data: dict[str, list[dict]]) -> dict[str, int]:
    """
    Insert *data* (``{"topics": [...], "users": [...], ...}``) into an
    empty schema and return the number of rows written per table.

    Rows are inserted in list order.  The caller owns the transaction.
    """
    counts: dict[str, int] = {}
    for key, model in _INSERT_ORDER:
        rows = data.get(key, [])
        if rows:
            await session.execute(insert(model), rows)
        counts[key] = len(rows)
    await session.flush()
    logger.info("Seeded %s", ", ".join(f"{n} {key}" for key, n in counts.items()))
    return counts
