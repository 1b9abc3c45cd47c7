"""Database seeder: rebuilds the schema and loads the sample dataset."""
import argparse
import asyncio
import time

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from news_api.config import settings
from news_api.database import Base
from news_api.seed_data import SAMPLE_DATA
from news_api.seeding import seed

import news_api.models  # noqa: F401  (registers tables on Base.metadata)


async def run(database_url: str, echo: bool = False):
    start = time.perf_counter()
    engine = create_async_engine(database_url, echo=echo)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        counts = await seed(session, SAMPLE_DATA)
        await session.commit()

    await engine.dispose()

    elapsed = time.perf_counter() - start
    print(f"Seeding complete in {elapsed:.2f}s")
    for table, n in counts.items():
        print(f"  {table}: {n}")


def main():
    parser = argparse.ArgumentParser(description="Drop, recreate and seed the news database")
    parser.add_argument(
        "--database-url",
        default=settings.DATABASE_URL,
        help="SQLAlchemy async URL (defaults to DATABASE_URL from the environment / .env)",
    )
    parser.add_argument("--echo", action="store_true", help="Log every SQL statement")
    args = parser.parse_args()
    asyncio.run(run(args.database_url, echo=args.echo))


if __name__ == "__main__":
    main()
