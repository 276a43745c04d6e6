"""Fail if Alembic migrations are out of sync with SQLAlchemy models."""

from __future__ import annotations

import asyncio
import sys

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import text

from bio_optimizer.config import settings
from bio_optimizer.database import Base, build_engine
from bio_optimizer import models  # noqa: F401  # Ensure models are registered


def _compare(connection) -> list[object]:
    context = MigrationContext.configure(connection, opts={"compare_type": True})
    return compare_metadata(context, Base.metadata)


async def main(db_url: str) -> int:
    engine = build_engine(db_url)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
        diffs = await conn.run_sync(_compare)
    await engine.dispose()

    if diffs:
        print("Detected schema differences between models and database:")
        for diff in diffs:
            print(diff)
        return 1

    print("No schema differences detected.")
    return 0


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else settings.database_url
    raise SystemExit(asyncio.run(main(url)))
