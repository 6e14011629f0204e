"""
Create any missing tables for the ORM models.

Usage: python -m meritboard.db.schema_check
"""
import asyncio
from typing import List

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

# Register every model on Base.metadata
import meritboard.auth.models  # noqa: F401
import meritboard.core.models  # noqa: F401
from meritboard.db.session import Base, engine


async def ensure_tables(db_engine: AsyncEngine) -> List[str]:
    """Create tables that do not exist yet; returns the names that were created."""
    async with db_engine.begin() as conn:
        existing = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
        missing = [t.name for t in Base.metadata.sorted_tables if t.name not in existing]
        await conn.run_sync(Base.metadata.create_all)

    if missing:
        print("Created missing tables: " + ", ".join(missing))
    else:
        print("All required tables already exist in the database.")
    return missing


async def main() -> None:
    await ensure_tables(engine)


if __name__ == "__main__":
    asyncio.run(main())
