"""
admin_console.db.init_db

Schema bootstrap.

Responsibilities:
- Create the accounts/blogs tables (and the unique email constraint) when absent.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from admin_console.db import models  # noqa: F401  # registers tables on Base.metadata
from admin_console.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create missing tables. Existing tables are left untouched, so this is safe
    to run on every startup.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
