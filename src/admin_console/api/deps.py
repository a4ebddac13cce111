"""
admin_console.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide request-scoped DB sessions from the app-level sessionmaker.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created in the lifespan of `admin_console.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # One session per request; services commit explicitly, anything uncommitted rolls back on close.
    async with session_factory() as session:
        yield session
