from __future__ import annotations

import uuid

from sqlalchemy import delete, desc, func, not_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.db.models import Account, Blog


class BlogRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        title: str,
        category: str = "",
        author_id: uuid.UUID | None = None,
        views: int = 0,
    ) -> Blog:
        blog = Blog(title=title, category=category, author_id=author_id, views=views)
        self._session.add(blog)
        await self._session.flush()
        return blog

    async def get(self, blog_id: uuid.UUID) -> Blog | None:
        return await self._session.get(Blog, blog_id)

    async def list_with_authors(self) -> list[tuple[Blog, Account | None]]:
        # Outer join: a blog whose author row is gone still lists, with author None.
        stmt = (
            select(Blog, Account)
            .outerjoin(Account, Account.id == Blog.author_id)
            .order_by(desc(Blog.created_at))
        )
        return [(blog, author) for blog, author in (await self._session.execute(stmt)).all()]

    async def count(self) -> int:
        return (await self._session.execute(select(func.count()).select_from(Blog))).scalar_one()

    async def toggle_verified(self, blog_id: uuid.UUID) -> bool | None:
        stmt = (
            update(Blog)
            .where(Blog.id == blog_id)
            .values(verified=not_(Blog.verified))
            .returning(Blog.verified)
            .execution_options(synchronize_session=False)
        )
        new_state = (await self._session.execute(stmt)).scalar_one_or_none()
        return None if new_state is None else bool(new_state)

    async def delete(self, blog_id: uuid.UUID) -> bool:
        stmt = delete(Blog).where(Blog.id == blog_id).execution_options(synchronize_session=False)
        result = await self._session.execute(stmt)
        # Zero rows means it was already gone, possibly removed by a concurrent delete.
        return result.rowcount > 0
