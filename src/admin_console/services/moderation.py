"""
admin_console.services.moderation

Admin moderation actions (transaction owner).

Responsibilities:
- List accounts (newest first) and derive dashboard stats from them, plus the blog count.
- Toggle an account's suspension flag.
- List blogs with their authors resolved; toggle verification; delete.

All callers must already have passed `auth.deps.require_active_admin`.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.db.models import Account, Blog
from admin_console.db.repositories.accounts import AccountRepo
from admin_console.db.repositories.blogs import BlogRepo
from admin_console.errors import NotFound
from admin_console.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AccountStats:
    total: int
    active: int
    blocked: int


def account_stats(accounts: Sequence[Account]) -> AccountStats:
    blocked = sum(1 for a in accounts if a.blocked)
    return AccountStats(total=len(accounts), active=len(accounts) - blocked, blocked=blocked)


class ModerationService:
    def __init__(self, *, session: AsyncSession, actor: str | None) -> None:
        self._session = session
        self._actor = actor
        self._accounts = AccountRepo(session)
        self._blogs = BlogRepo(session)

    async def list_accounts(self) -> list[Account]:
        return await self._accounts.list_newest_first()

    async def toggle_account_block(self, account_id: uuid.UUID) -> bool:
        blocked = await self._accounts.toggle_blocked(account_id)
        if blocked is None:
            await self._session.rollback()
            raise NotFound("account not found")
        await self._session.commit()
        log.info(
            "account.block_toggled",
            account_id=str(account_id),
            blocked=blocked,
            actor=self._actor,
        )
        return blocked

    async def list_blogs(self) -> list[tuple[Blog, Account | None]]:
        return await self._blogs.list_with_authors()

    async def count_blogs(self) -> int:
        return await self._blogs.count()

    async def toggle_blog_verification(self, blog_id: uuid.UUID) -> bool:
        verified = await self._blogs.toggle_verified(blog_id)
        if verified is None:
            await self._session.rollback()
            raise NotFound("blog not found")
        await self._session.commit()
        log.info(
            "blog.verification_toggled",
            blog_id=str(blog_id),
            verified=verified,
            actor=self._actor,
        )
        return verified

    async def delete_blog(self, blog_id: uuid.UUID) -> None:
        deleted = await self._blogs.delete(blog_id)
        if not deleted:
            await self._session.rollback()
            # Already gone (possibly a concurrent delete won); reported, not crashed on.
            raise NotFound("blog not found")
        await self._session.commit()
        log.info("blog.deleted", blog_id=str(blog_id), actor=self._actor)


# --- Module Notes -----------------------------------------------------------
# Toggles stay toggles: retrying a toggle flips the flag again. Callers that need
# "ensure blocked" read the current state first.
