"""
admin_console.db.repositories.accounts

Repository for `Account` entities.

Responsibilities:
- Look up accounts by id or normalized email.
- Insert new accounts (uniqueness enforced by the store).
- Flip the suspension flag as one atomic statement.
"""

from __future__ import annotations

import uuid

from sqlalchemy import desc, not_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.db.models import Account, AccountRole


class AccountRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        email: str,
        name: str | None = None,
        photo_url: str | None = None,
    ) -> Account:
        account = Account(
            email=email,
            name=name,
            photo_url=photo_url or "",
            role=AccountRole.user,
            blocked=False,
        )
        self._session.add(account)
        # Raises IntegrityError when another writer registered the same email first.
        await self._session.flush()
        return account

    async def get(self, account_id: uuid.UUID) -> Account | None:
        return await self._session.get(Account, account_id)

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(Account).where(Account.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_newest_first(self) -> list[Account]:
        stmt = select(Account).order_by(desc(Account.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def toggle_blocked(self, account_id: uuid.UUID) -> bool | None:
        # Single UPDATE ... RETURNING: the read-modify-write happens inside the store,
        # so concurrent toggles serialize on the row and the flag is always a boolean.
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(blocked=not_(Account.blocked))
            .returning(Account.blocked)
            .execution_options(synchronize_session=False)
        )
        new_state = (await self._session.execute(stmt)).scalar_one_or_none()
        return None if new_state is None else bool(new_state)
