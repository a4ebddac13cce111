"""
admin_console.services.principals

Principal resolution: verified claim -> local Account.

Responsibilities:
- Register an account on first sight of an email (idempotent upsert).
- Refresh drifting profile fields (name, photo) without redundant writes.
- Fold a lost first-registration race into the update path.
- Read-only lookups by email used by the public status endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.auth.models import VerifiedClaim
from admin_console.db.models import Account
from admin_console.db.repositories.accounts import AccountRepo
from admin_console.errors import InternalError, InvalidRequest, NotFound
from admin_console.observability.logging import get_logger

log = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True, slots=True)
class ProfileHints:
    name: str | None = None
    photo_url: str | None = None


class PrincipalResolver:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._accounts = AccountRepo(session)

    async def register_or_sync(
        self, claim: VerifiedClaim, hints: ProfileHints | None = None
    ) -> Account:
        if not claim.email:
            raise InvalidRequest("email is required")
        hints = hints or ProfileHints()

        account = await self._accounts.get_by_email(claim.email)
        if account is None:
            try:
                account = await self._accounts.create(
                    email=claim.email, name=hints.name, photo_url=hints.photo_url
                )
                await self._session.commit()
            except IntegrityError:
                # Another request registered this email between our lookup and insert.
                await self._session.rollback()
                log.info("account.registration_race_lost", email=claim.email)
                account = await self._accounts.get_by_email(claim.email)
                if account is None:
                    raise InternalError("account missing after concurrent registration")
            else:
                log.info("account.registered", email=account.email, account_id=str(account.id))
                return account

        changed = _apply_profile(account, hints)
        if changed:
            await self._session.commit()
            log.info(
                "account.profile_synced",
                email=account.email,
                account_id=str(account.id),
                fields=changed,
            )
        return account

    async def get_current(self, claim: VerifiedClaim) -> Account:
        account = await self._accounts.get_by_email(claim.email) if claim.email else None
        if account is None:
            raise NotFound("account not found")
        return account

    async def get_by_email(self, email: str) -> Account:
        account = await self._accounts.get_by_email(normalize_email(email))
        if account is None:
            raise NotFound("account not found")
        return account

    async def blocked_status(self, email: str) -> bool:
        return (await self.get_by_email(email)).blocked


def _apply_profile(account: Account, hints: ProfileHints) -> list[str]:
    # Only supplied values that differ from what is stored count as a change.
    changed: list[str] = []
    if hints.photo_url and account.photo_url != hints.photo_url:
        account.photo_url = hints.photo_url
        changed.append("photo_url")
    if hints.name and account.name != hints.name:
        account.name = hints.name
        changed.append("name")
    return changed


# --- Module Notes -----------------------------------------------------------
# Role is written once at creation and never consulted for authorization;
# see `auth.deps.require_admin`.
