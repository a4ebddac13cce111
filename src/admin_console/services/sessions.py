"""
admin_console.services.sessions

Dashboard session establishment.

Responsibilities:
- Refuse claims older than the configured freshness bound.
- Register/sync the caller, then apply suspension before the admin check, so a
  suspended admin is torn down exactly like a suspended user.
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.auth.models import VerifiedClaim
from admin_console.db.models import Account
from admin_console.errors import Forbidden, Unauthenticated
from admin_console.observability.logging import get_logger
from admin_console.services.principals import PrincipalResolver, ProfileHints
from admin_console.services.suspension import check_suspension

log = get_logger(__name__)


class SessionService:
    def __init__(self, *, session: AsyncSession, max_token_age: timedelta) -> None:
        self._resolver = PrincipalResolver(session=session)
        self._max_token_age = max_token_age

    async def establish(
        self, claim: VerifiedClaim, hints: ProfileHints | None = None
    ) -> Account:
        if claim.age() > self._max_token_age:
            # The client must refresh its token so the admin flag is current.
            log.info("session.stale_credential", email=claim.email)
            raise Unauthenticated("stale credential, refresh the token and retry")

        account = await self._resolver.register_or_sync(claim, hints)
        check_suspension(account)
        if not claim.is_admin:
            raise Forbidden("admin capability required")

        log.info("session.established", email=account.email, account_id=str(account.id))
        return account
