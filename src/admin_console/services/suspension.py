"""
admin_console.services.suspension

Block enforcement.

Responsibilities:
- Deny any session whose account is suspended, regardless of admin capability.
- Re-check suspension for the caller before moderation actions.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.auth.models import VerifiedClaim
from admin_console.db.models import Account
from admin_console.db.repositories.accounts import AccountRepo
from admin_console.errors import AccountSuspended
from admin_console.observability.logging import get_logger

log = get_logger(__name__)


def check_suspension(account: Account) -> None:
    if account.blocked:
        log.warning("account.suspended_denied", email=account.email, account_id=str(account.id))
        raise AccountSuspended("account is suspended")


async def enforce_for_claim(session: AsyncSession, claim: VerifiedClaim) -> Account | None:
    """
    Look up the caller's account and apply `check_suspension`.

    A caller without a local account has never been suspended, so it passes.
    """

    if not claim.email:
        return None
    account = await AccountRepo(session).get_by_email(claim.email)
    if account is not None:
        check_suspension(account)
    return account
