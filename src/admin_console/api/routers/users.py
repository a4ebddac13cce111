"""
admin_console.api.routers.users

Account endpoints.

Responsibilities:
- Self-service: register/sync after sign-in, fetch own account.
- Public (rate-limited) suspension lookups used by the sign-in flow.
- Admin: list accounts, derive stats, toggle suspension.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.deps import db_session
from admin_console.auth.deps import get_claim, public_lookup_limit, require_active_admin
from admin_console.auth.models import VerifiedClaim
from admin_console.db.models import Account
from admin_console.errors import InvalidRequest, NotFound
from admin_console.services.moderation import ModerationService, account_stats
from admin_console.services.principals import PrincipalResolver, ProfileHints, normalize_email

router = APIRouter(prefix="/v1/users", tags=["users"])


class RegisterRequest(BaseModel):
    name: str | None = Field(default=None, max_length=256)
    photo_url: str | None = Field(default=None, max_length=2048)

    def hints(self, claim: VerifiedClaim) -> ProfileHints:
        # Explicit values from the client win over the provider's profile claims.
        return ProfileHints(name=self.name or claim.name, photo_url=self.photo_url or claim.picture)


class CheckBlockedRequest(BaseModel):
    email: str | None = Field(default=None, max_length=320)


class AccountResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: str | None
    photo_url: str
    role: str
    blocked: bool
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> AccountResponse:
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            photo_url=account.photo_url,
            role=account.role.value,
            blocked=account.blocked,
            created_at=account.created_at,
        )


class BlockedResponse(BaseModel):
    blocked: bool


class BlockToggleResponse(BaseModel):
    success: bool = True
    blocked: bool


class StatsResponse(BaseModel):
    total: int
    active: int
    blocked: int
    blogs: int


@router.post("/register", response_model=AccountResponse)
async def register(
    body: RegisterRequest | None = None,
    claim: VerifiedClaim = Depends(get_claim),
    session: AsyncSession = Depends(db_session),
) -> AccountResponse:
    hints = (body or RegisterRequest()).hints(claim)
    account = await PrincipalResolver(session=session).register_or_sync(claim, hints)
    return AccountResponse.from_account(account)


@router.post(
    "/check-blocked",
    response_model=BlockedResponse,
    dependencies=[Depends(public_lookup_limit)],
)
async def check_blocked(
    body: CheckBlockedRequest | None = None,
    session: AsyncSession = Depends(db_session),
) -> BlockedResponse:
    if body is None or not body.email or not body.email.strip():
        raise InvalidRequest("email is required")
    blocked = await PrincipalResolver(session=session).blocked_status(body.email)
    return BlockedResponse(blocked=blocked)


@router.get(
    "/status/{email}",
    response_model=BlockedResponse,
    dependencies=[Depends(public_lookup_limit)],
)
async def blocked_status(
    email: str,
    session: AsyncSession = Depends(db_session),
):
    try:
        blocked = await PrincipalResolver(session=session).blocked_status(email)
    except NotFound as e:
        # Unknown emails read as "not blocked" alongside the 404.
        return JSONResponse(status_code=e.status_code, content={**e.to_dict(), "blocked": False})
    return BlockedResponse(blocked=blocked)


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    claim: VerifiedClaim = Depends(require_active_admin),
    session: AsyncSession = Depends(db_session),
) -> list[AccountResponse]:
    accounts = await ModerationService(session=session, actor=claim.email).list_accounts()
    return [AccountResponse.from_account(a) for a in accounts]


@router.get("/stats", response_model=StatsResponse)
async def stats(
    claim: VerifiedClaim = Depends(require_active_admin),
    session: AsyncSession = Depends(db_session),
) -> StatsResponse:
    moderation = ModerationService(session=session, actor=claim.email)
    s = account_stats(await moderation.list_accounts())
    return StatsResponse(
        total=s.total, active=s.active, blocked=s.blocked, blogs=await moderation.count_blogs()
    )


@router.get("/me", response_model=AccountResponse)
async def me(
    claim: VerifiedClaim = Depends(get_claim),
    session: AsyncSession = Depends(db_session),
) -> AccountResponse:
    account = await PrincipalResolver(session=session).get_current(claim)
    return AccountResponse.from_account(account)


@router.get("/{email}", response_model=AccountResponse)
async def get_by_email(
    email: str,
    claim: VerifiedClaim = Depends(get_claim),
    session: AsyncSession = Depends(db_session),
) -> AccountResponse:
    # Other principals' records are only visible to admins; everyone else gets a 404.
    if normalize_email(email) != claim.email and not claim.is_admin:
        raise NotFound("account not found")
    account = await PrincipalResolver(session=session).get_by_email(email)
    return AccountResponse.from_account(account)


@router.put("/{account_id}/block", response_model=BlockToggleResponse)
async def toggle_block(
    account_id: uuid.UUID,
    claim: VerifiedClaim = Depends(require_active_admin),
    session: AsyncSession = Depends(db_session),
) -> BlockToggleResponse:
    blocked = await ModerationService(session=session, actor=claim.email).toggle_account_block(
        account_id
    )
    return BlockToggleResponse(blocked=blocked)


# --- Module Notes -----------------------------------------------------------
# `check-blocked` and `status/{email}` are reachable before a session exists, so
# they stay unauthenticated but are throttled per client address.
