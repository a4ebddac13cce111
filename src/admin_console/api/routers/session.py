from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.deps import db_session
from admin_console.api.routers.users import AccountResponse, RegisterRequest
from admin_console.auth.deps import get_claim
from admin_console.auth.models import VerifiedClaim
from admin_console.services.sessions import SessionService
from admin_console.settings import Settings, get_settings

router = APIRouter(prefix="/v1/session", tags=["session"])


class SessionResponse(BaseModel):
    account: AccountResponse
    is_admin: bool


@router.post("", response_model=SessionResponse)
async def establish_session(
    body: RegisterRequest | None = None,
    claim: VerifiedClaim = Depends(get_claim),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    """
    Dashboard bootstrap: fresh claim -> register/sync -> suspension -> admin.

    A 401 or an `account_suspended` 403 tells the client to discard its
    credential; a plain 403 keeps the session but denies the console.
    """

    svc = SessionService(
        session=session,
        max_token_age=timedelta(seconds=settings.session_max_token_age_seconds),
    )
    account = await svc.establish(claim, (body or RegisterRequest()).hints(claim))
    return SessionResponse(account=AccountResponse.from_account(account), is_admin=claim.is_admin)
