from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from admin_console.auth.deps import jwt_config
from admin_console.auth.jwt import issue_token
from admin_console.errors import NotFound
from admin_console.settings import Settings, get_settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    admin: bool = False
    name: str | None = Field(default=None, max_length=256)
    picture: str | None = Field(default=None, max_length=2048)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(get_settings),
) -> DevTokenResponse:
    # Stands in for the identity provider locally; unavailable in prod and with JWKS keys.
    cfg = jwt_config(settings)
    if settings.env == "prod" or not cfg.symmetric:
        raise NotFound("not found")

    token = issue_token(
        cfg=cfg,
        email=body.email,
        admin=body.admin,
        name=body.name,
        picture=body.picture,
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token)
