"""
admin_console.auth.deps

FastAPI dependency functions forming the access gate.

Responsibilities:
- Convert a bearer token into a typed `VerifiedClaim` (authentication).
- Enforce the provider-issued admin capability (authorization).
- Apply block enforcement before moderation actions.
- Throttle the unauthenticated status lookups.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.deps import db_session
from admin_console.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    KeySourceUnavailable,
    claim_from_payload,
    decode_and_validate,
)
from admin_console.auth.models import VerifiedClaim
from admin_console.auth.rate_limit import RateLimiter
from admin_console.errors import Forbidden, RateLimited, ServiceUnavailable, Unauthenticated
from admin_console.observability.logging import get_logger
from admin_console.services.suspension import enforce_for_claim
from admin_console.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
        jwks_url=settings.jwks_url,
        jwks_timeout=settings.jwks_timeout_seconds,
    )


def get_claim(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> VerifiedClaim:
    # Plain def: FastAPI runs it in the threadpool, so a blocking JWKS fetch
    # only holds up this request.
    if creds is None or not creds.credentials:
        raise Unauthenticated("missing bearer token")

    try:
        payload = decode_and_validate(cfg=jwt_config(settings), token=creds.credentials)
    except KeySourceUnavailable as e:
        log.warning("auth.key_source_unavailable", error=str(e))
        raise ServiceUnavailable("identity provider unavailable") from e
    except JwtValidationError as e:
        log.info("auth.rejected", reason=str(e))
        raise Unauthenticated(f"invalid token: {e}") from e

    return claim_from_payload(payload, admin_claim=settings.admin_claim)


def require_admin(claim: VerifiedClaim = Depends(get_claim)) -> VerifiedClaim:
    # Decided from the live claim only; the stored Account.role is never consulted.
    if not claim.is_admin:
        log.info("auth.forbidden", email=claim.email)
        raise Forbidden("admin capability required")
    return claim


async def require_active_admin(
    claim: VerifiedClaim = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> VerifiedClaim:
    await enforce_for_claim(session, claim)
    return claim


def public_lookup_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.public_lookup_limiter
    identifier = request.client.host if request.client else "unknown"
    allowed, _ = limiter.check_and_increment(identifier)
    if not allowed:
        log.warning("auth.rate_limited", client=identifier, path=request.url.path)
        raise RateLimited("too many lookups, retry later")


# --- Module Notes -----------------------------------------------------------
# Routers compose these as `require_active_admin` (moderation) or `get_claim`
# (self-service). Authentication always runs first, so an unauthenticated caller
# never learns whether it would have passed the admin check.
