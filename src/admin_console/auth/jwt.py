"""
admin_console.auth.jwt

Identity token issuing and validation helpers.

Responsibilities:
- Decode and validate provider-issued identity tokens with strict claim
  requirements (iss/aud/exp/iat) against a shared secret or the provider JWKS.
- Turn a validated payload into a per-request `VerifiedClaim`.
- Issue short-lived HS-signed tokens for local/dev scenarios and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import jwt
from jwt import InvalidTokenError, PyJWKClient
from jwt.exceptions import PyJWKClientConnectionError, PyJWKClientError

from admin_console.auth.models import VerifiedClaim


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str
    jwks_url: str | None = None
    jwks_timeout: int = 10

    @property
    def symmetric(self) -> bool:
        return self.alg.upper().startswith("HS")


class JwtValidationError(Exception):
    pass


class KeySourceUnavailable(Exception):
    """The provider's key endpoint could not be reached; safe to retry."""


@lru_cache(maxsize=8)
def _jwks_client(jwks_url: str, timeout: int) -> PyJWKClient:
    # One client per endpoint so the fetched key set is reused across requests.
    return PyJWKClient(jwks_url, cache_keys=True, lifespan=3600, timeout=timeout)


def _verification_key(cfg: JwtConfig, token: str) -> Any:
    if cfg.symmetric:
        return cfg.secret
    if not cfg.jwks_url:
        raise JwtValidationError(f"no key source configured for {cfg.alg}")
    try:
        return _jwks_client(cfg.jwks_url, cfg.jwks_timeout).get_signing_key_from_jwt(token).key
    except PyJWKClientConnectionError as e:
        raise KeySourceUnavailable(str(e)) from e
    except (PyJWKClientError, InvalidTokenError) as e:
        raise JwtValidationError(str(e)) from e


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    key = _verification_key(cfg, token)
    try:
        return jwt.decode(
            token,
            key,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def claim_from_payload(payload: dict[str, Any], *, admin_claim: str = "admin") -> VerifiedClaim:
    raw_email = payload.get("email")
    email = raw_email.strip().lower() if isinstance(raw_email, str) and raw_email.strip() else None
    # Only a literal boolean true grants the capability.
    is_admin = payload.get(admin_claim) is True
    name = payload.get("name")
    picture = payload.get("picture")
    return VerifiedClaim(
        email=email,
        is_admin=is_admin,
        issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
        expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        name=name if isinstance(name, str) else None,
        picture=picture if isinstance(picture, str) else None,
    )


def issue_token(
    *,
    cfg: JwtConfig,
    email: str,
    admin: bool = False,
    name: str | None = None,
    picture: str | None = None,
    ttl: timedelta = timedelta(hours=1),
    issued_at: datetime | None = None,
) -> str:
    if not cfg.symmetric:
        raise ValueError("local token issuing requires a symmetric algorithm")
    now = issued_at or datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": email,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    if admin:
        payload["admin"] = True
    if name is not None:
        payload["name"] = name
    if picture is not None:
        payload["picture"] = picture
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


# --- Module Notes -----------------------------------------------------------
# Token issuing is only reachable from `api/routers/dev_auth.py` (non-prod) and tests.
# Real identity tokens come from the provider and are verified through its JWKS.
