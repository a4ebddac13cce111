"""
tests.test_jwt

Token verifier: signature/expiry/issuer checks, claim extraction, JWKS key source.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.exceptions import PyJWKClientConnectionError

from admin_console.auth import jwt as token_verifier
from admin_console.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    KeySourceUnavailable,
    claim_from_payload,
    decode_and_validate,
    issue_token,
)

CFG = JwtConfig(alg="HS256", issuer="issuer-a", audience="console", secret="s3cret")


def test_valid_token_yields_normalized_claim() -> None:
    token = issue_token(cfg=CFG, email="  Someone@Example.COM ", admin=True, name="Some One")
    claim = claim_from_payload(decode_and_validate(cfg=CFG, token=token))

    assert claim.email == "someone@example.com"
    assert claim.is_admin is True
    assert claim.name == "Some One"
    assert claim.expires_at > claim.issued_at


def test_admin_flag_requires_literal_true() -> None:
    now = int(datetime.now(tz=UTC).timestamp())
    payload = {"email": "a@example.com", "admin": "true", "iat": now, "exp": now + 60}
    assert claim_from_payload(payload).is_admin is False

    payload["admin"] = True
    assert claim_from_payload(payload).is_admin is True
    assert claim_from_payload(payload, admin_claim="staff").is_admin is False


def test_missing_email_is_not_a_verification_failure() -> None:
    now = int(datetime.now(tz=UTC).timestamp())
    claim = claim_from_payload({"iat": now, "exp": now + 60})
    assert claim.email is None
    assert claim.is_admin is False


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        issue_token(cfg=JwtConfig("HS256", "issuer-a", "console", "other"), email="a@x.io"),
        issue_token(cfg=JwtConfig("HS256", "issuer-b", "console", "s3cret"), email="a@x.io"),
        issue_token(cfg=JwtConfig("HS256", "issuer-a", "elsewhere", "s3cret"), email="a@x.io"),
        issue_token(
            cfg=CFG,
            email="a@x.io",
            issued_at=datetime.now(tz=UTC) - timedelta(hours=2),
            ttl=timedelta(minutes=5),
        ),
    ],
    ids=["malformed", "bad-signature", "wrong-issuer", "wrong-audience", "expired"],
)
def test_invalid_tokens_are_rejected(token: str) -> None:
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


def test_asymmetric_algorithm_without_key_source_is_rejected() -> None:
    cfg = JwtConfig(alg="RS256", issuer="issuer-a", audience="console", secret="")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=cfg, token="a.b.c")


def test_issue_token_refuses_asymmetric_config() -> None:
    cfg = JwtConfig(alg="RS256", issuer="issuer-a", audience="console", secret="")
    with pytest.raises(ValueError):
        issue_token(cfg=cfg, email="a@x.io")


def _rs256_setup(monkeypatch: pytest.MonkeyPatch):
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    fake_client = SimpleNamespace(
        get_signing_key_from_jwt=lambda token: SimpleNamespace(key=private_key.public_key())
    )
    monkeypatch.setattr(token_verifier, "_jwks_client", lambda url, timeout: fake_client)
    cfg = JwtConfig(
        alg="RS256",
        issuer="https://issuer.example",
        audience="console",
        secret="",
        jwks_url="https://issuer.example/jwks",
    )
    return cfg, private_key


def test_jwks_signed_token_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg, private_key = _rs256_setup(monkeypatch)
    now = int(datetime.now(tz=UTC).timestamp())
    token = jwt.encode(
        {
            "iss": cfg.issuer,
            "aud": cfg.audience,
            "email": "ops@example.com",
            "admin": True,
            "iat": now,
            "exp": now + 300,
        },
        private_key,
        algorithm="RS256",
    )

    claim = claim_from_payload(decode_and_validate(cfg=cfg, token=token))
    assert claim.email == "ops@example.com"
    assert claim.is_admin is True


def test_token_signed_by_untrusted_key_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg, _ = _rs256_setup(monkeypatch)
    rogue = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    now = int(datetime.now(tz=UTC).timestamp())
    token = jwt.encode(
        {"iss": cfg.issuer, "aud": cfg.audience, "email": "x@y.io", "iat": now, "exp": now + 60},
        rogue,
        algorithm="RS256",
    )

    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=cfg, token=token)


def test_unreachable_key_source_is_retryable(monkeypatch: pytest.MonkeyPatch) -> None:
    def _unreachable(token: str):
        raise PyJWKClientConnectionError("timed out")

    monkeypatch.setattr(
        token_verifier,
        "_jwks_client",
        lambda url, timeout: SimpleNamespace(get_signing_key_from_jwt=_unreachable),
    )
    cfg = JwtConfig("RS256", "issuer-a", "console", "", jwks_url="https://issuer.example/jwks")

    with pytest.raises(KeySourceUnavailable):
        decode_and_validate(cfg=cfg, token="a.b.c")
