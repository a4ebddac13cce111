"""
tests.test_session

Dashboard session establishment: freshness, suspension before capability.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx
import pytest

from admin_console.db.repositories.accounts import AccountRepo

ADMIN_EMAIL = "admin@example.com"


@pytest.mark.asyncio
async def test_fresh_admin_session_registers_and_admits(client: httpx.AsyncClient, auth) -> None:
    r = await client.post(
        "/v1/session", headers=auth(ADMIN_EMAIL, admin=True), json={"name": "Ops"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["is_admin"] is True
    assert body["account"]["email"] == ADMIN_EMAIL
    assert body["account"]["name"] == "Ops"
    # Stored role stays informational.
    assert body["account"]["role"] == "user"


@pytest.mark.asyncio
async def test_blocked_admin_session_is_torn_down(
    client: httpx.AsyncClient, auth, block
) -> None:
    await client.post("/v1/session", headers=auth(ADMIN_EMAIL, admin=True))
    await block(ADMIN_EMAIL)

    r = await client.post("/v1/session", headers=auth(ADMIN_EMAIL, admin=True))
    assert r.status_code == 403
    body = r.json()
    assert body["error"] == "account_suspended"
    assert body["terminate_session"] is True


@pytest.mark.asyncio
async def test_blocked_non_admin_is_reported_as_suspended(
    client: httpx.AsyncClient, auth, block
) -> None:
    await client.post("/v1/users/register", headers=auth("reader@example.com"))
    await block("reader@example.com")

    r = await client.post("/v1/session", headers=auth("reader@example.com"))
    assert r.status_code == 403
    assert r.json()["error"] == "account_suspended"


@pytest.mark.asyncio
async def test_non_admin_session_is_forbidden_but_kept(
    client: httpx.AsyncClient, auth, db
) -> None:
    r = await client.post("/v1/session", headers=auth("reader@example.com"))
    assert r.status_code == 403
    body = r.json()
    assert body["error"] == "forbidden"
    assert body["terminate_session"] is False
    # Registration still happened; only the console is denied.
    assert await AccountRepo(db).get_by_email("reader@example.com") is not None


@pytest.mark.asyncio
async def test_stale_claim_must_be_refreshed(
    client: httpx.AsyncClient, auth, settings, writes
) -> None:
    issued = datetime.now(tz=UTC) - timedelta(seconds=settings.session_max_token_age_seconds + 60)
    r = await client.post(
        "/v1/session",
        headers=auth(ADMIN_EMAIL, admin=True, issued_at=issued, ttl=timedelta(hours=1)),
    )
    assert r.status_code == 401
    assert r.json()["terminate_session"] is True
    assert writes.count == 0


@pytest.mark.asyncio
async def test_revoked_capability_takes_effect_on_next_call(
    client: httpx.AsyncClient, auth
) -> None:
    r = await client.post("/v1/session", headers=auth(ADMIN_EMAIL, admin=True))
    assert r.status_code == 200

    # The provider re-issues the token without the admin claim.
    r = await client.get("/v1/users", headers=auth(ADMIN_EMAIL))
    assert r.status_code == 403
