"""
admin_console.auth.models

Auth domain models.

Responsibilities:
- Define the verified identity type (`VerifiedClaim`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True, slots=True)
class VerifiedClaim:
    """
    Facts about the caller extracted from a freshly verified credential.

    Lives for a single request; the admin flag is provider-issued and may be
    revoked between requests, so it is never cached.
    """

    email: str | None
    is_admin: bool
    issued_at: datetime
    expires_at: datetime
    name: str | None = None
    picture: str | None = None

    def age(self, now: datetime | None = None) -> timedelta:
        return (now or datetime.now(tz=UTC)) - self.issued_at


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API and service boundaries.
