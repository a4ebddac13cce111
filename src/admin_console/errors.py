"""
admin_console.errors

Error taxonomy shared by the auth, service, and API layers.

Responsibilities:
- Classify every failure the core can produce (authn, authz, suspension,
  validation, missing target, downstream infrastructure).
- Carry the rendering hints the presentation layer needs: HTTP status,
  whether a retry is safe, and whether the session must be torn down.
"""

from __future__ import annotations

from typing import Any


class ConsoleError(Exception):
    code: str = "internal_error"
    status_code: int = 500
    retryable: bool = False
    terminate_session: bool = False

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.code)
        self.detail = detail or self.code

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "detail": self.detail,
            "retryable": self.retryable,
            "terminate_session": self.terminate_session,
        }


class Unauthenticated(ConsoleError):
    # No, invalid, expired or stale credential. The client must discard it.
    code = "unauthenticated"
    status_code = 401
    terminate_session = True


class Forbidden(ConsoleError):
    # Valid credential without the capability; the session itself stays usable.
    code = "forbidden"
    status_code = 403


class AccountSuspended(Forbidden):
    code = "account_suspended"
    terminate_session = True


class InvalidRequest(ConsoleError):
    code = "invalid_request"
    status_code = 400


class NotFound(ConsoleError):
    code = "not_found"
    status_code = 404


class RateLimited(ConsoleError):
    code = "rate_limited"
    status_code = 429
    retryable = True


class InternalError(ConsoleError):
    # Store or identity-provider failure; the whole request may be retried.
    code = "internal_error"
    status_code = 500
    retryable = True


class ServiceUnavailable(InternalError):
    code = "service_unavailable"
    status_code = 503


# --- Module Notes -----------------------------------------------------------
# Handlers in `api.errors` render these as JSON; routers and services only raise.
