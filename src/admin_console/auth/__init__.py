"""
admin_console.auth

Authentication/authorization package.

Responsibilities:
- Identity token validation (shared secret or provider JWKS).
- FastAPI access-gate dependencies (authenticated, admin, active admin).
- Rate limiting for unauthenticated lookups.
"""

# Package marker.
