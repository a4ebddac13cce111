"""
admin_console.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration, supplied through `ADMIN_CONSOLE_*` env vars.

    The identity provider trust anchor is either a shared secret (HS* algorithms,
    local/dev) or a JWKS endpoint (RS*/ES* algorithms, real providers).
    """

    model_config = SettingsConfigDict(env_prefix="ADMIN_CONSOLE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "admin-console"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Identity provider
    jwt_alg: str = "HS256"
    jwt_issuer: str = "admin-console-dev"
    jwt_audience: str = "admin-console"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwks_url: str | None = None
    jwks_timeout_seconds: int = 10
    admin_claim: str = "admin"
    # Session establishment refuses tokens issued longer ago than this.
    session_max_token_age_seconds: int = 300

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./admin_console.db"

    # Unauthenticated lookups (check-blocked / status)
    public_lookup_max_attempts: int = 30
    public_lookup_window_seconds: int = 60


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly and pass it to `create_app`; the app
# overrides `get_settings` so dependencies see the same instance.
