"""
admin_console.db.models

Persistence schema for the admin console.

Responsibilities:
- Define ORM models for the moderated entities:
  - Account: one registered principal, unique per email, with suspension state
  - Blog: one moderated content item, weakly linked to its author
"""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Enum, Index, Integer, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from admin_console.db.base import Base


def _utcnow() -> datetime:
    # Persist naive UTC timestamps; SQLite drops tzinfo anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class AccountRole(enum.StrEnum):
    # Informational only: authorization reads the provider's admin claim.
    user = "user"
    admin = "admin"


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Stored lower-cased; uniqueness is what resolves concurrent first registrations.
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)

    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    photo_url: Mapped[str] = mapped_column(String(2048), nullable=False, default="")

    role: Mapped[AccountRole] = mapped_column(
        Enum(AccountRole), nullable=False, default=AccountRole.user
    )
    blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class Blog(Base):
    __tablename__ = "blogs"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Lookup key only (no FK): removing an author never removes or invalidates a blog.
    author_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)

    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_blogs_author_id", "author_id"),)


# --- Module Notes -----------------------------------------------------------
# Blogs are authored elsewhere; this service only lists, verifies, and deletes them.
