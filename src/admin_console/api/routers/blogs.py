"""
admin_console.api.routers.blogs

Blog moderation endpoints (active admin only).

Responsibilities:
- List blogs with their author resolved (missing authors degrade to null).
- Toggle a blog's verified flag.
- Delete a blog.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.deps import db_session
from admin_console.auth.deps import require_active_admin
from admin_console.auth.models import VerifiedClaim
from admin_console.services.moderation import ModerationService

router = APIRouter(prefix="/v1/blogs", tags=["blogs"])


class AuthorSummary(BaseModel):
    id: uuid.UUID
    email: str
    name: str | None


class BlogResponse(BaseModel):
    id: uuid.UUID
    title: str
    category: str
    views: int
    verified: bool
    created_at: datetime
    author: AuthorSummary | None


class VerifyToggleResponse(BaseModel):
    success: bool = True
    verified: bool


class DeleteResponse(BaseModel):
    success: bool = True


@router.get("", response_model=list[BlogResponse])
async def list_blogs(
    claim: VerifiedClaim = Depends(require_active_admin),
    session: AsyncSession = Depends(db_session),
) -> list[BlogResponse]:
    rows = await ModerationService(session=session, actor=claim.email).list_blogs()
    return [
        BlogResponse(
            id=blog.id,
            title=blog.title,
            category=blog.category,
            views=blog.views,
            verified=blog.verified,
            created_at=blog.created_at,
            author=(
                AuthorSummary(id=author.id, email=author.email, name=author.name)
                if author is not None
                else None
            ),
        )
        for blog, author in rows
    ]


@router.put("/{blog_id}/verify", response_model=VerifyToggleResponse)
async def toggle_verification(
    blog_id: uuid.UUID,
    claim: VerifiedClaim = Depends(require_active_admin),
    session: AsyncSession = Depends(db_session),
) -> VerifyToggleResponse:
    svc = ModerationService(session=session, actor=claim.email)
    return VerifyToggleResponse(verified=await svc.toggle_blog_verification(blog_id))


@router.delete("/{blog_id}", response_model=DeleteResponse)
async def delete_blog(
    blog_id: uuid.UUID,
    claim: VerifiedClaim = Depends(require_active_admin),
    session: AsyncSession = Depends(db_session),
) -> DeleteResponse:
    # A 404 here means "already deleted"; the dashboard reports it as not applicable.
    await ModerationService(session=session, actor=claim.email).delete_blog(blog_id)
    return DeleteResponse()
