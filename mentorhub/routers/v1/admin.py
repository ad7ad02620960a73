"""Admin-only endpoints: platform analytics, user verification, skill moderation."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.core.security import CurrentUser, require_role
from mentorhub.db.base import get_db
from mentorhub.schemas.analytics import PlatformAnalytics
from mentorhub.schemas.common import MessageResponse
from mentorhub.schemas.skill import SkillModeration
from mentorhub.schemas.user import VerificationUpdate
from mentorhub.services.analytics import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])

require_admin = require_role("admin")


def _svc(session: AsyncSession) -> AdminService:
    return AdminService(session)


@router.get("/analytics", response_model=DataResponse[PlatformAnalytics])
async def platform_analytics(
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).platform_analytics()}


@router.put("/users/{user_id}/verification", response_model=DataResponse[MessageResponse])
async def update_user_verification(
    user_id: int,
    body: VerificationUpdate,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    await _svc(session).update_verification(user_id, body.is_verified)
    return {"data": {"message": "User verification updated"}}


@router.post("/skills/{skill_id}/moderate", response_model=DataResponse[MessageResponse])
async def moderate_skill(
    skill_id: int,
    body: SkillModeration,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    outcome = await _svc(session).moderate_skill(admin, skill_id, body.action, body.reason)
    return {"data": {"message": f"Skill {outcome} successfully"}}
