from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.core.security import CurrentUser, get_current_user
from mentorhub.db.base import get_db
from mentorhub.schemas.opportunity import UserApplicationOut
from mentorhub.schemas.user import Recommendations, UserProfile
from mentorhub.services.user import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def _svc(session: AsyncSession) -> UserService:
    return UserService(session)


@router.get("/me/recommendations", response_model=DataResponse[Recommendations])
async def get_recommendations(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).get_recommendations(user)}


@router.get("/{user_id}/profile", response_model=DataResponse[UserProfile])
async def get_profile(user_id: int, session: AsyncSession = Depends(get_db)):
    """Complete profile: user, rated skills, course and mentorship stats."""
    return {"data": await _svc(session).get_profile(user_id)}


@router.get("/{user_id}/applications", response_model=DataResponse[list[UserApplicationOut]])
async def get_user_applications(
    user_id: int,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).get_applications(user, user_id)}
