from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.query import clean_text
from mentorhub.core.response import DataResponse
from mentorhub.core.security import CurrentUser, get_current_user
from mentorhub.db.base import get_db
from mentorhub.schemas.mentorship import (
    MentorOut,
    MentorshipCreate,
    MentorshipOut,
    MentorshipStatusUpdate,
)
from mentorhub.services.mentorship import MentorshipService

router = APIRouter(prefix="/mentorships", tags=["Mentorships"])


def _svc(session: AsyncSession) -> MentorshipService:
    return MentorshipService(session)


@router.get("/mentors", response_model=DataResponse[list[MentorOut]])
async def list_mentors(
    skill_category: Optional[str] = Query(default=None, description="Only mentors with a skill in this category"),
    session: AsyncSession = Depends(get_db),
):
    """Mentors with spare capacity, best rated first."""
    mentors = await _svc(session).list_available_mentors(clean_text(skill_category))
    return {"data": mentors}


@router.post("", response_model=DataResponse[MentorshipOut], status_code=status.HTTP_201_CREATED)
async def request_mentorship(
    body: MentorshipCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).request_mentorship(user, body)}


@router.put("/{mentorship_id}/status", response_model=DataResponse[MentorshipOut])
async def update_mentorship_status(
    mentorship_id: int,
    body: MentorshipStatusUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).update_status(user, mentorship_id, body.status)}


@router.get("/{mentorship_id}", response_model=DataResponse[MentorshipOut])
async def get_mentorship(
    mentorship_id: int,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).get_mentorship(user, mentorship_id)}
