"""Skill showcase router.

``GET /skills`` accepts every listing parameter as a raw string: malformed
paging, sorting or rating values are normalized by the service instead of
being rejected with a 422.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse, ListResponse
from mentorhub.core.security import CurrentUser, get_current_user
from mentorhub.db.base import get_db
from mentorhub.schemas.skill import (
    EndorsementCreate,
    EndorsementOut,
    SkillCreate,
    SkillDetail,
    SkillListItem,
    SkillOut,
    SkillUpdate,
)
from mentorhub.services.skill import SkillService

router = APIRouter(prefix="/skills", tags=["Skills"])


def _svc(session: AsyncSession) -> SkillService:
    return SkillService(session)


@router.get("", response_model=ListResponse[SkillListItem])
async def list_skills(
    category: Optional[str] = Query(default=None, description="Exact category match"),
    skill_level: Optional[str] = Query(default=None, description="Exact level match"),
    search: Optional[str] = Query(default=None, description="Substring of title or description"),
    min_rating: Optional[str] = Query(default=None, description="Minimum average endorsement rating"),
    sort_by: Optional[str] = Query(
        default=None, description="created_at | title | category | skill_level | rating"
    ),
    order: Optional[str] = Query(default=None, description="asc | desc"),
    page: Optional[str] = Query(default=None, description="Page number (1-based)"),
    limit: Optional[str] = Query(default=None, description="Items per page (1-100)"),
    session: AsyncSession = Depends(get_db),
):
    """List skills with filtering, sorting and pagination."""
    params = {
        "category": category,
        "skill_level": skill_level,
        "search": search,
        "min_rating": min_rating,
        "sort_by": sort_by,
        "order": order,
        "page": page,
        "limit": limit,
    }
    return await _svc(session).list_skills(params)


@router.post("", response_model=DataResponse[SkillOut], status_code=status.HTTP_201_CREATED)
async def create_skill(
    body: SkillCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    skill = await _svc(session).create_skill(user, body)
    return {"data": skill}


@router.get("/{skill_id}", response_model=DataResponse[SkillDetail])
async def get_skill(skill_id: int, session: AsyncSession = Depends(get_db)):
    """Skill with owner details and endorsements (newest first)."""
    return {"data": await _svc(session).get_skill(skill_id)}


@router.put("/{skill_id}", response_model=DataResponse[SkillOut])
async def update_skill(
    skill_id: int,
    body: SkillUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).update_skill(user, skill_id, body)}


@router.post(
    "/{skill_id}/endorsements",
    response_model=DataResponse[EndorsementOut],
    status_code=status.HTTP_201_CREATED,
)
async def endorse_skill(
    skill_id: int,
    body: EndorsementCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).endorse_skill(user, skill_id, body)}
