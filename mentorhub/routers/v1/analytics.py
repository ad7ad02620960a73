from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.db.base import get_db
from mentorhub.schemas.analytics import CourseCategoryStats, OpportunityTypeStats, SkillTrendPoint
from mentorhub.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def _svc(session: AsyncSession) -> AnalyticsService:
    return AnalyticsService(session)


@router.get("/skills", response_model=DataResponse[list[SkillTrendPoint]])
async def skill_trends(
    timeframe: Optional[str] = Query(default=None, description="'3 months' or '12 months' (default)"),
    session: AsyncSession = Depends(get_db),
):
    """Skills created per category per month."""
    return {"data": await _svc(session).skill_trends(timeframe)}


@router.get("/opportunities", response_model=DataResponse[list[OpportunityTypeStats]])
async def opportunity_stats(session: AsyncSession = Depends(get_db)):
    return {"data": await _svc(session).opportunity_stats()}


@router.get("/courses", response_model=DataResponse[list[CourseCategoryStats]])
async def course_stats(session: AsyncSession = Depends(get_db)):
    return {"data": await _svc(session).course_stats()}
