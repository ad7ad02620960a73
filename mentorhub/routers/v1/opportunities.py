"""Opportunity postings (/opportunities) and application review (/applications)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.core.security import CurrentUser, get_current_user, require_role
from mentorhub.db.base import get_db
from mentorhub.schemas.opportunity import (
    ApplicantOut,
    ApplicationCreate,
    ApplicationOut,
    ApplicationStatusUpdate,
    OpportunityCreate,
    OpportunityOut,
    OpportunityUpdate,
)
from mentorhub.services.opportunity import OpportunityService

router = APIRouter(prefix="/opportunities", tags=["Opportunities"])
applications_router = APIRouter(prefix="/applications", tags=["Opportunities"])


def _svc(session: AsyncSession) -> OpportunityService:
    return OpportunityService(session)


@router.post("", response_model=DataResponse[OpportunityOut], status_code=status.HTTP_201_CREATED)
async def create_opportunity(
    body: OpportunityCreate,
    user: CurrentUser = Depends(require_role("employer", "admin")),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).create_opportunity(user, body)}


@router.put("/{opportunity_id}", response_model=DataResponse[OpportunityOut])
async def update_opportunity(
    opportunity_id: int,
    body: OpportunityUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Partial update; only fields present in the body are changed."""
    return {"data": await _svc(session).update_opportunity(user, opportunity_id, body)}


@router.post(
    "/{opportunity_id}/applications",
    response_model=DataResponse[ApplicationOut],
    status_code=status.HTTP_201_CREATED,
)
async def apply(
    opportunity_id: int,
    body: ApplicationCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).apply(user, opportunity_id, body)}


@router.get("/{opportunity_id}/applications", response_model=DataResponse[list[ApplicantOut]])
async def list_applications(
    opportunity_id: int,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).list_applications(user, opportunity_id)}


@applications_router.put("/{application_id}/status", response_model=DataResponse[ApplicationOut])
async def update_application_status(
    application_id: int,
    body: ApplicationStatusUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    application = await _svc(session).update_application_status(user, application_id, body.status)
    return {"data": application}
