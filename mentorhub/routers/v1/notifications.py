from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.pagination import PaginationParams
from mentorhub.core.response import DataResponse, ListResponse, paginated
from mentorhub.core.security import CurrentUser, get_current_user
from mentorhub.db.base import get_db
from mentorhub.schemas.message import NotificationOut
from mentorhub.services.message import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _svc(session: AsyncSession) -> NotificationService:
    return NotificationService(session)


@router.get("", response_model=ListResponse[NotificationOut])
async def list_notifications(
    pagination: PaginationParams = Depends(),
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Caller's notifications, newest first (paginated)."""
    items, total = await _svc(session).list_notifications(user, pagination)
    return paginated(items, total, pagination.page, pagination.limit)


@router.put("/{notification_id}/read", response_model=DataResponse[NotificationOut])
async def mark_read(
    notification_id: int,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).mark_read(user, notification_id)}
