from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.core.security import CurrentUser, get_current_user
from mentorhub.db.base import get_db
from mentorhub.schemas.message import ConversationMessage, ConversationSummary, MessageCreate, MessageOut
from mentorhub.services.message import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"])


def _svc(session: AsyncSession) -> MessageService:
    return MessageService(session)


@router.post("", response_model=DataResponse[MessageOut], status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).send(user, body)}


@router.get("/conversations", response_model=DataResponse[list[ConversationSummary]])
async def list_conversations(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).list_conversations(user)}


@router.get(
    "/conversation/{user_id_1}/{user_id_2}",
    response_model=DataResponse[list[ConversationMessage]],
)
async def get_conversation(
    user_id_1: int,
    user_id_2: int,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Messages between two users, oldest first. Marks the caller's incoming ones read."""
    return {"data": await _svc(session).get_conversation(user, user_id_1, user_id_2)}
