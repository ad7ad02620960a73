"""Direct messaging and notification inbox service."""

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from mentorhub.core.pagination import PaginationParams
from mentorhub.core.security import CurrentUser
from mentorhub.domain.message import Notification
from mentorhub.repositories.base import flatten_row
from mentorhub.repositories.message import MessageRepository, NotificationRepository
from mentorhub.repositories.user import UserRepository
from mentorhub.schemas.message import (
    ConversationMessage,
    ConversationSummary,
    MessageCreate,
    MessageOut,
    NotificationOut,
)

class MessageService:
    def __init__(self, session: AsyncSession):
        self._repo = MessageRepository(session)
        self._users = UserRepository(session)
        self._notifications = NotificationRepository(session)

    async def send(self, user: CurrentUser, data: MessageCreate) -> MessageOut:
        if data.recipient_id == user.id:
            raise ValidationError("You cannot message yourself")
        if not await self._users.exists(data.recipient_id):
            raise NotFoundError("User", data.recipient_id)

        message = await self._repo.create(
            sender_id=user.id,
            recipient_id=data.recipient_id,
            subject=data.subject,
            message=data.message,
        )
        await self._notifications.notify(
            data.recipient_id,
            "New Message",
            data.subject or "You have a new message",
            "message",
        )
        return MessageOut.model_validate(message)

    async def get_conversation(
        self, user: CurrentUser, user_id_1: int, user_id_2: int
    ) -> list[ConversationMessage]:
        """Thread between two users (oldest first). Marks the caller's incoming messages read."""
        if user.id not in (user_id_1, user_id_2):
            raise ForbiddenError("You are not part of this conversation")

        rows = await self._repo.conversation(user_id_1, user_id_2)
        other_id = user_id_2 if user.id == user_id_1 else user_id_1
        await self._repo.mark_read(recipient_id=user.id, sender_id=other_id)
        return [ConversationMessage.model_validate(flatten_row(row)) for row in rows]

    async def list_conversations(self, user: CurrentUser) -> list[ConversationSummary]:
        """One summary per counterpart, most recent conversation first."""
        summaries: dict[int, dict] = {}
        for msg in await self._repo.involving(user.id):
            other_id = msg.recipient_id if msg.sender_id == user.id else msg.sender_id
            summary = summaries.get(other_id)
            if summary is None:
                # Messages arrive newest first, so the first one seen is the latest
                summary = summaries[other_id] = {
                    "other_user_id": other_id,
                    "last_message_time": msg.created_at,
                    "last_message": msg.message,
                    "last_subject": msg.subject,
                    "unread_count": 0,
                }
            if msg.recipient_id == user.id and not msg.is_read:
                summary["unread_count"] += 1

        users = await self._repo.users_by_id(set(summaries))
        out = []
        for other_id, summary in summaries.items():
            other = users.get(other_id)
            if other is None:
                continue
            out.append(
                ConversationSummary(
                    **summary,
                    other_user_name=other.full_name,
                    other_user_image=other.profile_image,
                    other_user_role=other.role,
                )
            )
        return out


class NotificationService:
    def __init__(self, session: AsyncSession):
        self._repo = NotificationRepository(session)

    async def list_notifications(self, user: CurrentUser, pagination: PaginationParams):
        items, total = await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=Notification.created_at.desc(),
            filters={"user_id": user.id},
        )
        return [NotificationOut.model_validate(n) for n in items], total

    async def mark_read(self, user: CurrentUser, notification_id: int) -> NotificationOut:
        notification = await self._repo.get_by_id(notification_id)
        if notification is None or notification.user_id != user.id:
            raise NotFoundError("Notification", notification_id)
        updated = await self._repo.update(notification_id, is_read=True)
        return NotificationOut.model_validate(updated)
