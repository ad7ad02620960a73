from __future__ import annotations

from sqlalchemy import Row, and_, or_, select, update
from sqlalchemy.orm import aliased

from mentorhub.domain.message import Message, Notification
from mentorhub.domain.user import User
from mentorhub.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    model = Message

    async def conversation(self, user_a: int, user_b: int) -> list[Row]:
        """Messages exchanged by two users, oldest first, with sender details."""
        sender = aliased(User)
        q = (
            select(
                Message,
                (sender.first_name + " " + sender.last_name).label("sender_name"),
                sender.profile_image.label("sender_image"),
            )
            .join(sender, Message.sender_id == sender.id)
            .where(
                or_(
                    and_(Message.sender_id == user_a, Message.recipient_id == user_b),
                    and_(Message.sender_id == user_b, Message.recipient_id == user_a),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return list((await self._session.execute(q)).all())

    async def mark_read(self, recipient_id: int, sender_id: int) -> int:
        result = await self._session.execute(
            update(Message)
            .where(
                Message.recipient_id == recipient_id,
                Message.sender_id == sender_id,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def involving(self, user_id: int) -> list[Message]:
        """Every message the user sent or received, newest first."""
        q = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return list((await self._session.execute(q)).scalars().all())

    async def users_by_id(self, user_ids: set[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        q = select(User).where(User.id.in_(user_ids))
        return {u.id: u for u in (await self._session.execute(q)).scalars().all()}


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    async def notify(self, user_id: int, title: str, message: str, type: str) -> Notification:
        return await self.create(user_id=user_id, title=title, message=message, type=type)
