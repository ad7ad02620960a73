"""Message, conversation and notification Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from mentorhub.schemas.common import CamelModel

class MessageCreate(CamelModel):
    recipient_id: int
    subject: str | None = Field(default=None, max_length=255)
    message: str = Field(min_length=1)

class MessageOut(CamelModel):
    id: int
    sender_id: int
    recipient_id: int
    subject: str | None = None
    message: str
    is_read: bool
    created_at: datetime

class ConversationMessage(MessageOut):
    sender_name: str
    sender_image: str | None = None

class ConversationSummary(CamelModel):
    other_user_id: int
    other_user_name: str
    other_user_image: str | None = None
    other_user_role: str
    last_message_time: datetime
    last_message: str
    last_subject: str | None = None
    unread_count: int

class NotificationOut(CamelModel):
    id: int
    user_id: int
    title: str
    message: str
    type: str
    is_read: bool
    created_at: datetime
