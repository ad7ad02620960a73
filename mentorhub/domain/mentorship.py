"""SQLAlchemy ORM model for mentor/mentee relationships."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mentorhub.db.base import Base
from mentorhub.domain.mixins import CreatedAtMixin, IdMixin

MENTORSHIP_STATUSES = ("pending", "active", "completed", "cancelled")
OPEN_STATUSES = ("pending", "active")


class Mentorship(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "mentorships"

    mentor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mentee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "pending" | "active" | "completed" | "cancelled"
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False, index=True)
    goals: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
