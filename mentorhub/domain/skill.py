"""SQLAlchemy ORM models for skill showcases and their peer endorsements."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mentorhub.db.base import Base
from mentorhub.domain.mixins import CreatedAtMixin, IdMixin, TimestampMixin


class Skill(Base, IdMixin, TimestampMixin):
    """One skill a user showcases (optionally with a portfolio link)."""

    __tablename__ = "skillshowcase"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # "beginner" | "intermediate" | "advanced" | "expert"
    skill_level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    portfolio_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class SkillEndorsement(Base, IdMixin, CreatedAtMixin):
    """A peer's 1-5 rating of someone else's skill. One per (skill, endorser)."""

    __tablename__ = "skill_endorsements"
    __table_args__ = (
        UniqueConstraint("skill_id", "endorser_id", name="uq_endorsement_skill_endorser"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_endorsement_rating"),
    )

    skill_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("skillshowcase.id", ondelete="CASCADE"), nullable=False, index=True
    )
    endorser_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
