"""Mentorship service: mentor discovery, requests and lifecycle updates."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.config import settings
from mentorhub.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from mentorhub.core.security import CurrentUser
from mentorhub.domain.user import MENTOR_ROLES
from mentorhub.repositories.message import NotificationRepository
from mentorhub.repositories.mentorship import MentorshipRepository
from mentorhub.repositories.user import UserRepository
from mentorhub.schemas.mentorship import MentorOut, MentorshipCreate, MentorshipOut

logger = logging.getLogger(__name__)

UPDATABLE_STATUSES = ("active", "completed", "cancelled")

class MentorshipService:
    def __init__(self, session: AsyncSession):
        self._repo = MentorshipRepository(session)
        self._users = UserRepository(session)
        self._notifications = NotificationRepository(session)

    async def list_available_mentors(self, skill_category: str | None = None) -> list[MentorOut]:
        rows = await self._repo.available_mentors(
            capacity=settings.mentor_capacity, skill_category=skill_category
        )
        categories = await self._repo.skill_categories([row.User.id for row in rows])
        mentors = []
        for row in rows:
            user = row.User
            rating = row.avg_skill_rating
            mentors.append(
                MentorOut(
                    id=user.id,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    bio=user.bio,
                    experience=user.experience,
                    profile_image=user.profile_image,
                    location=user.location,
                    is_verified=user.is_verified,
                    mentee_count=row.mentee_count,
                    skill_categories=categories.get(user.id, []),
                    avg_skill_rating=round(float(rating), 2) if rating is not None else None,
                )
            )
        return mentors

    async def request_mentorship(self, user: CurrentUser, data: MentorshipCreate) -> MentorshipOut:
        if data.mentor_id == user.id:
            raise ValidationError("You cannot mentor yourself")
        mentor = await self._users.get_by_id(data.mentor_id)
        if mentor is None or mentor.role not in MENTOR_ROLES:
            raise NotFoundError("Mentor", data.mentor_id)
        if await self._repo.find_open(data.mentor_id, user.id):
            raise ConflictError("A mentorship with this mentor is already pending or active")

        mentorship = await self._repo.create(
            mentor_id=data.mentor_id, mentee_id=user.id, goals=data.goals, status="pending"
        )
        await self._notifications.notify(
            data.mentor_id,
            "Mentorship Request",
            "You have a new mentorship request",
            "mentorship",
        )
        return MentorshipOut.model_validate(mentorship)

    async def update_status(self, user: CurrentUser, mentorship_id: int, status: str) -> MentorshipOut:
        if status not in UPDATABLE_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(UPDATABLE_STATUSES)}")

        mentorship = await self._repo.get_by_id(mentorship_id)
        if mentorship is None:
            raise NotFoundError("Mentorship", mentorship_id)
        if mentorship.mentor_id != user.id and not user.is_admin:
            raise ForbiddenError("Only mentors can update mentorship status")

        now = datetime.now(timezone.utc)
        updated = await self._repo.update(
            mentorship_id,
            status=status,
            started_at=now if status == "active" else mentorship.started_at,
            ended_at=now if status in ("completed", "cancelled") else None,
        )
        await self._notifications.notify(
            mentorship.mentee_id,
            "Mentorship Update",
            f"Your mentorship status has been updated to: {status}",
            "mentorship",
        )
        logger.info("Mentorship %s -> %s", mentorship_id, status)
        return MentorshipOut.model_validate(updated)

    async def get_mentorship(self, user: CurrentUser, mentorship_id: int) -> MentorshipOut:
        mentorship = await self._repo.get_for_participant(mentorship_id, user.id)
        if mentorship is None:
            raise ForbiddenError("Access denied")
        return MentorshipOut.model_validate(mentorship)
