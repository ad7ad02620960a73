from __future__ import annotations

from sqlalchemy import Row, case, func, or_, select

from mentorhub.domain.course import Enrollment
from mentorhub.domain.mentorship import Mentorship
from mentorhub.domain.user import User
from mentorhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def course_stats(self, user_id: int) -> Row:
        q = select(
            func.count(Enrollment.id).label("total_enrollments"),
            func.count(case((Enrollment.completed.is_(True), 1))).label("completed_courses"),
            func.coalesce(func.avg(Enrollment.progress_percentage), 0).label("avg_progress"),
        ).where(Enrollment.user_id == user_id)
        return (await self._session.execute(q)).one()

    async def mentorship_stats(self, user_id: int) -> Row:
        q = select(
            func.count(case((Mentorship.mentor_id == user_id, 1))).label("mentoring_count"),
            func.count(case((Mentorship.mentee_id == user_id, 1))).label("being_mentored_count"),
        ).where(
            or_(Mentorship.mentor_id == user_id, Mentorship.mentee_id == user_id),
            Mentorship.status == "active",
        )
        return (await self._session.execute(q)).one()

    async def search(self, pattern: str, limit: int) -> list[User]:
        q = (
            select(User)
            .where(
                or_(
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                    User.bio.ilike(pattern),
                )
            )
            .order_by(User.id)
            .limit(limit)
        )
        return list((await self._session.execute(q)).scalars().all())
