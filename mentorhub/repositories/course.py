from __future__ import annotations

from sqlalchemy import Row, func, or_, select

from mentorhub.domain.course import Course, Enrollment
from mentorhub.domain.user import User
from mentorhub.repositories.base import BaseRepository

INSTRUCTOR_NAME = (User.first_name + " " + User.last_name).label("instructor_name")


class CourseRepository(BaseRepository[Course]):
    model = Course

    async def get_details(self, course_id: int) -> Row | None:
        q = (
            select(
                Course,
                INSTRUCTOR_NAME,
                User.bio.label("instructor_bio"),
                User.profile_image.label("instructor_image"),
                func.count(Enrollment.id).label("enrollment_count"),
                func.round(func.avg(Enrollment.progress_percentage), 2).label("avg_progress"),
            )
            .outerjoin(User, Course.instructor_id == User.id)
            .outerjoin(Enrollment, Course.id == Enrollment.course_id)
            .where(Course.id == course_id)
            .group_by(Course.id, User.first_name, User.last_name, User.bio, User.profile_image)
        )
        return (await self._session.execute(q)).first()

    async def recommended_for(self, user_id: int, categories: list[str], limit: int) -> list[Row]:
        """Active courses in *categories* the user is not enrolled in, newest first."""
        if not categories:
            return []
        enrolled = select(Enrollment.course_id).where(Enrollment.user_id == user_id)
        q = (
            select(Course, INSTRUCTOR_NAME)
            .join(User, Course.instructor_id == User.id)
            .where(
                Course.is_active.is_(True),
                Course.category.in_(categories),
                Course.id.not_in(enrolled),
            )
            .order_by(Course.created_at.desc(), Course.id.desc())
            .limit(limit)
        )
        return list((await self._session.execute(q)).all())

    async def search(self, pattern: str, limit: int) -> list[Row]:
        q = (
            select(Course, INSTRUCTOR_NAME)
            .outerjoin(User, Course.instructor_id == User.id)
            .where(
                Course.is_active.is_(True),
                or_(
                    Course.title.ilike(pattern),
                    Course.description.ilike(pattern),
                    Course.category.ilike(pattern),
                ),
            )
            .order_by(Course.id)
            .limit(limit)
        )
        return list((await self._session.execute(q)).all())


class EnrollmentRepository(BaseRepository[Enrollment]):
    model = Enrollment

    async def find(self, user_id: int, course_id: int) -> Enrollment | None:
        q = select(Enrollment).where(
            Enrollment.user_id == user_id, Enrollment.course_id == course_id
        )
        return (await self._session.execute(q)).scalars().first()
