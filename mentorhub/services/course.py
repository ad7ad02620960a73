"""Course service: authoring, enrollment and progress tracking."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.exceptions import ConflictError, NotFoundError, ValidationError
from mentorhub.core.security import CurrentUser
from mentorhub.repositories.base import flatten_row
from mentorhub.repositories.course import CourseRepository, EnrollmentRepository
from mentorhub.repositories.message import NotificationRepository
from mentorhub.schemas.course import CourseCreate, CourseDetail, CourseOut, EnrollmentOut

logger = logging.getLogger(__name__)

class CourseService:
    def __init__(self, session: AsyncSession):
        self._repo = CourseRepository(session)
        self._enrollments = EnrollmentRepository(session)
        self._notifications = NotificationRepository(session)

    async def create_course(self, user: CurrentUser, data: CourseCreate) -> CourseOut:
        if not (data.title and data.description and data.category):
            raise ValidationError("Title, description, and category are required")
        course = await self._repo.create(instructor_id=user.id, **data.model_dump())
        logger.info("Course %s created by instructor %s", course.id, user.id)
        return CourseOut.model_validate(course)

    async def get_course(self, course_id: int) -> CourseDetail:
        row = await self._repo.get_details(course_id)
        if row is None:
            raise NotFoundError("Course", course_id)
        return CourseDetail.model_validate(flatten_row(row))

    async def enroll(self, user: CurrentUser, course_id: int) -> EnrollmentOut:
        course = await self._repo.get_by_id(course_id)
        if course is None or not course.is_active:
            raise NotFoundError("Course", course_id)
        if await self._enrollments.find(user.id, course_id):
            raise ConflictError("Already enrolled in this course")
        enrollment = await self._enrollments.create(user_id=user.id, course_id=course_id)
        return EnrollmentOut.model_validate(enrollment)

    async def update_progress(
        self, user: CurrentUser, course_id: int, progress_percentage: int
    ) -> EnrollmentOut:
        """Record progress; reaching 100% completes the course and notifies the learner."""
        if progress_percentage < 0 or progress_percentage > 100:
            raise ValidationError("Progress must be between 0 and 100")

        enrollment = await self._enrollments.find(user.id, course_id)
        if enrollment is None:
            raise NotFoundError("Enrollment")

        completed = progress_percentage == 100
        newly_completed = completed and not enrollment.completed
        updated = await self._enrollments.update(
            enrollment.id,
            progress_percentage=progress_percentage,
            completed=completed,
            completed_at=(
                enrollment.completed_at or datetime.now(timezone.utc) if completed else None
            ),
        )

        if newly_completed:
            course = await self._repo.get_by_id(course_id)
            await self._notifications.notify(
                user.id,
                "Course Completed!",
                f"Congratulations! You completed: {course.title}",
                "completion",
            )
            logger.info("User %s completed course %s", user.id, course_id)

        return EnrollmentOut.model_validate(updated)
