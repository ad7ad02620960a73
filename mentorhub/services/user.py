"""User profile, recommendation and application-history service."""

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.config import settings
from mentorhub.core.exceptions import ForbiddenError, NotFoundError
from mentorhub.core.security import CurrentUser
from mentorhub.repositories.base import flatten_row
from mentorhub.repositories.course import CourseRepository
from mentorhub.repositories.mentorship import MentorshipRepository
from mentorhub.repositories.opportunity import ApplicationRepository, OpportunityRepository
from mentorhub.repositories.skill import SkillRepository
from mentorhub.repositories.user import UserRepository
from mentorhub.schemas.opportunity import UserApplicationOut
from mentorhub.schemas.skill import RatedSkill
from mentorhub.schemas.user import (
    CourseStats,
    MentorshipStats,
    RecommendedCourse,
    RecommendedMentor,
    RecommendedOpportunity,
    Recommendations,
    UserOut,
    UserProfile,
)

class UserService:
    def __init__(self, session: AsyncSession):
        self._repo = UserRepository(session)
        self._skills = SkillRepository(session)
        self._courses = CourseRepository(session)
        self._mentorships = MentorshipRepository(session)
        self._opportunities = OpportunityRepository(session)
        self._applications = ApplicationRepository(session)

    async def get_profile(self, user_id: int) -> UserProfile:
        user = await self._repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        skills = [
            RatedSkill.model_validate(flatten_row(row))
            for row in await self._skills.list_for_user_with_ratings(user_id)
        ]
        course_stats = await self._repo.course_stats(user_id)
        mentorship_stats = await self._repo.mentorship_stats(user_id)
        return UserProfile(
            user=UserOut.model_validate(user),
            skills=skills,
            course_stats=CourseStats.model_validate(dict(course_stats._mapping)),
            mentorship_stats=MentorshipStats.model_validate(dict(mentorship_stats._mapping)),
        )

    async def get_recommendations(self, user: CurrentUser) -> Recommendations:
        """Courses, mentors and opportunities matched to the caller's skill categories."""
        limit = settings.recommendation_limit
        categories = await self._skills.categories_for_user(user.id)

        courses = [
            RecommendedCourse.model_validate(flatten_row(row))
            for row in await self._courses.recommended_for(user.id, categories, limit)
        ]

        mentors = await self._mentorships.recommended_mentors(user.id, limit)
        expertise = await self._mentorships.skill_categories([m.id for m in mentors])
        recommended_mentors = [
            RecommendedMentor.model_validate(m).model_copy(
                update={"expertise_areas": expertise.get(m.id, [])}
            )
            for m in mentors
        ]

        # No showcased skills means no basis for filtering: suggest everything open
        wanted = set(categories)
        opportunities: list[RecommendedOpportunity] = []
        for row in await self._opportunities.active_not_applied(user.id):
            if wanted and not wanted.intersection(row.Opportunity.required_skills or []):
                continue
            opportunities.append(RecommendedOpportunity.model_validate(flatten_row(row)))
            if len(opportunities) >= limit:
                break

        return Recommendations(
            courses=courses, mentors=recommended_mentors, opportunities=opportunities
        )

    async def get_applications(self, user: CurrentUser, user_id: int) -> list[UserApplicationOut]:
        if user.id != user_id:
            raise ForbiddenError("You can only view your own applications")
        return [
            UserApplicationOut.model_validate(flatten_row(row))
            for row in await self._applications.list_for_applicant(user_id)
        ]

