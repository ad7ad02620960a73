"""Platform-wide search and type-ahead suggestions.

Every search term reaches the database as a bound ``%term%`` pattern.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.config import settings
from mentorhub.core.exceptions import ValidationError
from mentorhub.core.pagination import normalize_limit
from mentorhub.core.query import clean_text, like_pattern
from mentorhub.repositories.analytics import AnalyticsRepository
from mentorhub.repositories.base import flatten_row
from mentorhub.repositories.course import CourseRepository
from mentorhub.repositories.opportunity import OpportunityRepository
from mentorhub.repositories.skill import SkillRepository
from mentorhub.repositories.user import UserRepository
from mentorhub.schemas.analytics import SearchResults, SkillSearchHit, Suggestion
from mentorhub.schemas.user import RecommendedCourse, RecommendedOpportunity, UserSummary

SEARCH_TYPES = ("users", "skills", "courses", "opportunities")
MIN_SUGGESTION_LENGTH = 2

class SearchService:
    def __init__(self, session: AsyncSession):
        self._users = UserRepository(session)
        self._skills = SkillRepository(session)
        self._courses = CourseRepository(session)
        self._opportunities = OpportunityRepository(session)
        self._analytics = AnalyticsRepository(session)

    async def search(self, query: Any, type: Any = None, limit: Any = None) -> SearchResults:
        term = clean_text(query)
        if term is None:
            raise ValidationError("Search query required")

        kind = clean_text(type) or "all"
        if kind != "all" and kind not in SEARCH_TYPES:
            raise ValidationError(f"Search type must be one of: all, {', '.join(SEARCH_TYPES)}")
        wanted = SEARCH_TYPES if kind == "all" else (kind,)

        pattern = like_pattern(term)
        size = normalize_limit(limit, default=settings.search_default_limit)
        results = SearchResults()

        if "users" in wanted:
            results.users = [
                UserSummary.model_validate(u) for u in await self._users.search(pattern, size)
            ]
        if "skills" in wanted:
            results.skills = [
                SkillSearchHit.model_validate(flatten_row(row))
                for row in await self._skills.search(pattern, size)
            ]
        if "courses" in wanted:
            results.courses = [
                RecommendedCourse.model_validate(flatten_row(row))
                for row in await self._courses.search(pattern, size)
            ]
        if "opportunities" in wanted:
            results.opportunities = [
                RecommendedOpportunity.model_validate(flatten_row(row))
                for row in await self._opportunities.search(pattern, size)
            ]
        return results

    async def suggestions(self, query: Any) -> list[Suggestion]:
        term = clean_text(query)
        if term is None or len(term) < MIN_SUGGESTION_LENGTH:
            return []
        return [
            Suggestion(suggestion=value, type=kind)
            for value, kind in await self._analytics.suggestions(like_pattern(term))
        ]
