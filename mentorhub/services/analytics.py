"""Admin dashboard and analytics aggregates.

Month bucketing happens here rather than in SQL so the same code runs on
SQLite (development, tests) and PostgreSQL.
"""

import logging
from collections import Counter
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.exceptions import NotFoundError, ValidationError
from mentorhub.core.security import CurrentUser
from mentorhub.repositories.analytics import AnalyticsRepository
from mentorhub.repositories.message import NotificationRepository
from mentorhub.repositories.skill import SkillRepository
from mentorhub.repositories.user import UserRepository
from mentorhub.schemas.analytics import (
    CourseCategoryStats,
    OpportunityTypeStats,
    PlatformAnalytics,
    PlatformStats,
    PopularSkill,
    SkillTrendPoint,
    UserGrowthPoint,
)

logger = logging.getLogger(__name__)

MODERATION_ACTIONS = {"approve": "approved", "reject": "rejected", "flag": "flagged"}
TIMEFRAME_MONTHS = {"3 months": 3}
DEFAULT_TIMEFRAME_MONTHS = 12


def month_start(value: datetime | date) -> date:
    return date(value.year, value.month, 1)


def months_ago(now: datetime, months: int) -> datetime:
    """First instant of the month *months* before *now*'s month."""
    years, month_index = divmod(now.month - 1 - months, 12)
    return now.replace(
        year=now.year + years, month=month_index + 1, day=1,
        hour=0, minute=0, second=0, microsecond=0,
    )


def timeframe_months(timeframe: str | None) -> int:
    return TIMEFRAME_MONTHS.get((timeframe or "").strip(), DEFAULT_TIMEFRAME_MONTHS)


class AdminService:
    def __init__(self, session: AsyncSession):
        self._repo = AnalyticsRepository(session)
        self._users = UserRepository(session)
        self._skills = SkillRepository(session)
        self._notifications = NotificationRepository(session)

    async def platform_analytics(self) -> PlatformAnalytics:
        since = months_ago(datetime.now(timezone.utc), DEFAULT_TIMEFRAME_MONTHS)
        growth = Counter(
            (month_start(row.created_at), row.role)
            for row in await self._repo.users_created_since(since)
        )
        return PlatformAnalytics(
            user_growth=[
                UserGrowthPoint(month=month, role=role, new_users=count)
                for (month, role), count in sorted(growth.items())
            ],
            platform_stats=PlatformStats(**await self._repo.platform_stats()),
            popular_skills=[
                PopularSkill(
                    category=row.category,
                    count=row._mapping["count"],
                    avg_rating=float(row.avg_rating or 0),
                )
                for row in await self._repo.popular_skill_categories()
            ],
        )

    async def update_verification(self, user_id: int, is_verified: bool) -> None:
        user = await self._users.update(user_id, is_verified=is_verified)
        if user is None:
            raise NotFoundError("User", user_id)
        await self._notifications.notify(
            user_id,
            "Verification Update",
            "Your account has been verified!" if is_verified
            else "Your account verification has been revoked.",
            "verification",
        )

    async def moderate_skill(
        self, admin: CurrentUser, skill_id: int, action: str, reason: str | None = None
    ) -> str:
        """Apply a moderation action; returns the past-tense verb for the response."""
        if action not in MODERATION_ACTIONS:
            raise ValidationError(f"Action must be one of: {', '.join(MODERATION_ACTIONS)}")
        skill = await self._skills.get_by_id(skill_id)
        if skill is None:
            raise NotFoundError("Skill", skill_id)

        if action == "reject":
            owner_id, title = skill.user_id, skill.title
            await self._skills.delete(skill_id)  # endorsements cascade
            await self._notifications.notify(
                owner_id,
                "Content Moderated",
                f'Your skill "{title}" has been removed. Reason: {reason or "not specified"}',
                "moderation",
            )
        logger.info("Admin %s %s skill %s", admin.id, MODERATION_ACTIONS[action], skill_id)
        return MODERATION_ACTIONS[action]


class AnalyticsService:
    def __init__(self, session: AsyncSession):
        self._repo = AnalyticsRepository(session)

    async def skill_trends(self, timeframe: str | None = None) -> list[SkillTrendPoint]:
        since = months_ago(datetime.now(timezone.utc), timeframe_months(timeframe))
        counts = Counter(
            (month_start(row.created_at), row.category)
            for row in await self._repo.skills_created_since(since)
        )
        # Ordered by month, then by count within the month
        return [
            SkillTrendPoint(category=category, month=month, skill_count=count)
            for (month, category), count in sorted(
                counts.items(), key=lambda item: (item[0][0], item[1], item[0][1])
            )
        ]

    async def opportunity_stats(self) -> list[OpportunityTypeStats]:
        out = []
        for row in await self._repo.opportunity_stats():
            per_opportunity = (
                round(row.total_applications / row.total_opportunities, 2)
                if row.total_opportunities else 0.0
            )
            out.append(
                OpportunityTypeStats(
                    type=row.type,
                    total_opportunities=row.total_opportunities,
                    total_applications=row.total_applications,
                    applications_per_opportunity=per_opportunity,
                    accepted_applications=row.accepted_applications,
                )
            )
        return out

    async def course_stats(self) -> list[CourseCategoryStats]:
        out = []
        for row in await self._repo.course_stats():
            total = row.total_enrollments
            out.append(
                CourseCategoryStats(
                    category=row.category,
                    difficulty_level=row.difficulty_level,
                    total_enrollments=total,
                    completions=row.completions,
                    avg_progress=round(float(row.avg_progress), 2) if row.avg_progress is not None else None,
                    completion_rate=round(row.completions / total * 100, 2) if total else None,
                )
            )
        return out
