"""Read-only aggregate queries for the admin and analytics endpoints."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Row, case, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.domain.course import Course, Enrollment
from mentorhub.domain.opportunity import Application, Opportunity
from mentorhub.domain.skill import Skill, SkillEndorsement
from mentorhub.domain.user import User


class AnalyticsRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def _scalar(self, q) -> int:
        return int((await self._session.execute(q)).scalar_one())

    async def users_created_since(self, since: datetime) -> list[Row]:
        q = select(User.created_at, User.role).where(User.created_at >= since)
        return list((await self._session.execute(q)).all())

    async def platform_stats(self) -> dict[str, int]:
        def users(role: str | None = None):
            q = select(func.count(User.id))
            return q.where(User.role == role) if role else q

        return {
            "total_users": await self._scalar(users()),
            "students": await self._scalar(users("student")),
            "employers": await self._scalar(users("employer")),
            "mentors": await self._scalar(users("mentor")),
            "total_skills": await self._scalar(select(func.count(Skill.id))),
            "total_courses": await self._scalar(select(func.count(Course.id))),
            "active_opportunities": await self._scalar(
                select(func.count(Opportunity.id)).where(Opportunity.is_active.is_(True))
            ),
            "total_applications": await self._scalar(select(func.count(Application.id))),
        }

    async def popular_skill_categories(self, limit: int = 10) -> list[Row]:
        per_skill = (
            select(Skill.category, func.avg(SkillEndorsement.rating).label("avg_rating"))
            .outerjoin(SkillEndorsement, Skill.id == SkillEndorsement.skill_id)
            .group_by(Skill.id, Skill.category)
            .subquery("per_skill")
        )
        count = func.count().label("count")
        q = (
            select(
                per_skill.c.category,
                count,
                func.avg(func.coalesce(per_skill.c.avg_rating, 0)).label("avg_rating"),
            )
            .group_by(per_skill.c.category)
            .order_by(count.desc(), per_skill.c.category)
            .limit(limit)
        )
        return list((await self._session.execute(q)).all())

    async def skills_created_since(self, since: datetime) -> list[Row]:
        q = select(Skill.category, Skill.created_at).where(Skill.created_at >= since)
        return list((await self._session.execute(q)).all())

    async def opportunity_stats(self) -> list[Row]:
        q = (
            select(
                Opportunity.type,
                func.count(distinct(Opportunity.id)).label("total_opportunities"),
                func.count(Application.id).label("total_applications"),
                func.count(case((Application.status == "accepted", 1))).label("accepted_applications"),
            )
            .outerjoin(Application, Opportunity.id == Application.opportunity_id)
            .where(Opportunity.is_active.is_(True))
            .group_by(Opportunity.type)
            .order_by(Opportunity.type)
        )
        return list((await self._session.execute(q)).all())

    async def course_stats(self) -> list[Row]:
        total = func.count(Enrollment.id).label("total_enrollments")
        q = (
            select(
                Course.category,
                Course.difficulty_level,
                total,
                func.count(case((Enrollment.completed.is_(True), 1))).label("completions"),
                func.avg(Enrollment.progress_percentage).label("avg_progress"),
            )
            .outerjoin(Enrollment, Course.id == Enrollment.course_id)
            .group_by(Course.category, Course.difficulty_level)
            .order_by(total.desc(), Course.category)
        )
        return list((await self._session.execute(q)).all())

    async def suggestions(self, pattern: str, per_source: int = 3) -> list[tuple[str, str]]:
        sources = (
            ("skill", Skill.category),
            ("course", Course.category),
            ("opportunity", Opportunity.type),
        )
        out: list[tuple[str, str]] = []
        seen: set[tuple[str, str]] = set()
        for kind, column in sources:
            q = (
                select(column)
                .where(column.ilike(pattern))
                .distinct()
                .order_by(column)
                .limit(per_source)
            )
            for value in (await self._session.execute(q)).scalars().all():
                if (value, kind) not in seen:
                    seen.add((value, kind))
                    out.append((value, kind))
        return out
