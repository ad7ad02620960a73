from __future__ import annotations

from collections import defaultdict

from sqlalchemy import Row, exists, func, or_, select

from mentorhub.domain.mentorship import OPEN_STATUSES, Mentorship
from mentorhub.domain.skill import Skill, SkillEndorsement
from mentorhub.domain.user import MENTOR_ROLES, User
from mentorhub.repositories.base import BaseRepository


class MentorshipRepository(BaseRepository[Mentorship]):
    model = Mentorship

    async def available_mentors(self, *, capacity: int, skill_category: str | None = None) -> list[Row]:
        """Mentor-capable users below *capacity* active mentees.

        Mentee counts and ratings come from per-user subqueries so that a
        mentor's skills, endorsements and mentorships never multiply each
        other's rows.
        """
        mentee_counts = (
            select(Mentorship.mentor_id, func.count(Mentorship.id).label("mentee_count"))
            .where(Mentorship.status == "active")
            .group_by(Mentorship.mentor_id)
            .subquery("mentee_counts")
        )
        ratings = (
            select(Skill.user_id, func.avg(SkillEndorsement.rating).label("avg_skill_rating"))
            .join(SkillEndorsement, Skill.id == SkillEndorsement.skill_id)
            .group_by(Skill.user_id)
            .subquery("skill_ratings")
        )
        mentee_count = func.coalesce(mentee_counts.c.mentee_count, 0)

        q = (
            select(User, mentee_count.label("mentee_count"), ratings.c.avg_skill_rating)
            .outerjoin(mentee_counts, mentee_counts.c.mentor_id == User.id)
            .outerjoin(ratings, ratings.c.user_id == User.id)
            .where(User.role.in_(MENTOR_ROLES), mentee_count < capacity)
        )
        if skill_category is not None:
            q = q.where(
                exists().where(Skill.user_id == User.id, Skill.category == skill_category)
            )
        q = q.order_by(
            ratings.c.avg_skill_rating.is_(None),
            ratings.c.avg_skill_rating.desc(),
            mentee_count.asc(),
            User.id,
        )
        return list((await self._session.execute(q)).all())

    async def recommended_mentors(self, mentee_id: int, limit: int) -> list[User]:
        """Mentors/instructors with showcased skills not already paired with the mentee."""
        paired = select(Mentorship.mentor_id).where(
            Mentorship.mentee_id == mentee_id, Mentorship.status.in_(OPEN_STATUSES)
        )
        q = (
            select(User)
            .where(
                User.role.in_(("mentor", "instructor")),
                User.id != mentee_id,
                User.id.not_in(paired),
                exists().where(Skill.user_id == User.id),
            )
            .order_by(User.id)
            .limit(limit)
        )
        return list((await self._session.execute(q)).scalars().all())

    async def skill_categories(self, user_ids: list[int]) -> dict[int, list[str]]:
        if not user_ids:
            return {}
        q = (
            select(Skill.user_id, Skill.category)
            .where(Skill.user_id.in_(user_ids))
            .distinct()
            .order_by(Skill.user_id, Skill.category)
        )
        out: dict[int, list[str]] = defaultdict(list)
        for user_id, category in (await self._session.execute(q)).all():
            out[user_id].append(category)
        return dict(out)

    async def find_open(self, mentor_id: int, mentee_id: int) -> Mentorship | None:
        q = select(Mentorship).where(
            Mentorship.mentor_id == mentor_id,
            Mentorship.mentee_id == mentee_id,
            Mentorship.status.in_(OPEN_STATUSES),
        )
        return (await self._session.execute(q)).scalars().first()

    async def get_for_participant(self, mentorship_id: int, user_id: int) -> Mentorship | None:
        q = select(Mentorship).where(
            Mentorship.id == mentorship_id,
            or_(Mentorship.mentor_id == user_id, Mentorship.mentee_id == user_id),
        )
        return (await self._session.execute(q)).scalars().first()
