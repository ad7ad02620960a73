from __future__ import annotations

from typing import Any

from sqlalchemy import Row, func, or_, select

from mentorhub.core.query import CompiledPredicate
from mentorhub.domain.skill import Skill, SkillEndorsement
from mentorhub.domain.user import User
from mentorhub.repositories.base import BaseRepository
from mentorhub.repositories.skill_query import AVG_RATING, ENDORSEMENT_COUNT

USER_NAME = (User.first_name + " " + User.last_name).label("user_name")


class SkillRepository(BaseRepository[Skill]):
    model = Skill

    # ------------------------------------------------------------------
    # Listing (page + total share one predicate)
    # ------------------------------------------------------------------

    async def list_page(
        self, predicate: CompiledPredicate, *, offset: int, limit: int
    ) -> list[Row]:
        """One row per skill: (Skill, user_name, user_image, avg_rating, endorsement_count)."""
        q = (
            select(
                Skill,
                USER_NAME,
                User.profile_image.label("user_image"),
                AVG_RATING,
                ENDORSEMENT_COUNT,
            )
            .join(User, Skill.user_id == User.id)
            .outerjoin(SkillEndorsement, Skill.id == SkillEndorsement.skill_id)
            .group_by(Skill.id, User.first_name, User.last_name, User.profile_image)
        )
        q = predicate.apply(q).offset(offset).limit(limit)
        return list((await self._session.execute(q)).all())

    async def count_matching(self, predicate: CompiledPredicate) -> int:
        """Count distinct skills matching *predicate*, ignoring endorsement fan-out."""
        matched = predicate.filter(
            select(Skill.id)
            .join(User, Skill.user_id == User.id)
            .outerjoin(SkillEndorsement, Skill.id == SkillEndorsement.skill_id)
            .group_by(Skill.id)
        ).subquery("matched_skills")
        result = await self._session.execute(select(func.count()).select_from(matched))
        return int(result.scalar_one())

    # ------------------------------------------------------------------
    # Detail
    # ------------------------------------------------------------------

    async def get_with_owner(self, skill_id: int) -> Row | None:
        q = (
            select(
                Skill,
                USER_NAME,
                User.profile_image.label("user_image"),
                User.bio.label("user_bio"),
            )
            .join(User, Skill.user_id == User.id)
            .where(Skill.id == skill_id)
        )
        return (await self._session.execute(q)).first()

    async def list_endorsements(self, skill_id: int) -> list[Row]:
        q = (
            select(
                SkillEndorsement,
                (User.first_name + " " + User.last_name).label("endorser_name"),
                User.profile_image.label("endorser_image"),
            )
            .join(User, SkillEndorsement.endorser_id == User.id)
            .where(SkillEndorsement.skill_id == skill_id)
            .order_by(SkillEndorsement.created_at.desc(), SkillEndorsement.id.desc())
        )
        return list((await self._session.execute(q)).all())

    async def find_endorsement(self, skill_id: int, endorser_id: int) -> SkillEndorsement | None:
        q = select(SkillEndorsement).where(
            SkillEndorsement.skill_id == skill_id,
            SkillEndorsement.endorser_id == endorser_id,
        )
        return (await self._session.execute(q)).scalars().first()

    async def add_endorsement(self, **kwargs: Any) -> SkillEndorsement:
        endorsement = SkillEndorsement(**kwargs)
        self._session.add(endorsement)
        await self._session.flush()
        await self._session.refresh(endorsement)
        return endorsement

    # ------------------------------------------------------------------
    # Per-user aggregates
    # ------------------------------------------------------------------

    async def list_for_user_with_ratings(self, user_id: int) -> list[Row]:
        q = (
            select(Skill, AVG_RATING, ENDORSEMENT_COUNT)
            .outerjoin(SkillEndorsement, Skill.id == SkillEndorsement.skill_id)
            .where(Skill.user_id == user_id)
            .group_by(Skill.id)
            .order_by(AVG_RATING.desc(), ENDORSEMENT_COUNT.desc(), Skill.id)
        )
        return list((await self._session.execute(q)).all())

    async def categories_for_user(self, user_id: int) -> list[str]:
        q = select(Skill.category).where(Skill.user_id == user_id).distinct()
        return list((await self._session.execute(q)).scalars().all())

    async def search(self, pattern: str, limit: int) -> list[Row]:
        q = (
            select(Skill, USER_NAME, AVG_RATING)
            .join(User, Skill.user_id == User.id)
            .outerjoin(SkillEndorsement, Skill.id == SkillEndorsement.skill_id)
            .where(
                or_(
                    Skill.title.ilike(pattern),
                    Skill.description.ilike(pattern),
                    Skill.category.ilike(pattern),
                )
            )
            .group_by(Skill.id, User.first_name, User.last_name)
            .order_by(Skill.id)
            .limit(limit)
        )
        return list((await self._session.execute(q)).all())
