"""Skill showcase service: filtered listing, detail, edits and endorsements.

``list_skills`` is the listing contract exposed to the router::

    list_skills(raw_query_params) -> {"items": [...], "pagination": {...}}

The raw parameters are compiled once; the resulting predicate drives both the
bounded page query and the de-duplicated count query, so ``pagination.total``
and ``pagination.pages`` always describe the same result set the page was
cut from.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from mentorhub.core.response import paginated
from mentorhub.core.security import CurrentUser
from mentorhub.repositories.base import flatten_row
from mentorhub.repositories.message import NotificationRepository
from mentorhub.repositories.skill import SkillRepository
from mentorhub.repositories.skill_query import compile_skill_query
from mentorhub.schemas.skill import (
    EndorsementCreate,
    EndorsementOut,
    SkillCreate,
    SkillDetail,
    SkillListItem,
    SkillOut,
    SkillUpdate,
)

logger = logging.getLogger(__name__)

class SkillService:
    def __init__(self, session: AsyncSession):
        self._repo = SkillRepository(session)
        self._notifications = NotificationRepository(session)

    async def list_skills(self, params: Mapping[str, Any]) -> dict:
        predicate, page, limit = compile_skill_query(params)
        rows = await self._repo.list_page(predicate, offset=(page - 1) * limit, limit=limit)
        total = await self._repo.count_matching(predicate)
        items = [SkillListItem.model_validate(flatten_row(row)) for row in rows]
        return paginated(items, total, page, limit)

    async def get_skill(self, skill_id: int) -> SkillDetail:
        row = await self._repo.get_with_owner(skill_id)
        if row is None:
            raise NotFoundError("Skill", skill_id)
        endorsements = [
            EndorsementOut.model_validate(flatten_row(e))
            for e in await self._repo.list_endorsements(skill_id)
        ]
        return SkillDetail.model_validate({**flatten_row(row), "endorsements": endorsements})

    async def create_skill(self, user: CurrentUser, data: SkillCreate) -> SkillOut:
        skill = await self._repo.create(user_id=user.id, **data.model_dump())
        logger.info("Skill %s created by user %s", skill.id, user.id)
        return SkillOut.model_validate(skill)

    async def update_skill(self, user: CurrentUser, skill_id: int, data: SkillUpdate) -> SkillOut:
        skill = await self._repo.get_by_id(skill_id)
        if skill is None:
            raise NotFoundError("Skill", skill_id)
        if skill.user_id != user.id and not user.is_admin:
            raise ForbiddenError("Only the owner can edit this skill")
        updated = await self._repo.update(skill_id, **data.model_dump())
        return SkillOut.model_validate(updated)

    async def endorse_skill(
        self, user: CurrentUser, skill_id: int, data: EndorsementCreate
    ) -> EndorsementOut:
        skill = await self._repo.get_by_id(skill_id)
        if skill is None:
            raise NotFoundError("Skill", skill_id)
        if skill.user_id == user.id:
            raise ValidationError("You cannot endorse your own skill")
        if await self._repo.find_endorsement(skill_id, user.id):
            raise ConflictError("You have already endorsed this skill")

        endorsement = await self._repo.add_endorsement(
            skill_id=skill_id, endorser_id=user.id, rating=data.rating, comment=data.comment
        )
        await self._notifications.notify(
            skill.user_id,
            "New Endorsement",
            f'Your skill "{skill.title}" received a {data.rating}-star endorsement',
            "endorsement",
        )
        return EndorsementOut.model_validate(endorsement)
