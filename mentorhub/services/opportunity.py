"""Opportunity service: postings, applications and application review."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from mentorhub.core.security import CurrentUser
from mentorhub.domain.opportunity import Opportunity
from mentorhub.repositories.base import flatten_row
from mentorhub.repositories.message import NotificationRepository
from mentorhub.repositories.opportunity import ApplicationRepository, OpportunityRepository
from mentorhub.schemas.opportunity import (
    ApplicantOut,
    ApplicationCreate,
    ApplicationOut,
    OpportunityCreate,
    OpportunityOut,
    OpportunityUpdate,
)

logger = logging.getLogger(__name__)

# Statuses an employer may move an application into
REVIEW_STATUSES = ("reviewed", "accepted", "rejected")

class OpportunityService:
    def __init__(self, session: AsyncSession):
        self._repo = OpportunityRepository(session)
        self._applications = ApplicationRepository(session)
        self._notifications = NotificationRepository(session)

    async def _owned_opportunity(self, user: CurrentUser, opportunity_id: int) -> Opportunity:
        opportunity = await self._repo.get_by_id(opportunity_id)
        if opportunity is None:
            raise NotFoundError("Opportunity", opportunity_id)
        if opportunity.employer_id != user.id and not user.is_admin:
            raise ForbiddenError("Only the employer who posted this opportunity can do that")
        return opportunity

    async def create_opportunity(self, user: CurrentUser, data: OpportunityCreate) -> OpportunityOut:
        if (
            data.salary_min is not None
            and data.salary_max is not None
            and data.salary_min > data.salary_max
        ):
            raise ValidationError("salary_min cannot exceed salary_max")
        opportunity = await self._repo.create(employer_id=user.id, **data.model_dump())
        logger.info("Opportunity %s posted by employer %s", opportunity.id, user.id)
        return OpportunityOut.model_validate(opportunity)

    async def update_opportunity(
        self, user: CurrentUser, opportunity_id: int, data: OpportunityUpdate
    ) -> OpportunityOut:
        await self._owned_opportunity(user, opportunity_id)
        updated = await self._repo.update(
            opportunity_id, **data.model_dump(exclude_unset=True)
        )
        return OpportunityOut.model_validate(updated)

    async def apply(
        self, user: CurrentUser, opportunity_id: int, data: ApplicationCreate
    ) -> ApplicationOut:
        opportunity = await self._repo.get_by_id(opportunity_id)
        if opportunity is None or not opportunity.is_active:
            raise NotFoundError("Opportunity", opportunity_id)
        if await self._applications.find(opportunity_id, user.id):
            raise ConflictError("You have already applied to this opportunity")

        application = await self._applications.create(
            opportunity_id=opportunity_id, applicant_id=user.id, cover_letter=data.cover_letter
        )
        await self._notifications.notify(
            opportunity.employer_id,
            "New Application",
            f'A new application was submitted for "{opportunity.title}"',
            "application",
        )
        return ApplicationOut.model_validate(application)

    async def list_applications(self, user: CurrentUser, opportunity_id: int) -> list[ApplicantOut]:
        await self._owned_opportunity(user, opportunity_id)
        return [
            ApplicantOut.model_validate(flatten_row(row))
            for row in await self._applications.list_for_opportunity(opportunity_id)
        ]

    async def update_application_status(
        self, user: CurrentUser, application_id: int, status: str
    ) -> ApplicationOut:
        if status not in REVIEW_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(REVIEW_STATUSES)}")

        row = await self._applications.get_with_opportunity(application_id)
        if row is None:
            raise NotFoundError("Application", application_id)
        if row.employer_id != user.id and not user.is_admin:
            raise ForbiddenError("Only the employer can review this application")

        updated = await self._applications.update(application_id, status=status)
        await self._notifications.notify(
            row.Application.applicant_id,
            "Application Update",
            f'Your application for "{row.opportunity_title}" has been {status}',
            "application",
        )
        logger.info("Application %s marked %s by user %s", application_id, status, user.id)
        return ApplicationOut.model_validate(updated)
