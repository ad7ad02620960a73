from __future__ import annotations

from sqlalchemy import Row, or_, select
from sqlalchemy.orm import aliased

from mentorhub.domain.opportunity import Application, Opportunity
from mentorhub.domain.user import User
from mentorhub.repositories.base import BaseRepository

EMPLOYER_NAME = (User.first_name + " " + User.last_name).label("employer_name")


class OpportunityRepository(BaseRepository[Opportunity]):
    model = Opportunity

    async def active_not_applied(self, user_id: int) -> list[Row]:
        """Active opportunities the user has not applied to, newest first."""
        applied = select(Application.opportunity_id).where(Application.applicant_id == user_id)
        q = (
            select(Opportunity, EMPLOYER_NAME)
            .join(User, Opportunity.employer_id == User.id)
            .where(Opportunity.is_active.is_(True), Opportunity.id.not_in(applied))
            .order_by(Opportunity.created_at.desc(), Opportunity.id.desc())
        )
        return list((await self._session.execute(q)).all())

    async def search(self, pattern: str, limit: int) -> list[Row]:
        q = (
            select(Opportunity, EMPLOYER_NAME)
            .outerjoin(User, Opportunity.employer_id == User.id)
            .where(
                Opportunity.is_active.is_(True),
                or_(
                    Opportunity.title.ilike(pattern),
                    Opportunity.description.ilike(pattern),
                    Opportunity.type.ilike(pattern),
                ),
            )
            .order_by(Opportunity.id)
            .limit(limit)
        )
        return list((await self._session.execute(q)).all())


class ApplicationRepository(BaseRepository[Application]):
    model = Application

    async def find(self, opportunity_id: int, applicant_id: int) -> Application | None:
        q = select(Application).where(
            Application.opportunity_id == opportunity_id,
            Application.applicant_id == applicant_id,
        )
        return (await self._session.execute(q)).scalars().first()

    async def get_with_opportunity(self, application_id: int) -> Row | None:
        """(Application, employer_id, opportunity_title) for ownership checks."""
        q = (
            select(
                Application,
                Opportunity.employer_id,
                Opportunity.title.label("opportunity_title"),
            )
            .join(Opportunity, Application.opportunity_id == Opportunity.id)
            .where(Application.id == application_id)
        )
        return (await self._session.execute(q)).first()

    async def list_for_opportunity(self, opportunity_id: int) -> list[Row]:
        q = (
            select(
                Application,
                (User.first_name + " " + User.last_name).label("applicant_name"),
                User.email.label("applicant_email"),
                User.profile_image,
                User.bio,
                User.education,
                User.experience,
            )
            .join(User, Application.applicant_id == User.id)
            .where(Application.opportunity_id == opportunity_id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        return list((await self._session.execute(q)).all())

    async def list_for_applicant(self, applicant_id: int) -> list[Row]:
        employer = aliased(User)
        q = (
            select(
                Application,
                Opportunity.title.label("opportunity_title"),
                Opportunity.type.label("opportunity_type"),
                Opportunity.location,
                (employer.first_name + " " + employer.last_name).label("employer_name"),
            )
            .join(Opportunity, Application.opportunity_id == Opportunity.id)
            .join(employer, Opportunity.employer_id == employer.id)
            .where(Application.applicant_id == applicant_id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        return list((await self._session.execute(q)).all())
