"""Opportunity and application Pydantic schemas."""


from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from mentorhub.schemas.common import CamelModel

class OpportunityCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    type: str = Field(min_length=1, max_length=50)
    location: str | None = None
    salary_min: Decimal | None = None
    salary_max: Decimal | None = None
    required_skills: list[str] = []
    experience_level: str | None = None
    is_remote: bool = False
    application_deadline: date | None = None

class OpportunityUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    location: str | None = None
    salary_min: Decimal | None = None
    salary_max: Decimal | None = None
    required_skills: list[str] | None = None
    experience_level: str | None = None
    is_remote: bool | None = None
    application_deadline: date | None = None
    is_active: bool | None = None

class OpportunityOut(CamelModel):
    id: int
    employer_id: int
    title: str
    description: str
    type: str
    location: str | None = None
    salary_min: Decimal | None = None
    salary_max: Decimal | None = None
    required_skills: list[str] = []
    experience_level: str | None = None
    is_remote: bool
    application_deadline: date | None = None
    is_active: bool
    created_at: datetime

class ApplicationCreate(CamelModel):
    cover_letter: str | None = None

class ApplicationStatusUpdate(CamelModel):
    status: str  # "reviewed" | "accepted" | "rejected"

class ApplicationOut(CamelModel):
    id: int
    opportunity_id: int
    applicant_id: int
    cover_letter: str | None = None
    status: str
    applied_at: datetime

class ApplicantOut(ApplicationOut):
    applicant_name: str
    applicant_email: str
    profile_image: str | None = None
    bio: str | None = None
    education: str | None = None
    experience: str | None = None

class UserApplicationOut(ApplicationOut):
    opportunity_title: str
    opportunity_type: str
    location: str | None = None
    employer_name: str
