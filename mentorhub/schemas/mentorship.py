"""Mentorship Pydantic schemas."""


from datetime import datetime

from mentorhub.schemas.common import CamelModel

class MentorOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    bio: str | None = None
    experience: str | None = None
    profile_image: str | None = None
    location: str | None = None
    is_verified: bool
    mentee_count: int
    skill_categories: list[str] = []
    avg_skill_rating: float | None = None

class MentorshipCreate(CamelModel):
    mentor_id: int
    goals: str | None = None

class MentorshipStatusUpdate(CamelModel):
    status: str  # "active" | "completed" | "cancelled"

class MentorshipOut(CamelModel):
    id: int
    mentor_id: int
    mentee_id: int
    status: str
    goals: str | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime
