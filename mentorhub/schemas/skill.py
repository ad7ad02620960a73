"""Skill Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from mentorhub.schemas.common import CamelModel

class SkillCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str = Field(min_length=1, max_length=100)
    skill_level: str | None = None
    portfolio_url: str | None = None

class SkillUpdate(SkillCreate):
    """Full replacement of the editable fields."""

class SkillOut(CamelModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    category: str
    skill_level: str | None = None
    portfolio_url: str | None = None
    created_at: datetime
    updated_at: datetime

class SkillListItem(SkillOut):
    user_name: str
    user_image: str | None = None
    avg_rating: float = 0
    endorsement_count: int = 0

class RatedSkill(SkillOut):
    avg_rating: float = 0
    endorsement_count: int = 0

class EndorsementCreate(CamelModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = None

class EndorsementOut(CamelModel):
    id: int
    skill_id: int
    endorser_id: int
    rating: int
    comment: str | None = None
    created_at: datetime
    endorser_name: str | None = None
    endorser_image: str | None = None

class SkillDetail(SkillOut):
    user_name: str
    user_image: str | None = None
    user_bio: str | None = None
    endorsements: list[EndorsementOut] = []

class SkillModeration(CamelModel):
    action: str  # "approve" | "reject" | "flag"
    reason: str | None = None
