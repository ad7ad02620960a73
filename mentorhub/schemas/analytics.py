"""Search, admin and analytics response schemas."""


from datetime import date

from mentorhub.schemas.common import CamelModel
from mentorhub.schemas.skill import SkillOut
from mentorhub.schemas.user import RecommendedCourse, RecommendedOpportunity, UserSummary

class SkillSearchHit(SkillOut):
    user_name: str
    avg_rating: float = 0

class SearchResults(CamelModel):
    users: list[UserSummary] | None = None
    skills: list[SkillSearchHit] | None = None
    courses: list[RecommendedCourse] | None = None
    opportunities: list[RecommendedOpportunity] | None = None

class Suggestion(CamelModel):
    suggestion: str
    type: str

class UserGrowthPoint(CamelModel):
    month: date
    role: str
    new_users: int

class PlatformStats(CamelModel):
    total_users: int
    students: int
    employers: int
    mentors: int
    total_skills: int
    total_courses: int
    active_opportunities: int
    total_applications: int

class PopularSkill(CamelModel):
    category: str
    count: int
    avg_rating: float

class PlatformAnalytics(CamelModel):
    user_growth: list[UserGrowthPoint]
    platform_stats: PlatformStats
    popular_skills: list[PopularSkill]

class SkillTrendPoint(CamelModel):
    category: str
    month: date
    skill_count: int

class OpportunityTypeStats(CamelModel):
    type: str
    total_opportunities: int
    total_applications: int
    applications_per_opportunity: float
    accepted_applications: int

class CourseCategoryStats(CamelModel):
    category: str
    difficulty_level: str | None = None
    total_enrollments: int
    completions: int
    avg_progress: float | None = None
    completion_rate: float | None = None
