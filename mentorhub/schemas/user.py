"""User Pydantic schemas (profiles and recommendations)."""


from datetime import datetime

from mentorhub.schemas.common import CamelModel
from mentorhub.schemas.course import CourseOut
from mentorhub.schemas.opportunity import OpportunityOut
from mentorhub.schemas.skill import RatedSkill

class UserOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    bio: str | None = None
    education: str | None = None
    experience: str | None = None
    phone: str | None = None
    location: str | None = None
    profile_image: str | None = None
    is_verified: bool
    created_at: datetime

class UserSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    role: str
    bio: str | None = None
    location: str | None = None
    is_verified: bool

class CourseStats(CamelModel):
    total_enrollments: int
    completed_courses: int
    avg_progress: float

class MentorshipStats(CamelModel):
    mentoring_count: int
    being_mentored_count: int

class UserProfile(CamelModel):
    user: UserOut
    skills: list[RatedSkill]
    course_stats: CourseStats
    mentorship_stats: MentorshipStats

class VerificationUpdate(CamelModel):
    is_verified: bool

class RecommendedCourse(CourseOut):
    instructor_name: str | None = None

class RecommendedMentor(CamelModel):
    id: int
    first_name: str
    last_name: str
    bio: str | None = None
    profile_image: str | None = None
    expertise_areas: list[str] = []

class RecommendedOpportunity(OpportunityOut):
    employer_name: str | None = None

class Recommendations(CamelModel):
    courses: list[RecommendedCourse]
    mentors: list[RecommendedMentor]
    opportunities: list[RecommendedOpportunity]
