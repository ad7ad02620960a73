"""Course and enrollment Pydantic schemas."""


from datetime import datetime
from decimal import Decimal

from pydantic import Field

from mentorhub.schemas.common import CamelModel

class CourseCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    difficulty_level: str | None = None
    duration_hours: int | None = Field(default=None, ge=0)
    price: Decimal = Field(default=Decimal("0"), ge=0)

class CourseOut(CamelModel):
    id: int
    instructor_id: int
    title: str
    description: str
    category: str
    difficulty_level: str | None = None
    duration_hours: int | None = None
    price: Decimal
    is_active: bool
    created_at: datetime

class CourseDetail(CourseOut):
    instructor_name: str | None = None
    instructor_bio: str | None = None
    instructor_image: str | None = None
    enrollment_count: int = 0
    avg_progress: float | None = None

class ProgressUpdate(CamelModel):
    progress_percentage: int

class EnrollmentOut(CamelModel):
    id: int
    user_id: int
    course_id: int
    progress_percentage: int
    completed: bool
    completed_at: datetime | None = None
    enrolled_at: datetime
