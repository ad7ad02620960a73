from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.core.security import CurrentUser, get_current_user, require_role
from mentorhub.db.base import get_db
from mentorhub.schemas.course import CourseCreate, CourseDetail, CourseOut, EnrollmentOut, ProgressUpdate
from mentorhub.services.course import CourseService

router = APIRouter(prefix="/courses", tags=["Courses"])


def _svc(session: AsyncSession) -> CourseService:
    return CourseService(session)


@router.post("", response_model=DataResponse[CourseOut], status_code=status.HTTP_201_CREATED)
async def create_course(
    body: CourseCreate,
    user: CurrentUser = Depends(require_role("instructor", "admin")),
    session: AsyncSession = Depends(get_db),
):
    """Create a course (instructors and admins only)."""
    return {"data": await _svc(session).create_course(user, body)}


@router.get("/{course_id}", response_model=DataResponse[CourseDetail])
async def get_course(course_id: int, session: AsyncSession = Depends(get_db)):
    return {"data": await _svc(session).get_course(course_id)}


@router.post(
    "/{course_id}/enroll",
    response_model=DataResponse[EnrollmentOut],
    status_code=status.HTTP_201_CREATED,
)
async def enroll(
    course_id: int,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await _svc(session).enroll(user, course_id)}


@router.put("/{course_id}/progress", response_model=DataResponse[EnrollmentOut])
async def update_progress(
    course_id: int,
    body: ProgressUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    enrollment = await _svc(session).update_progress(user, course_id, body.progress_percentage)
    return {"data": enrollment}
