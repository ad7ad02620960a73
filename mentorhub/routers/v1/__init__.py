"""v1 router package — all /api/v1/* endpoints live here.

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to mentorhub/services/.
"""

from fastapi import APIRouter

from mentorhub.routers.v1 import (
    admin,
    analytics,
    courses,
    mentorships,
    messages,
    notifications,
    opportunities,
    search,
    skills,
    users,
)

api_router = APIRouter()
for _module in (
    skills, users, courses, opportunities, mentorships,
    messages, notifications, search, admin, analytics,
):
    api_router.include_router(_module.router)
api_router.include_router(opportunities.applications_router)
