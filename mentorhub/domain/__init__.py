"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  user.py         — platform accounts (every other model references a user)
  skill.py        — skill showcases and peer endorsements
  course.py       — courses and enrollments
  opportunity.py  — job/internship postings and applications
  mentorship.py   — mentor/mentee pairs
  message.py      — direct messages and notifications
  mixins.py       — shared IdMixin, CreatedAtMixin, TimestampMixin
"""

from mentorhub.domain.course import Course, Enrollment
from mentorhub.domain.mentorship import Mentorship
from mentorhub.domain.message import Message, Notification
from mentorhub.domain.opportunity import Application, Opportunity
from mentorhub.domain.skill import Skill, SkillEndorsement
from mentorhub.domain.user import User

__all__ = [
    "Application",
    "Course",
    "Enrollment",
    "Mentorship",
    "Message",
    "Notification",
    "Opportunity",
    "Skill",
    "SkillEndorsement",
    "User",
]
