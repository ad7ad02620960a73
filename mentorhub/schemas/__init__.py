"""Pydantic schemas package.

Folder intent:
  common.py        — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  skill.py         — skill showcase, listing rows, endorsements
  user.py          — profiles, recommendations
  course.py        — courses, enrollments, progress
  opportunity.py   — opportunities and applications
  mentorship.py    — mentors and mentorships
  message.py       — messages, conversations, notifications
  analytics.py     — search results and admin/analytics aggregates
"""
