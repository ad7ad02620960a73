"""Database package: async engine, session factory, Base and the request-scoped session."""
from mentorhub.db.base import Base, async_session_factory, engine, get_db

__all__ = ["Base", "async_session_factory", "engine", "get_db"]
