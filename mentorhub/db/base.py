"""Async engine, session factory, declarative Base and the ``get_db`` dependency.

PostgreSQL (asyncpg) is the production target; SQLite (aiosqlite) backs local
development and the test suite. On SQLite, foreign keys are switched on for
every connection so ``ON DELETE CASCADE`` behaves as it does on PostgreSQL.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from mentorhub.core.config import settings


class Base(DeclarativeBase):
    """Every ORM model in mentorhub.domain inherits from this."""


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str) -> AsyncEngine:
    is_sqlite = url.startswith("sqlite")
    engine = create_async_engine(
        url,
        pool_pre_ping=True,
        echo=False,
        # aiosqlite runs the connection on its own worker thread
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine


engine = build_engine(settings.database_url)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: commit when the handler returns, roll back if it raises."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
