import asyncio
import tempfile
import unittest
from itertools import count

from fastapi.testclient import TestClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from mentorhub.core.security import create_access_token
from mentorhub.db.base import Base, enable_sqlite_foreign_keys, get_db
from mentorhub.domain import (
    Application,
    Course,
    Enrollment,
    Mentorship,
    Message,
    Notification,
    Opportunity,
    Skill,
    SkillEndorsement,
    User,
)
from mentorhub.main import app

# Children before parents
_TABLES_IN_DELETE_ORDER = (
    SkillEndorsement,
    Skill,
    Enrollment,
    Course,
    Application,
    Opportunity,
    Mentorship,
    Message,
    Notification,
    User,
)

_emails = count(1)


def make_user(role: str = "student", **kwargs) -> User:
    n = next(_emails)
    kwargs.setdefault("email", f"user{n}@example.com")
    kwargs.setdefault("first_name", f"First{n}")
    kwargs.setdefault("last_name", f"Last{n}")
    return User(role=role, **kwargs)


class DatabaseTestCase(unittest.TestCase):
    """File-backed SQLite database shared by a test class, emptied before each test.

    NullPool keeps every connection local to the event loop that opened it,
    so seeding (``asyncio.run``) and the TestClient's loop never share one.
    """

    @classmethod
    def setUpClass(cls):
        cls._tmpdir = tempfile.TemporaryDirectory()
        cls.engine = create_async_engine(
            f"sqlite+aiosqlite:///{cls._tmpdir.name}/test.db", poolclass=NullPool
        )
        enable_sqlite_foreign_keys(cls.engine)
        cls.SessionLocal = async_sessionmaker(
            bind=cls.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )
        asyncio.run(cls._create_schema())

    @classmethod
    async def _create_schema(cls):
        async with cls.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @classmethod
    def tearDownClass(cls):
        asyncio.run(cls.engine.dispose())
        cls._tmpdir.cleanup()

    def setUp(self):
        asyncio.run(self._truncate())

    async def _truncate(self):
        async with self.SessionLocal() as session:
            for model in _TABLES_IN_DELETE_ORDER:
                await session.execute(delete(model))
            await session.commit()

    def seed(self, *objects):
        """Persist *objects* in one transaction; ids are populated afterwards."""
        async def _seed():
            async with self.SessionLocal() as session:
                session.add_all(objects)
                await session.commit()

        asyncio.run(_seed())
        return objects if len(objects) > 1 else objects[0]

    def fetch_all(self, stmt):
        async def _fetch():
            async with self.SessionLocal() as session:
                return list((await session.execute(stmt)).scalars().all())

        return asyncio.run(_fetch())


class ApiTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        session_factory = self.SessionLocal

        async def override_get_db():
            async with session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    @staticmethod
    def auth(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}
