"""
Pytest fixtures for TeamUp tests.

Every test gets its own in-memory SQLite database. The environment is pinned
before any application module reads settings.
"""

import itertools
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RELAY_REDIS_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "true"

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from teamup.config import get_settings  # noqa: E402

get_settings.cache_clear()

from teamup import models  # noqa: E402,F401
from teamup.constants import MEMBER_ROLE_MEMBER, MEMBER_ROLE_OWNER, PROJECT_STATUS_OPEN  # noqa: E402
from teamup.db import Base  # noqa: E402
from teamup.models import Project, ProjectMember, ProjectSkill, User, UserSkill  # noqa: E402
from teamup.repositories import SkillRepository  # noqa: E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield engine, TestingSessionLocal

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class Seeder:
    """Inserts users and projects directly, bypassing service validation."""

    _emails = itertools.count(1)

    def __init__(self, session):
        self.session = session
        self.skills = SkillRepository(session)

    def user(self, name: str = "Alice", skills: dict[str, int] | None = None, email: str | None = None) -> User:
        user = User(name=name, email=email or f"user{next(self._emails)}@example.com")
        self.session.add(user)
        self.session.flush()
        for skill_name, proficiency in (skills or {}).items():
            skill = self.skills.upsert(skill_name)
            self.session.add(UserSkill(user_id=user.id, skill_id=skill.id, proficiency=proficiency))
        self.session.commit()
        return user

    def project(
        self,
        owner: User,
        title: str = "Project",
        team_size: int = 4,
        skills: dict[str, int] | None = None,
        members: tuple[User, ...] = (),
        status: str = PROJECT_STATUS_OPEN,
    ) -> Project:
        project = Project(
            title=title,
            description=f"{title} description",
            team_size=team_size,
            status=status,
        )
        self.session.add(project)
        self.session.flush()
        self.session.add(ProjectMember(project_id=project.id, user_id=owner.id, role=MEMBER_ROLE_OWNER))
        for member in members:
            self.session.add(
                ProjectMember(project_id=project.id, user_id=member.id, role=MEMBER_ROLE_MEMBER)
            )
        for skill_name, level in (skills or {}).items():
            skill = self.skills.upsert(skill_name)
            self.session.add(ProjectSkill(project_id=project.id, skill_id=skill.id, level=level))
        self.session.commit()
        return project


@pytest.fixture
def seed(test_session) -> Seeder:
    return Seeder(test_session)
