"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from dependency_injector import providers
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from academy import models  # noqa: F401  (registers tables on Base.metadata)
from academy.core import Container
from academy.database import Base, configure_sqlite_engine
from academy.domain.common import DomainEvent

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite://"

# One shared connection so every session sees the same in-memory database
test_engine = configure_sqlite_engine(
    create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class RecordingNotifier:
    """Collects dispatched domain events."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    def notify(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[DomainEvent]) -> list[DomainEvent]:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def container(
    db_session: Session, notifier: RecordingNotifier
) -> Generator[Container, None, None]:
    """Container bound to the test session, with a recording notifier."""
    test_container = Container()
    test_container.db.override(db_session)
    test_container.notifier.override(providers.Object(notifier))
    yield test_container
    test_container.reset_override()


@pytest.fixture
def teaching_group_id(container: Container) -> int:
    group = container.teaching_group_use_case().create_teaching_group("cohort-2026")
    return group.id.value


@pytest.fixture
def make_user(container: Container, teaching_group_id: int):
    """Register users with unique emails."""
    counter = {"n": 0}

    def _make_user(role: str = "student", name: str = "Ada Student") -> int:
        counter["n"] += 1
        user = container.user_use_case().register_user(
            name=name,
            email=f"user{counter['n']}@example.com",
            password="correct-horse",
            teaching_group_id=teaching_group_id,
            role=role,
        )
        return user.id.value

    return _make_user


@pytest.fixture
def user_id(make_user) -> int:
    return make_user()


@pytest.fixture
def program_id(container: Container) -> int:
    program = container.program_use_case().create_program(
        name="Data Engineering", price=500, program_type="bootcamp"
    )
    return program.id.value


@pytest.fixture
def course_id(container: Container) -> int:
    return container.course_use_case().create_course("SQL Basics").id.value


@pytest.fixture
def lesson_id(container: Container, course_id: int) -> int:
    return container.lesson_use_case().add_lesson(course_id, 1, "Intro").id.value
