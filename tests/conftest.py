"""Shared test fixtures for sqla-resource tests."""

from __future__ import annotations

import pytest
from sqlalchemy import ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
    sessionmaker,
)

from sqla_resource.repository._sqlalchemy import SQLAlchemyRepository
from sqla_resource.testing._actors import MockActor
from sqla_resource.testing._isolation import isolated_resources


# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Group(Base):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))

    notes: Mapped[list[Note]] = relationship("Note", back_populates="group")
    people: Mapped[list[Person]] = relationship("Person", back_populates="group")


class Person(Base):
    __tablename__ = "people"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    group_id: Mapped[int | None] = mapped_column(ForeignKey("groups.id"), nullable=True)

    group: Mapped[Group | None] = relationship("Group", back_populates="people")
    notes: Mapped[list[Note]] = relationship("Note", back_populates="person")


class Note(Base):
    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), default="")
    body: Mapped[str] = mapped_column(String(2000), default="")
    group_id: Mapped[int | None] = mapped_column(ForeignKey("groups.id"), nullable=True)
    person_id: Mapped[int | None] = mapped_column(ForeignKey("people.id"), nullable=True)

    group: Mapped[Group | None] = relationship("Group", back_populates="notes")
    person: Mapped[Person | None] = relationship("Person", back_populates="notes")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Reset the global config and policy registry around every test."""
    with isolated_resources():
        yield


@pytest.fixture()
def engine():
    """Create an in-memory SQLite engine with all tables."""
    eng = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    """Provide a transactional session that rolls back after each test."""
    factory = sessionmaker(bind=engine)
    sess = factory()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


@pytest.fixture()
def sample_data(session: Session) -> dict[str, list]:
    """Seed the database: two groups, two people, five notes."""
    staff = Group(id=1, name="Staff")
    guests = Group(id=2, name="Guests")
    session.add_all([staff, guests])

    alice = Person(id=1, name="Alice", group_id=1)
    bob = Person(id=2, name="Bob", group_id=2)
    session.add_all([alice, bob])

    notes = [
        Note(id=1, title="Agenda", group_id=1),
        Note(id=2, title="Minutes", group_id=1),
        Note(id=3, title="Welcome", group_id=2),
        Note(id=4, title="Todo", person_id=1),
        Note(id=5, title="Ideas", person_id=2),
    ]
    session.add_all(notes)

    session.flush()
    return {
        "groups": [staff, guests],
        "people": [alice, bob],
        "notes": notes,
    }


@pytest.fixture()
def repository(session: Session) -> SQLAlchemyRepository:
    return SQLAlchemyRepository.from_base(session, Base)
