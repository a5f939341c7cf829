"""Fixtures shared by the framework integration tests."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from sqla_resource.controller._base import ResourceController
from sqla_resource.declaration._macros import (
    load_and_authorize_parent,
    load_and_authorize_resource,
)
from tests.conftest import Base


class NotesController(ResourceController):
    rules = (
        load_and_authorize_parent("person", "group", shallow=True),
        load_and_authorize_resource(),
    )


class GroupNotesController(ResourceController):
    resource_name = "note"
    resource_accessor_name = "notes"
    rules = (
        load_and_authorize_parent("group"),
        load_and_authorize_resource(),
    )


@pytest.fixture()
def engine():
    """In-memory SQLite engine shared across the threads a test client uses."""
    eng = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    return eng
