"""Shared fixtures: an in-memory SQLite store built from the real schema."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from databank.core.schema import create_schema
from databank.models.domain import Physician
from databank.repositories.physician_repository import PhysicianRepository
from databank.repositories.specialty_repository import SpecialtyRepository

TEST_SPECIALTIES = ["Cardiology", "Neurology", "Pediatrics"]


@pytest.fixture
def sqlite_engine():
    # one shared connection so every checkout sees the same in-memory database
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine, TEST_SPECIALTIES)
    yield engine
    engine.dispose()


@pytest.fixture
def repo(sqlite_engine):
    return PhysicianRepository(sqlite_engine)


@pytest.fixture
def specialty_repo(sqlite_engine):
    return SpecialtyRepository(sqlite_engine)


@pytest.fixture
def make_physician():
    def _make(**overrides):
        fields = {
            "last_name": "Smith",
            "first_name": "Jane",
            "email": "jane@x.com",
            "phone": "613-555-0100",
            "specialty": "Cardiology",
        }
        fields.update(overrides)
        return Physician(**fields)
    return _make
