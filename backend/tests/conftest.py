"""
Shared pytest fixtures.

Provides:
- An in-memory SQLite engine/session per test with all tables created
- ClinicRules matching the reference clinic (08:00-16:00, cutoff 2026-03-12, 8/day)
- Owner/pet rows and a VisitLifecycle bound to the test session
- A FastAPI TestClient with get_db and get_clinic_rules overridden
"""
import os

# Settings are read at import time; point them at a throwaway database first.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import vetclinic.db.models  # noqa: F401
from vetclinic.api.v1.routes.deps import get_clinic_rules, get_db
from vetclinic.db.base import Base
from vetclinic.db.models.owner import Owner
from vetclinic.db.models.pet import Pet
from vetclinic.db.session import build_engine
from vetclinic.scheduling.lifecycle import VisitLifecycle
from vetclinic.scheduling.locks import DateLockRegistry
from vetclinic.scheduling.rules import ClinicRules


# ============================================================================
# Database
# ============================================================================

@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ============================================================================
# Scheduling
# ============================================================================

@pytest.fixture
def rules():
    return ClinicRules(
        opening_time=time(8, 0),
        closing_time=time(16, 0),
        last_operating_date=date(2026, 3, 12),
        daily_capacity=8,
    )


@pytest.fixture
def locks():
    return DateLockRegistry()


@pytest.fixture
def lifecycle(db, rules, locks):
    return VisitLifecycle(db, rules, locks)


# ============================================================================
# Records
# ============================================================================

@pytest.fixture
def owner(db):
    owner = Owner(name="Anna Petrova", email="anna.petrova@mailbox.org", phone="89161234567")
    db.add(owner)
    db.commit()
    return owner


@pytest.fixture
def pet(db, owner):
    pet = Pet(
        owner_id=owner.owner_id,
        name="Barsik",
        species="Cat",
        breed="Siberian",
        date_of_birth=date(2020, 5, 17),
        passport_number="VP-0001-CAT",
    )
    db.add(pet)
    db.commit()
    return pet


@pytest.fixture
def other_pet(db, owner):
    pet = Pet(
        owner_id=owner.owner_id,
        name="Sharik",
        species="Dog",
        breed="Beagle",
        date_of_birth=date(2019, 2, 3),
        passport_number="VP-0002-DOG",
    )
    db.add(pet)
    db.commit()
    return pet


# ============================================================================
# API
# ============================================================================

@pytest.fixture
def client(session_factory, rules):
    from vetclinic.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clinic_rules] = lambda: rules
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
