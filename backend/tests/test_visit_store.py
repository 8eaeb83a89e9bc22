"""Tests for db/visit_store.py"""
import uuid
from datetime import date, time

import pytest
from sqlalchemy.exc import IntegrityError

from vetclinic.db.models.visit import Visit
from vetclinic.db.visit_store import VisitStore
from vetclinic.scheduling.errors import ReasonCode, VisitNotFound

JAN_10 = date(2026, 1, 10)


@pytest.fixture
def store(db):
    return VisitStore(db)


@pytest.fixture
def morning_visit(db, store, pet):
    visit = store.save_visit(
        Visit(pet_id=pet.pet_id, visit_date=JAN_10, visit_time=time(9, 0), diagnosis="Otitis", treatment="Ear drops")
    )
    db.commit()
    return visit


def test_count_visits_on_date(store, morning_visit):
    assert store.count_visits_on_date(JAN_10) == 1
    assert store.count_visits_on_date(date(2026, 1, 11)) == 0
    assert store.count_visits_on_date(JAN_10, exclude_id=morning_visit.visit_id) == 0


def test_find_overlapping_visit_matches_half_open_interval(store, morning_visit):
    assert store.find_overlapping_visit(JAN_10, time(9, 30), time(10, 30))
    assert store.find_overlapping_visit(JAN_10, time(8, 30), time(9, 30))
    assert not store.find_overlapping_visit(JAN_10, time(10, 0), time(11, 0))
    assert not store.find_overlapping_visit(JAN_10, time(8, 0), time(9, 0))


def test_find_overlapping_visit_is_scoped_to_date(store, morning_visit):
    assert not store.find_overlapping_visit(date(2026, 1, 11), time(9, 0), time(10, 0))


def test_find_overlapping_visit_excludes_self(store, morning_visit):
    assert not store.find_overlapping_visit(
        JAN_10, time(9, 30), time(10, 30), exclude_id=morning_visit.visit_id
    )


def test_list_slots_on_date_is_ordered(db, store, pet, morning_visit):
    store.save_visit(
        Visit(pet_id=pet.pet_id, visit_date=JAN_10, visit_time=time(8, 0), diagnosis="Check-up", treatment="None")
    )
    db.commit()

    starts = [slot.start for slot in store.list_slots_on_date(JAN_10)]

    assert starts == [time(8, 0), time(9, 0)]


def test_load_visit_missing_raises_not_found(store):
    with pytest.raises(VisitNotFound) as excinfo:
        store.load_visit(uuid.uuid4())
    assert excinfo.value.reason == ReasonCode.NOT_FOUND


def test_delete_visit(db, store, morning_visit):
    store.delete_visit(morning_visit.visit_id)
    db.commit()

    assert store.count_visits_on_date(JAN_10) == 0


def test_lock_dates_is_noop_on_sqlite(store):
    store.lock_dates(JAN_10, None)


def test_sqlite_enforces_restrict_on_pet_with_visits(db, pet, morning_visit):
    db.delete(pet)
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_sqlite_rejects_visit_for_missing_pet(db, store):
    store.db.add(
        Visit(pet_id=uuid.uuid4(), visit_date=JAN_10, visit_time=time(9, 0), diagnosis="Otitis", treatment="Ear drops")
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
