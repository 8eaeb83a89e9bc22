"""
Tests for scheduling/locks.py

Per-date locks exclude each other and are dropped once nobody holds or
waits for them.
"""
import threading
from datetime import date, time, timedelta

import pytest

from vetclinic.scheduling.errors import VisitRejected
from vetclinic.scheduling.locks import DateLockRegistry

JAN_10 = date(2026, 1, 10)


def test_registry_is_empty_after_hold_exits(locks):
    with locks.hold(JAN_10, date(2026, 1, 12), None):
        assert len(locks) == 2
    assert len(locks) == 0


def test_registry_is_empty_after_hold_raises(locks):
    with pytest.raises(RuntimeError):
        with locks.hold(JAN_10):
            raise RuntimeError("boom")
    assert len(locks) == 0


def test_rejected_requests_leave_no_entries(lifecycle, locks, pet):
    first = date(2030, 1, 1)
    for offset in range(500):
        with pytest.raises(VisitRejected):
            lifecycle.create(pet.pet_id, first + timedelta(days=offset), time(9, 0), "Check-up", "None")

    assert len(locks) == 0


def test_waiter_keeps_entry_until_it_finishes():
    locks = DateLockRegistry()
    waiting = threading.Event()
    entered = threading.Event()

    def contender():
        waiting.set()
        with locks.hold(JAN_10):
            entered.set()

    with locks.hold(JAN_10):
        worker = threading.Thread(target=contender)
        worker.start()
        waiting.wait(timeout=5)
        # The contender is blocked on this date's lock.
        assert not entered.wait(timeout=0.2)
        assert len(locks) == 1

    worker.join(timeout=5)
    assert entered.is_set()
    assert len(locks) == 0


def test_same_date_is_mutually_exclusive():
    locks = DateLockRegistry()
    inside = []
    overlaps = []
    guard = threading.Lock()

    def worker():
        for _ in range(50):
            with locks.hold(JAN_10):
                with guard:
                    inside.append(1)
                    if len(inside) > 1:
                        overlaps.append(len(inside))
                with guard:
                    inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert overlaps == []
    assert len(locks) == 0
