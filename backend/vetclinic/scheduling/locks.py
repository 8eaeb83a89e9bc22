"""Module: locks."""

import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional


class DateLockRegistry:
    """
    One mutual-exclusion lock per calendar date.

    Every read-decide-write sequence for a date runs while holding that
    date's lock, so two bookings for the same day are never validated
    against the same snapshot. A date's entry lives only while some caller
    holds or waits for it; the last one out removes it.
    """

    def __init__(self):
        self._locks: dict[date, threading.Lock] = {}
        self._users: dict[date, int] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, day: date) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(day)
            if lock is None:
                lock = self._locks[day] = threading.Lock()
                self._users[day] = 0
            self._users[day] += 1
            return lock

    def _checkin(self, day: date) -> None:
        with self._guard:
            self._users[day] -= 1
            if not self._users[day]:
                del self._users[day]
                del self._locks[day]

    @contextmanager
    def hold(self, *days: Optional[date]) -> Iterator[None]:
        # Ascending order so a reschedule across two dates cannot deadlock with another.
        ordered = sorted({day for day in days if day is not None})
        checked_out: list[date] = []
        acquired: list[threading.Lock] = []
        try:
            for day in ordered:
                lock = self._checkout(day)
                checked_out.append(day)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for day in checked_out:
                self._checkin(day)


# Process-wide registry shared by every request handler.
date_locks = DateLockRegistry()
