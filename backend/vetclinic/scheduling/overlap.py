"""
Overlap detection between one-hour visit slots.

A slot is the half-open interval [start, start + 1h) on a single date. Two
slots on the same date conflict when ``a.start < b.start + 1h`` and
``b.start < a.start + 1h``; back-to-back slots (10:00 after 09:00) do not.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, Optional

from vetclinic.scheduling.rules import VISIT_DURATION


@dataclass(frozen=True)
class BookedSlot:
    visit_id: uuid.UUID
    start: time


def slot_end(start: time) -> time:
    """End of the slot starting at ``start`` (wraps past midnight like ``time`` does)."""
    return (datetime.combine(date.min, start) + VISIT_DURATION).time()


def slots_overlap(first: time, second: time) -> bool:
    # Anchor both starts on the same day so the 1h arithmetic never wraps.
    a = datetime.combine(date.min, first)
    b = datetime.combine(date.min, second)
    return a < b + VISIT_DURATION and b < a + VISIT_DURATION


def find_conflict(
    booked: Iterable[BookedSlot],
    start: time,
    exclude_visit: Optional[uuid.UUID] = None,
) -> Optional[BookedSlot]:
    """
    Return the first booked slot that overlaps a candidate start, if any.

    Args:
        booked: slots already stored on the candidate's date
        start: candidate start time
        exclude_visit: visit being edited; it never conflicts with itself

    Returns:
        the conflicting BookedSlot, or None when the candidate is free
    """
    for slot in booked:
        if exclude_visit is not None and slot.visit_id == exclude_visit:
            continue
        if slots_overlap(slot.start, start):
            return slot
    return None


def has_overlap(
    booked: Iterable[BookedSlot],
    start: time,
    exclude_visit: Optional[uuid.UUID] = None,
) -> bool:
    return find_conflict(booked, start, exclude_visit) is not None
