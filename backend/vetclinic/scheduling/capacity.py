"""Module: capacity."""

import uuid
from typing import Iterable, Optional

from vetclinic.scheduling.overlap import BookedSlot


# Admission control: a date is full once its booked count reaches the ceiling.
def capacity_reached(booked_count: int, ceiling: int) -> bool:
    return booked_count >= ceiling


def remaining_capacity(booked_count: int, ceiling: int) -> int:
    return max(0, ceiling - booked_count)


def count_booked(booked: Iterable[BookedSlot], exclude_visit: Optional[uuid.UUID] = None) -> int:
    return sum(1 for slot in booked if slot.visit_id != exclude_visit)
