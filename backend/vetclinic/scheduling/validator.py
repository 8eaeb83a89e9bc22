"""
Visit scheduling validator.

Decides whether a proposed (date, time) may be booked, or an existing visit
moved there. The decision is a pure function of its inputs: the caller loads
the slots already booked on the target date and passes them in, so nothing
here touches the database.

Checks run in a fixed order and the first failure wins:
    1. date and time present                 -> MISSING_FIELD
    2. date not after the last operating day  -> DATE_OUT_OF_RANGE
    3. time within [opening, closing - 1h]    -> TIME_OUT_OF_RANGE
    4. reschedules never move to earlier date -> NO_EARLIER_RESCHEDULE
    5. no overlap with other visits that day  -> SLOT_CONFLICT
    6. date below its capacity (date changes) -> CAPACITY_EXCEEDED
"""

import uuid
from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Sequence, Union

from vetclinic.scheduling.capacity import capacity_reached, count_booked
from vetclinic.scheduling.errors import ReasonCode
from vetclinic.scheduling.overlap import BookedSlot, has_overlap
from vetclinic.scheduling.rules import ClinicRules


@dataclass(frozen=True)
class CurrentSlot:
    """Where an existing visit sits before it is rescheduled."""

    visit_id: uuid.UUID
    visit_date: date
    visit_time: time


@dataclass(frozen=True)
class Admit:
    visit_date: date
    visit_time: time


@dataclass(frozen=True)
class Reject:
    reason: ReasonCode
    field: str

    @classmethod
    def because(cls, reason: ReasonCode, field: Optional[str] = None) -> "Reject":
        return cls(reason=reason, field=field or reason.field)


Decision = Union[Admit, Reject]


def normalize_time(value: time) -> time:
    # Minute resolution, naive wall-clock time.
    return value.replace(second=0, microsecond=0, tzinfo=None)


def evaluate(
    visit_date: Optional[date],
    visit_time: Optional[time],
    booked: Sequence[BookedSlot],
    rules: ClinicRules,
    current: Optional[CurrentSlot] = None,
) -> Decision:
    """
    Run the ordered admission checks for one proposed slot.

    Args:
        visit_date: requested date
        visit_time: requested start time
        booked: slots already stored on ``visit_date`` (may include ``current``)
        rules: clinic operating limits
        current: the visit's stored slot when rescheduling, None when creating

    Returns:
        Admit with the normalized date/time, or Reject with the first failed reason
    """
    if visit_date is None:
        return Reject.because(ReasonCode.MISSING_FIELD, "date")
    if visit_time is None:
        return Reject.because(ReasonCode.MISSING_FIELD, "time")

    visit_time = normalize_time(visit_time)

    if visit_date > rules.last_operating_date:
        return Reject.because(ReasonCode.DATE_OUT_OF_RANGE)

    if not rules.opening_time <= visit_time <= rules.last_start_time:
        return Reject.because(ReasonCode.TIME_OUT_OF_RANGE)

    if current is not None and visit_date < current.visit_date:
        return Reject.because(ReasonCode.NO_EARLIER_RESCHEDULE)

    exclude = current.visit_id if current is not None else None

    if has_overlap(booked, visit_time, exclude_visit=exclude):
        return Reject.because(ReasonCode.SLOT_CONFLICT)

    # Moving within the same date never changes that date's head count.
    if current is None or visit_date != current.visit_date:
        if capacity_reached(count_booked(booked, exclude_visit=exclude), rules.daily_capacity):
            return Reject.because(ReasonCode.CAPACITY_EXCEEDED)

    return Admit(visit_date=visit_date, visit_time=visit_time)
