"""Module: rules."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

# Every visit occupies exactly one hour starting at its booked time.
VISIT_DURATION = timedelta(hours=1)


@dataclass(frozen=True)
class ClinicRules:
    """Static scheduling limits for the clinic.

    ``opening_time`` is the earliest bookable start, ``closing_time`` the end
    of the working day; the last bookable start is one visit before closing.
    ``daily_capacity`` caps the number of visits on any single date.
    """

    opening_time: time
    closing_time: time
    last_operating_date: date
    daily_capacity: int

    def __post_init__(self) -> None:
        if self.daily_capacity < 1:
            raise ValueError("daily_capacity must be at least 1")
        if _minutes(self.closing_time) - _minutes(self.opening_time) < _minutes_of(VISIT_DURATION):
            raise ValueError("closing_time must be at least one visit after opening_time")

    @property
    def last_start_time(self) -> time:
        return (datetime.combine(date.min, self.closing_time) - VISIT_DURATION).time()

    def bookable_starts(self) -> list[time]:
        # Starts on the visit-length grid from opening up to the last start.
        starts = []
        current = datetime.combine(date.min, self.opening_time)
        last = datetime.combine(date.min, self.last_start_time)
        while current <= last:
            starts.append(current.time())
            current += VISIT_DURATION
        return starts


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def _minutes_of(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)
