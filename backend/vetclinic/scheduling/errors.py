"""Module: errors."""

from enum import Enum


class ReasonCode(str, Enum):
    """Stable identifiers for every way a visit request can be refused."""

    MISSING_FIELD = "MISSING_FIELD"
    DATE_OUT_OF_RANGE = "DATE_OUT_OF_RANGE"
    TIME_OUT_OF_RANGE = "TIME_OUT_OF_RANGE"
    NO_EARLIER_RESCHEDULE = "NO_EARLIER_RESCHEDULE"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"

    @property
    def field(self) -> str:
        return _FIELDS[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_FIELDS = {
    ReasonCode.MISSING_FIELD: "date",
    ReasonCode.DATE_OUT_OF_RANGE: "date",
    ReasonCode.TIME_OUT_OF_RANGE: "time",
    ReasonCode.NO_EARLIER_RESCHEDULE: "date",
    ReasonCode.SLOT_CONFLICT: "time",
    ReasonCode.CAPACITY_EXCEEDED: "date",
    ReasonCode.NOT_FOUND: "visit_id",
}

_MESSAGES = {
    ReasonCode.MISSING_FIELD: "This field is required",
    ReasonCode.DATE_OUT_OF_RANGE: "Visits cannot be booked after the clinic's last operating date",
    ReasonCode.TIME_OUT_OF_RANGE: "Visit time is outside the clinic's operating hours",
    ReasonCode.NO_EARLIER_RESCHEDULE: "A visit cannot be moved to an earlier date",
    ReasonCode.SLOT_CONFLICT: "This time overlaps another visit",
    ReasonCode.CAPACITY_EXCEEDED: "No more visits can be booked on this date",
    ReasonCode.NOT_FOUND: "Visit not found",
}


class SchedulingError(Exception):
    """Base error carrying a reason code and the form field it belongs to."""

    def __init__(self, reason: ReasonCode, field: str | None = None, message: str | None = None):
        self.reason = reason
        self.field = field or reason.field
        self.message = message or reason.message
        super().__init__(f"{reason.value}: {self.message}")

    def as_detail(self) -> dict:
        return {"code": self.reason.value, "field": self.field, "message": self.message}


class VisitRejected(SchedulingError):
    pass


class VisitNotFound(SchedulingError):
    def __init__(self, field: str = "visit_id", message: str | None = None):
        super().__init__(ReasonCode.NOT_FOUND, field=field, message=message)
