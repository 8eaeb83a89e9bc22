"""Module: visit_store."""

import uuid
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import delete, func, select, text
from sqlalchemy.orm import Session

from vetclinic.db.models.visit import Visit
from vetclinic.scheduling.errors import VisitNotFound
from vetclinic.scheduling.overlap import BookedSlot
from vetclinic.scheduling.rules import VISIT_DURATION

# First key of the two-int advisory lock, reserved for per-date visit booking.
ADVISORY_LOCK_NAMESPACE = 4242


class VisitStore:
    """Keyed access to stored visits for the scheduling core."""

    def __init__(self, db: Session):
        self.db = db

    def count_visits_on_date(self, visit_date: date, exclude_id: Optional[uuid.UUID] = None) -> int:
        stmt = select(func.count(Visit.visit_id)).where(Visit.visit_date == visit_date)
        if exclude_id is not None:
            stmt = stmt.where(Visit.visit_id != exclude_id)
        return self.db.execute(stmt).scalar_one()

    def find_overlapping_visit(
        self,
        visit_date: date,
        start: time,
        end: time,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> bool:
        # existing.start < end AND start < existing.start + 1h
        # The right-hand side is rewritten as existing.start > start - 1h so the
        # column is compared against plain time parameters on every backend.
        stmt = select(Visit.visit_id).where(Visit.visit_date == visit_date)

        if end > start:
            stmt = stmt.where(Visit.visit_time < end)
        lower = datetime.combine(visit_date, start) - VISIT_DURATION
        if lower.date() == visit_date:
            stmt = stmt.where(Visit.visit_time > lower.time())

        if exclude_id is not None:
            stmt = stmt.where(Visit.visit_id != exclude_id)

        return self.db.execute(stmt.limit(1)).first() is not None

    def list_slots_on_date(self, visit_date: date) -> list[BookedSlot]:
        rows = self.db.execute(
            select(Visit.visit_id, Visit.visit_time)
            .where(Visit.visit_date == visit_date)
            .order_by(Visit.visit_time)
        ).all()
        return [BookedSlot(visit_id=visit_id, start=visit_time) for visit_id, visit_time in rows]

    def load_visit(self, visit_id: uuid.UUID) -> Visit:
        visit = self.db.execute(select(Visit).where(Visit.visit_id == visit_id)).scalar_one_or_none()
        if visit is None:
            raise VisitNotFound()
        return visit

    def save_visit(self, visit: Visit) -> Visit:
        self.db.add(visit)
        self.db.flush()
        return visit

    def delete_visit(self, visit_id: uuid.UUID) -> None:
        self.db.execute(delete(Visit).where(Visit.visit_id == visit_id))

    def lock_dates(self, *days: Optional[date]) -> None:
        """
        Take transaction-scoped advisory locks for the given dates.

        Only PostgreSQL has them; other backends rely on the in-process
        DateLockRegistry alone. Locks are released on commit or rollback.
        """
        if self.db.get_bind().dialect.name != "postgresql":
            return
        for day in sorted({day for day in days if day is not None}):
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(:namespace, :key)"),
                {"namespace": ADVISORY_LOCK_NAMESPACE, "key": day.toordinal()},
            )
