"""
Visit Lifecycle Manager

Creates, reschedules and deletes visits. Each operation reads the target
date's bookings, asks the validator for a decision and writes the result
inside one per-date serialization boundary:
    - in-process: DateLockRegistry (threading.Lock per date)
    - cross-process: VisitStore.lock_dates (PostgreSQL advisory locks)
A rejected request rolls back and leaves stored visits untouched.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import date, time
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from vetclinic.db.models.pet import Pet
from vetclinic.db.models.visit import Visit
from vetclinic.db.visit_store import VisitStore
from vetclinic.scheduling.errors import ReasonCode, VisitNotFound, VisitRejected
from vetclinic.scheduling.locks import DateLockRegistry, date_locks
from vetclinic.scheduling.rules import ClinicRules
from vetclinic.scheduling.validator import CurrentSlot, Reject, evaluate

logger = logging.getLogger(__name__)


def _require_text(value: Optional[str], field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise VisitRejected(ReasonCode.MISSING_FIELD, field=field)
    return cleaned


class VisitLifecycle:
    def __init__(self, db: Session, rules: ClinicRules, locks: DateLockRegistry = date_locks):
        self.db = db
        self.rules = rules
        self.locks = locks
        self.store = VisitStore(db)

    @contextmanager
    def _serialized(self, *days: Optional[date]) -> Iterator[None]:
        with self.locks.hold(*days):
            try:
                self.store.lock_dates(*days)
                yield
            except Exception:
                self.db.rollback()
                raise

    def _reject(self, decision: Reject, action: str) -> VisitRejected:
        logger.info("%s rejected: %s (%s)", action, decision.reason.value, decision.field)
        return VisitRejected(decision.reason, field=decision.field)

    def create(
        self,
        pet_id: uuid.UUID,
        visit_date: Optional[date],
        visit_time: Optional[time],
        diagnosis: Optional[str],
        treatment: Optional[str],
    ) -> Visit:
        diagnosis = _require_text(diagnosis, "diagnosis")
        treatment = _require_text(treatment, "treatment")

        pet = self.db.execute(select(Pet.pet_id).where(Pet.pet_id == pet_id)).scalar_one_or_none()
        if pet is None:
            raise VisitNotFound(field="pet_id", message="Pet not found")

        with self._serialized(visit_date):
            booked = self.store.list_slots_on_date(visit_date) if visit_date is not None else []
            decision = evaluate(visit_date, visit_time, booked, self.rules)
            if isinstance(decision, Reject):
                raise self._reject(decision, "create")

            visit = self.store.save_visit(
                Visit(
                    pet_id=pet_id,
                    visit_date=decision.visit_date,
                    visit_time=decision.visit_time,
                    diagnosis=diagnosis,
                    treatment=treatment,
                )
            )
            self.db.commit()

        logger.info("visit %s booked for %s %s", visit.visit_id, visit.visit_date, visit.visit_time)
        return visit

    def reschedule(
        self,
        visit_id: uuid.UUID,
        new_date: Optional[date],
        new_time: Optional[time],
        diagnosis: Optional[str] = None,
        treatment: Optional[str] = None,
        pet_id: Optional[uuid.UUID] = None,
    ) -> Visit:
        """
        Move a visit to a new date/time.

        ``diagnosis``, ``treatment`` and ``pet_id`` are accepted because edit
        forms post the whole record, but they are never applied: after the
        stored visit is loaded its own values are copied back over whatever
        the caller sent.
        """
        stored_date = self.store.load_visit(visit_id).visit_date

        with self._serialized(stored_date, new_date):
            visit = self.store.load_visit(visit_id)
            self.db.refresh(visit)

            # Protected fields come from the stored record, never from the request.
            if (diagnosis, treatment, pet_id) != (None, None, None):
                logger.debug("visit %s: ignoring submitted diagnosis/treatment/pet on reschedule", visit_id)
            diagnosis, treatment, pet_id = visit.diagnosis, visit.treatment, visit.pet_id

            current = CurrentSlot(visit_id=visit.visit_id, visit_date=visit.visit_date, visit_time=visit.visit_time)
            booked = self.store.list_slots_on_date(new_date) if new_date is not None else []
            decision = evaluate(new_date, new_time, booked, self.rules, current=current)
            if isinstance(decision, Reject):
                raise self._reject(decision, "reschedule")

            visit.visit_date = decision.visit_date
            visit.visit_time = decision.visit_time
            visit.diagnosis = diagnosis
            visit.treatment = treatment
            visit.pet_id = pet_id
            self.store.save_visit(visit)
            self.db.commit()

        logger.info(
            "visit %s moved from %s %s to %s %s",
            visit_id, current.visit_date, current.visit_time, visit.visit_date, visit.visit_time,
        )
        return visit

    def delete(self, visit_id: uuid.UUID) -> None:
        visit_date = self.store.load_visit(visit_id).visit_date

        with self._serialized(visit_date):
            self.store.load_visit(visit_id)
            self.store.delete_visit(visit_id)
            self.db.commit()

        logger.info("visit %s deleted", visit_id)
