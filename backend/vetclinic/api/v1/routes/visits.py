"""Module: visits."""

from datetime import date, time
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from vetclinic.api.v1.routes.deps import get_clinic_rules, get_db
from vetclinic.db.models.pet import Pet
from vetclinic.db.models.visit import Visit
from vetclinic.db.visit_store import VisitStore
from vetclinic.scheduling.availability import describe_day
from vetclinic.scheduling.errors import ReasonCode, SchedulingError
from vetclinic.scheduling.lifecycle import VisitLifecycle
from vetclinic.scheduling.rules import ClinicRules


# Date/time are optional here so a missing value reaches the validator and
# comes back as MISSING_FIELD rather than a generic body error.
class VisitCreatePayload(BaseModel):
    pet_id: str
    visit_date: date | None = None
    visit_time: time | None = None
    diagnosis: str | None = None
    treatment: str | None = None


class VisitReschedulePayload(BaseModel):
    visit_date: date | None = None
    visit_time: time | None = None
    # Accepted for form compatibility; never applied to the stored visit.
    diagnosis: str | None = None
    treatment: str | None = None
    pet_id: str | None = None

router = APIRouter()

# HTTP status for each reason code; anything not listed is a 422.
STATUS_BY_REASON = {
    ReasonCode.NOT_FOUND: 404,
    ReasonCode.SLOT_CONFLICT: 409,
    ReasonCode.CAPACITY_EXCEEDED: 409,
}


# Validate and coerce UUID inputs from query/path payloads.
def _parse_uuid(value: str, field_name: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} (must be UUID)")


def _http_error(exc: SchedulingError) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_REASON.get(exc.reason, 422), detail=exc.as_detail())


def _serialize_visit(visit: Visit) -> dict:
    return {
        "id": str(visit.visit_id),
        "pet_id": str(visit.pet_id),
        "visit_date": visit.visit_date,
        "visit_time": visit.visit_time,
        "diagnosis": visit.diagnosis,
        "treatment": visit.treatment,
    }


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("", summary="List visits")
def list_visits(
    limit: int = 200,
    offset: int = 0,
    visit_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
):
    stmt = (
        select(
            Visit.visit_id.label("id"),
            Visit.pet_id.label("pet_id"),
            Visit.visit_date.label("visit_date"),
            Visit.visit_time.label("visit_time"),
            Visit.diagnosis.label("diagnosis"),
            Visit.treatment.label("treatment"),
            Pet.name.label("pet_name"),
            Pet.species.label("pet_species"),
        )
        .select_from(Visit)
        .join(Pet, Pet.pet_id == Visit.pet_id)
        .order_by(Visit.visit_date, Visit.visit_time)
    )

    if visit_date:
        stmt = stmt.where(Visit.visit_date == visit_date)

    rows = db.execute(stmt.offset(offset).limit(limit)).mappings().all()

    out = []
    for r in rows:
        d = dict(r)
        d["id"] = str(d["id"])
        d["pet_id"] = str(d["pet_id"])
        out.append(d)
    return out


# Endpoint: bookable hourly starts for one date, for the booking form.
@router.get("/availability", summary="Bookable slots for a date")
def visit_availability(
    visit_date: date = Query(...),
    db: Session = Depends(get_db),
    rules: ClinicRules = Depends(get_clinic_rules),
):
    return describe_day(VisitStore(db), rules, visit_date)


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("/{visit_id}", summary="Get a visit")
def get_visit(visit_id: str, db: Session = Depends(get_db)):
    vid = _parse_uuid(visit_id, "visit_id")
    try:
        visit = VisitStore(db).load_visit(vid)
    except SchedulingError as exc:
        raise _http_error(exc)
    return _serialize_visit(visit)


# Endpoint: book a new visit.
@router.post("", status_code=201, summary="Create a visit")
def create_visit(
    payload: VisitCreatePayload,
    db: Session = Depends(get_db),
    rules: ClinicRules = Depends(get_clinic_rules),
):
    pet_id = _parse_uuid(payload.pet_id, "pet_id")
    try:
        visit = VisitLifecycle(db, rules).create(
            pet_id,
            payload.visit_date,
            payload.visit_time,
            payload.diagnosis,
            payload.treatment,
        )
    except SchedulingError as exc:
        raise _http_error(exc)
    return _serialize_visit(visit)


# Endpoint: move a visit to a new date/time.
@router.put("/{visit_id}", summary="Reschedule a visit")
def reschedule_visit(
    visit_id: str,
    payload: VisitReschedulePayload,
    db: Session = Depends(get_db),
    rules: ClinicRules = Depends(get_clinic_rules),
):
    vid = _parse_uuid(visit_id, "visit_id")
    submitted_pet = _parse_uuid(payload.pet_id, "pet_id") if payload.pet_id else None
    try:
        visit = VisitLifecycle(db, rules).reschedule(
            vid,
            payload.visit_date,
            payload.visit_time,
            diagnosis=payload.diagnosis,
            treatment=payload.treatment,
            pet_id=submitted_pet,
        )
    except SchedulingError as exc:
        raise _http_error(exc)
    return _serialize_visit(visit)


# Endpoint: handles HTTP request/response mapping for this route.
@router.delete("/{visit_id}", status_code=204, summary="Delete a visit")
def delete_visit(
    visit_id: str,
    db: Session = Depends(get_db),
    rules: ClinicRules = Depends(get_clinic_rules),
):
    vid = _parse_uuid(visit_id, "visit_id")
    try:
        VisitLifecycle(db, rules).delete(vid)
    except SchedulingError as exc:
        raise _http_error(exc)
