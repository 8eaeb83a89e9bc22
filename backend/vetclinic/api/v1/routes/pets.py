"""Module: pets."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vetclinic.api.v1.routes.deps import get_db
from vetclinic.db.models.owner import Owner
from vetclinic.db.models.pet import Pet
from vetclinic.db.models.visit import Visit

router = APIRouter()

PET_HAS_VISITS = "Cannot delete a pet that has visits"


class PetPayload(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    species: str = Field(min_length=1, max_length=60)
    breed: str = Field(min_length=1, max_length=60)
    date_of_birth: date
    passport_number: str = Field(min_length=1, max_length=60)

    @field_validator("name", "species", "breed", "passport_number")
    @classmethod
    def _strip(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("date of birth cannot be in the future")
        return value


class PetCreatePayload(PetPayload):
    owner_id: str


# Owner is fixed at creation; an edit form may still post it.
class PetUpdatePayload(PetPayload):
    owner_id: str | None = None


# -------------------------
# Helpers
# -------------------------
def _parse_uuid(value: str, field_name: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} (must be UUID)")


def _get_pet_or_404(db: Session, pet_id: uuid.UUID) -> Pet:
    pet = db.execute(select(Pet).where(Pet.pet_id == pet_id)).scalar_one_or_none()
    if not pet:
        raise HTTPException(status_code=404, detail="Pet not found")
    return pet


def _commit_or_conflict(db: Session) -> None:
    # passport_number is unique; report a duplicate instead of a 500.
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="A pet with this passport number already exists")


def _count_visits(db: Session, pet_id: uuid.UUID) -> int:
    return db.execute(select(func.count(Visit.visit_id)).where(Visit.pet_id == pet_id)).scalar_one()


def _serialize_pet(pet: Pet) -> dict:
    return {
        "id": str(pet.pet_id),
        "owner_id": str(pet.owner_id),
        "name": pet.name,
        "species": pet.species,
        "breed": pet.breed,
        "date_of_birth": pet.date_of_birth,
        "passport_number": pet.passport_number,
    }


# -------------------------
# Endpoints
# -------------------------

@router.get("", summary="List pets (with owner info)")
def list_pets(
    limit: int = 200,
    offset: int = 0,
    owner_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    stmt = (
        select(
            Pet.pet_id.label("id"),
            Pet.name.label("name"),
            Pet.species.label("species"),
            Pet.breed.label("breed"),
            Pet.date_of_birth.label("date_of_birth"),
            Pet.passport_number.label("passport_number"),
            Owner.owner_id.label("owner_id"),
            Owner.name.label("owner_name"),
            Owner.email.label("owner_email"),
            Owner.phone.label("owner_phone"),
        )
        .select_from(Pet)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .order_by(Pet.name)
    )

    if owner_id:
        oid = _parse_uuid(owner_id, "owner_id")
        stmt = stmt.where(Owner.owner_id == oid)

    rows = db.execute(stmt.offset(offset).limit(limit)).mappings().all()

    out = []
    for r in rows:
        d = dict(r)
        d["id"] = str(d["id"])
        d["owner_id"] = str(d["owner_id"])
        out.append(d)
    return out


@router.get("/{pet_id}", summary="Get a pet")
def get_pet(pet_id: str, db: Session = Depends(get_db)):
    pet = _get_pet_or_404(db, _parse_uuid(pet_id, "pet_id"))
    return _serialize_pet(pet)


@router.post("", status_code=201, summary="Create a pet")
def create_pet(payload: PetCreatePayload, db: Session = Depends(get_db)):
    owner_id = _parse_uuid(payload.owner_id, "owner_id")
    owner = db.execute(select(Owner.owner_id).where(Owner.owner_id == owner_id)).scalar_one_or_none()
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")

    pet = Pet(
        owner_id=owner_id,
        name=payload.name,
        species=payload.species,
        breed=payload.breed,
        date_of_birth=payload.date_of_birth,
        passport_number=payload.passport_number,
    )
    db.add(pet)
    _commit_or_conflict(db)
    db.refresh(pet)
    return _serialize_pet(pet)


@router.put("/{pet_id}", summary="Update a pet")
def update_pet(pet_id: str, payload: PetUpdatePayload, db: Session = Depends(get_db)):
    pet = _get_pet_or_404(db, _parse_uuid(pet_id, "pet_id"))

    # owner_id from the payload is ignored; the stored owner stays.
    pet.name = payload.name
    pet.species = payload.species
    pet.breed = payload.breed
    pet.date_of_birth = payload.date_of_birth
    pet.passport_number = payload.passport_number
    _commit_or_conflict(db)
    db.refresh(pet)
    return _serialize_pet(pet)


@router.delete("/{pet_id}", status_code=204, summary="Delete a pet")
def delete_pet(pet_id: str, db: Session = Depends(get_db)):
    pet = _get_pet_or_404(db, _parse_uuid(pet_id, "pet_id"))

    if _count_visits(db, pet.pet_id):
        raise HTTPException(status_code=409, detail=PET_HAS_VISITS)

    # A visit booked after the count still trips the RESTRICT foreign key.
    db.delete(pet)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=PET_HAS_VISITS)
