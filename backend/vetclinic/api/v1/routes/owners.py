"""Module: owners."""

import re
import uuid

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vetclinic.api.v1.routes.deps import get_db
from vetclinic.db.models.owner import Owner
from vetclinic.db.models.pet import Pet

router = APIRouter()

# Letters (Latin or Cyrillic), spaces and hyphens.
NAME_PATTERN = re.compile(r"^[A-Za-zА-Яа-яЁё\s-]+$")
# Domestic mobile format: leading 8 followed by ten digits.
PHONE_PATTERN = re.compile(r"^8\d{10}$")

OWNER_HAS_PETS = "Cannot delete an owner who still has pets"


# Validate and coerce UUID inputs from query/path payloads.
def _parse_uuid(value: str, field_name: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} (must be UUID)")


def _get_owner_or_404(db: Session, owner_id: uuid.UUID) -> Owner:
    owner = db.execute(select(Owner).where(Owner.owner_id == owner_id)).scalar_one_or_none()
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")
    return owner


class OwnerPayload(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    phone: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not NAME_PATTERN.match(cleaned):
            raise ValueError("name may contain only letters, spaces and hyphens")
        return cleaned

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        cleaned = value.strip()
        if not PHONE_PATTERN.match(cleaned):
            raise ValueError("phone must start with 8 and contain exactly 11 digits")
        return cleaned


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="An owner with this email already exists")


def _serialize_owner(owner: Owner) -> dict:
    return {
        "id": str(owner.owner_id),
        "name": owner.name,
        "email": owner.email,
        "phone": owner.phone,
    }


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("", summary="List owners (simple)")
def list_owners(limit: int = 200, offset: int = 0, db: Session = Depends(get_db)):
    pet_count_sq = (
        select(func.count(Pet.pet_id))
        .where(Pet.owner_id == Owner.owner_id)
        .scalar_subquery()
    )
    rows = db.execute(
        select(
            Owner.owner_id.label("id"),
            Owner.name.label("name"),
            Owner.email.label("email"),
            Owner.phone.label("phone"),
            pet_count_sq.label("pet_count"),
        )
        .order_by(Owner.name)
        .offset(offset)
        .limit(limit)
    ).mappings().all()

    out = []
    for r in rows:
        d = dict(r)
        d["id"] = str(d["id"])
        out.append(d)
    return out


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("/{owner_id}", summary="Get an owner")
def get_owner(owner_id: str, db: Session = Depends(get_db)):
    owner = _get_owner_or_404(db, _parse_uuid(owner_id, "owner_id"))
    return _serialize_owner(owner)


# Endpoint: handles HTTP request/response mapping for this route.
@router.post("", status_code=201, summary="Create an owner")
def create_owner(payload: OwnerPayload, db: Session = Depends(get_db)):
    owner = Owner(name=payload.name, email=str(payload.email), phone=payload.phone)
    db.add(owner)
    _commit_or_conflict(db)
    db.refresh(owner)
    return _serialize_owner(owner)


# Endpoint: handles HTTP request/response mapping for this route.
@router.put("/{owner_id}", summary="Update an owner")
def update_owner(owner_id: str, payload: OwnerPayload, db: Session = Depends(get_db)):
    owner = _get_owner_or_404(db, _parse_uuid(owner_id, "owner_id"))
    owner.name = payload.name
    owner.email = str(payload.email)
    owner.phone = payload.phone
    _commit_or_conflict(db)
    db.refresh(owner)
    return _serialize_owner(owner)


# Endpoint: handles HTTP request/response mapping for this route.
@router.delete("/{owner_id}", status_code=204, summary="Delete an owner")
def delete_owner(owner_id: str, db: Session = Depends(get_db)):
    owner = _get_owner_or_404(db, _parse_uuid(owner_id, "owner_id"))

    pet_count = db.execute(
        select(func.count(Pet.pet_id)).where(Pet.owner_id == owner.owner_id)
    ).scalar_one()
    if pet_count:
        raise HTTPException(status_code=409, detail=OWNER_HAS_PETS)

    db.delete(owner)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=OWNER_HAS_PETS)
