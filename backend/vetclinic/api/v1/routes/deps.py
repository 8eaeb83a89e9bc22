"""Module: deps."""

from typing import Generator
from sqlalchemy.orm import Session

from vetclinic.core.config import settings
from vetclinic.db.session import SessionLocal
from vetclinic.scheduling.rules import ClinicRules

# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Dependency provider: clinic scheduling limits from settings.
def get_clinic_rules() -> ClinicRules:
    return settings.clinic_rules()
