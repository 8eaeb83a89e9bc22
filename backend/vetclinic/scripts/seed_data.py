"""Module: seed_data."""

from faker import Faker
import random
import string
from datetime import timedelta
from sqlalchemy import delete

from vetclinic.core.config import settings
from vetclinic.db.init_db import init_db
from vetclinic.db.session import SessionLocal

from vetclinic.db.models.owner import Owner
from vetclinic.db.models.pet import Pet
from vetclinic.db.models.visit import Visit
from vetclinic.scheduling.errors import VisitRejected
from vetclinic.scheduling.lifecycle import VisitLifecycle

fake = Faker()

# Shared helpers used by multiple seed builders.
def generate_phone() -> str:
    # Domestic mobile format: 8 + 10 digits
    return "8" + "".join(random.choice(string.digits) for _ in range(10))


def generate_passport_number() -> str:
    return fake.unique.bothify(text="VP-####-????").upper()


def reset_db(session) -> None:
    # Keep reset order explicit so FK dependencies clear cleanly.
    session.execute(delete(Visit))
    session.execute(delete(Pet))
    session.execute(delete(Owner))
    session.commit()


def seed_owners(session, n: int = 40) -> list[Owner]:
    owners: list[Owner] = []
    for _ in range(n):
        owners.append(Owner(
            name=f"{fake.first_name()} {fake.last_name()}",
            email=fake.unique.email(),
            phone=generate_phone(),
        ))
    session.add_all(owners)
    session.commit()
    return owners


DOG_BREEDS = [
    "Labrador Retriever",
    "German Shepherd",
    "Golden Retriever",
    "French Bulldog",
    "Poodle",
    "Beagle",
    "Dachshund",
    "Border Collie",
    "Siberian Husky",
    "Boxer",
]

CAT_BREEDS = [
    "Domestic Shorthair",
    "Maine Coon",
    "Ragdoll",
    "Persian",
    "Siamese",
    "Bengal",
    "British Shorthair",
    "Russian Blue",
]

VISIT_POOL = [
    ("Annual check-up", "No treatment required"),
    ("Skin irritation", "Medicated shampoo, twice weekly"),
    ("Limping, front left leg", "Carprofen 25mg twice daily, rest"),
    ("Dental tartar", "Scale and polish under anaesthesia"),
    ("Ear infection", "Ear drops for 10 days"),
    ("Vaccination due", "Booster administered"),
    ("Worm burden", "Deworming tablet"),
]


def seed_pets(session, owners: list[Owner], n: int = 80) -> list[Pet]:
    # Build a mixed dog/cat population spread across owners.
    pets: list[Pet] = []

    for _ in range(n):
        species = random.choice(["Dog", "Cat"])
        breed = random.choice(DOG_BREEDS if species == "Dog" else CAT_BREEDS)

        pets.append(Pet(
            owner_id=random.choice(owners).owner_id,
            name=fake.first_name(),
            species=species,
            breed=breed,
            date_of_birth=fake.date_between(start_date="-10y", end_date="today"),
            passport_number=generate_passport_number(),
        ))

    session.add_all(pets)
    session.commit()
    return pets


def seed_visits(session, pets: list[Pet], days: int = 30) -> tuple[int, int]:
    # Bookings go through the lifecycle so seeded data obeys every scheduling rule.
    rules = settings.clinic_rules()
    lifecycle = VisitLifecycle(session, rules)
    first_day = rules.last_operating_date - timedelta(days=days)
    starts = rules.bookable_starts()

    booked = 0
    refused = 0
    for offset in range(days + 1):
        day = first_day + timedelta(days=offset)
        for _ in range(random.randint(0, rules.daily_capacity + 2)):
            diagnosis, treatment = random.choice(VISIT_POOL)
            try:
                lifecycle.create(
                    random.choice(pets).pet_id,
                    day,
                    random.choice(starts),
                    diagnosis,
                    treatment,
                )
                booked += 1
            except VisitRejected:
                refused += 1

    return booked, refused


if __name__ == "__main__":
    # Full reseed pipeline: python -m vetclinic.scripts.seed_data
    init_db()
    session = SessionLocal()
    try:
        print("Resetting tables...")
        reset_db(session)

        print("Seeding owners (40)...")
        owners = seed_owners(session, 40)

        print("Seeding pets (80)...")
        pets = seed_pets(session, owners, 80)

        print("Seeding visits...")
        visit_n, refused_n = seed_visits(session, pets)

        print(f"Done. owners={len(owners)}, pets={len(pets)}, visits={visit_n}, refused_bookings={refused_n}")
    finally:
        session.close()
