"""Seed a demo physiotherapist and patients for local development.

Safe to run repeatedly:
- It only runs when APP_ENV=development
- It inserts rows only when the physiotherapists table is empty
- It always prints a fresh access token for the demo physiotherapist
"""

# ruff: noqa: I001
# pyright: reportMissingImports=false
from __future__ import annotations

import asyncio
import os
from datetime import date

from sqlalchemy import select

from app.core.db import create_engine, create_sessionmaker
from app.core.security import create_access_token
from app.patients.models import Patient
from app.physiotherapists.models import Physiotherapist

DEMO_EMAIL = "demo.physio@example.com"


def _seed_patient_rows() -> list[dict]:
    """Return a deterministic set of patient seed rows."""
    return [
        {
            "first_name": "Jan",
            "last_name": "Kowalski",
            "pesel": "83040782934",
            "born_date": date(1983, 4, 7),
            "gender": "male",
            "address_street": "Prosta 12",
            "address_postcode": "12-456",
            "address_city": "Sosnowiec",
            "email": "jan.kowalski@example.com",
            "phone": "501501501",
            "contact_person_first_name": "Anna",
            "contact_person_last_name": "Kowalska",
            "contact_person_address_street": "Prosta 12",
            "contact_person_address_postcode": "12-456",
            "contact_person_address_city": "Sosnowiec",
            "contact_person_email": "anna.kowalska@example.com",
            "contact_person_phone": "502502502",
        },
        {"first_name": "Maria", "last_name": "Nowak", "gender": "female"},
        {"first_name": "Piotr", "last_name": "Wiśniewski", "born_date": date(1944, 5, 14)},
        {"first_name": "Katarzyna", "last_name": "Wójcik", "address_city": "Kraków"},
        {"first_name": "Tomasz", "last_name": "Kamiński", "phone": "600100200"},
        {"first_name": "Agnieszka", "last_name": "Lewandowska", "gender": "female"},
        {"first_name": "Paweł", "last_name": "Zieliński", "address_city": "Gdańsk"},
        {"first_name": "Magdalena", "last_name": "Szymańska", "born_date": date(1990, 2, 1)},
        {"first_name": "Michał", "last_name": "Woźniak", "gender": "male"},
        {"first_name": "Ewa", "last_name": "Dąbrowska", "email": "ewa.dabrowska@example.com"},
        {"first_name": "Krzysztof", "last_name": "Kozłowski", "address_city": "Poznań"},
        {"first_name": "Joanna", "last_name": "Jankowska", "gender": "female"},
    ]


async def seed_if_empty(*, database_url: str) -> int:
    """Seed the demo owner with patients when no owner exists; return the owner id."""
    engine = create_engine(database_url=database_url)
    sessionmaker = create_sessionmaker(engine=engine)

    async with sessionmaker() as session:
        owner = (
            await session.execute(
                select(Physiotherapist).where(Physiotherapist.email == DEMO_EMAIL)
            )
        ).scalar_one_or_none()
        if owner is not None:
            print(f"Seed skipped: demo physiotherapist already exists (id={owner.id}).")
            await engine.dispose()
            return owner.id

        owner = Physiotherapist(email=DEMO_EMAIL, first_name="Demo", last_name="Physio")
        session.add(owner)
        await session.flush()

        patients = [Patient(physiotherapist_id=owner.id, **row) for row in _seed_patient_rows()]
        session.add_all(patients)
        await session.commit()
        print(f"Seeded physiotherapist id={owner.id} with {len(patients)} patients.")
        owner_id = owner.id

    await engine.dispose()
    return owner_id


def main() -> None:
    """Entry point."""
    app_env = os.getenv("APP_ENV", "production").strip().lower()
    if app_env != "development":
        print(f"Seed skipped: APP_ENV={app_env!r} (seeding only runs in development).")
        return

    database_url = os.getenv("DATABASE_URL", "")
    if not database_url:
        raise SystemExit("DATABASE_URL is not set")

    owner_id = asyncio.run(seed_if_empty(database_url=database_url))
    print(f"Access token: {create_access_token(owner_id=owner_id)}")


if __name__ == "__main__":
    main()
