from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    physiotherapist_id: Mapped[int] = mapped_column(
        ForeignKey("physiotherapists.id", ondelete="CASCADE"), nullable=False, index=True
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    pesel: Mapped[str | None] = mapped_column(String(11), nullable=True)
    born_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(6), nullable=True)
    address_street: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address_postcode: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Emergency / secondary contact.
    contact_person_first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person_last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person_address_street: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person_address_postcode: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    contact_person_address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person_email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person_phone: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


# Columns a client may request through `fields`. Kept literal rather than read from
# `Patient.__table__` so new columns are not exposed implicitly.
PATIENT_FIELDS: tuple[str, ...] = (
    "id",
    "physiotherapist_id",
    "first_name",
    "last_name",
    "pesel",
    "born_date",
    "gender",
    "address_street",
    "address_postcode",
    "address_city",
    "email",
    "phone",
    "contact_person_first_name",
    "contact_person_last_name",
    "contact_person_address_street",
    "contact_person_address_postcode",
    "contact_person_address_city",
    "contact_person_email",
    "contact_person_phone",
    "created_at",
    "updated_at",
)
