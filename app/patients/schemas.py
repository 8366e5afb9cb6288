from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Any, Literal

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)

from app.patients.pesel import is_valid_pesel

Gender = Literal["male", "female"]
ShortText = Annotated[str, StringConstraints(min_length=1, max_length=100)]

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _normalize_value(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class PatientIn(BaseModel):
    """Patient payload shared by create and update.

    Strings are trimmed and empty strings count as null before any rule runs, so
    `{"first_name": "  "}` fails the same way as a missing first name.
    Unknown keys (including `id` and `physiotherapist_id`) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: ShortText = Field(description="First name of the patient.", examples=["Jan"])
    last_name: ShortText = Field(description="Last name of the patient.", examples=["Kowalski"])
    pesel: str | None = Field(
        default=None,
        description="PESEL number (11 digits, checksum verified).",
        examples=["83040782934"],
    )
    born_date: date | None = Field(
        default=None, description="Birth date (YYYY-MM-DD).", examples=["1983-04-07"]
    )
    gender: Gender | None = Field(default=None, examples=["male"])
    address_street: ShortText | None = Field(default=None, examples=["Prosta 12"])
    address_postcode: ShortText | None = Field(default=None, examples=["12-456"])
    address_city: ShortText | None = Field(default=None, examples=["Sosnowiec"])
    email: ShortText | None = Field(default=None, examples=["jan.kowalski@example.com"])
    phone: ShortText | None = Field(default=None, examples=["501501501"])

    contact_person_first_name: ShortText | None = Field(default=None, examples=["Anna"])
    contact_person_last_name: ShortText | None = Field(default=None, examples=["Kowalska"])
    contact_person_address_street: ShortText | None = Field(default=None, examples=["Prosta 12"])
    contact_person_address_postcode: ShortText | None = Field(default=None, examples=["12-456"])
    contact_person_address_city: ShortText | None = Field(default=None, examples=["Sosnowiec"])
    contact_person_email: ShortText | None = Field(
        default=None, examples=["anna.kowalska@example.com"]
    )
    contact_person_phone: ShortText | None = Field(default=None, examples=["502502502"])

    @model_validator(mode="before")
    @classmethod
    def _normalize_strings(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: _normalize_value(value) for key, value in data.items()}
        return data

    @field_validator("pesel")
    @classmethod
    def _check_pesel(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_pesel(value):
            raise ValueError("Invalid PESEL number")
        return value

    @field_validator("born_date", mode="before")
    @classmethod
    def _require_iso_date(cls, value: Any) -> Any:
        # Lax date parsing would take numbers (and numeric strings) as unix timestamps.
        if value is not None and not (isinstance(value, str) and ISO_DATE.fullmatch(value)):
            raise ValueError("Date must be a YYYY-MM-DD string")
        return value

    @field_validator("email", "contact_person_email")
    @classmethod
    def _check_email(cls, value: str | None) -> str | None:
        # Syntax check only; the address is stored exactly as sent.
        if value is None:
            return value
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"Invalid e-mail address: {exc}") from exc
        return value


class PatientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Patient identifier.")
    physiotherapist_id: int = Field(description="Owner identifier.")
    first_name: str
    last_name: str
    pesel: str | None = None
    born_date: date | None = None
    gender: Gender | None = None
    address_street: str | None = None
    address_postcode: str | None = None
    address_city: str | None = None
    email: str | None = None
    phone: str | None = None
    contact_person_first_name: str | None = None
    contact_person_last_name: str | None = None
    contact_person_address_street: str | None = None
    contact_person_address_postcode: str | None = None
    contact_person_address_city: str | None = None
    contact_person_email: str | None = None
    contact_person_phone: str | None = None
    created_at: datetime = Field(description="Record creation timestamp.")
    updated_at: datetime = Field(description="Record last update timestamp.")


class PatientPageOut(BaseModel):
    """Length-aware page of patients. Links keep every query parameter except `page`."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(examples=[1])
    data: list[dict[str, Any]] = Field(
        description="Patients on this page; only the selected columns when `fields` is used."
    )
    first_page_url: str
    from_: int | None = Field(alias="from", description="1-based index of the first item.")
    last_page: int = Field(examples=[1])
    last_page_url: str
    next_page_url: str | None = None
    path: str = Field(description="List URL without query string.")
    per_page: int = Field(examples=[10])
    prev_page_url: str | None = None
    to: int | None = Field(description="1-based index of the last item.")
    total: int = Field(description="Number of matching patients across all pages.")
