from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.metrics import record_patient_operation
from app.domain.exceptions import InvalidFieldSelectionError, NotFoundError
from app.patients.models import PATIENT_FIELDS, Patient
from app.patients.pagination import offset_for
from app.patients.schemas import PatientIn, PatientOut

logger = logging.getLogger("app.patients")

_ALLOWED_FIELDS = frozenset(PATIENT_FIELDS)

# `patients.id` is a 32-bit INTEGER; larger ids cannot exist and would fail to bind.
MAX_PATIENT_ID = 2**31 - 1


def parse_field_selection(raw: str | None) -> tuple[str, ...] | None:
    """Split a comma separated `fields` value and check it against the allow-list.

    Returns None when no selection was requested. Raises before any query is built.
    """

    if raw is None or not raw.strip():
        return None

    requested = [name.strip() for name in raw.split(",")]
    invalid = [name for name in requested if name not in _ALLOWED_FIELDS]
    if invalid:
        raise InvalidFieldSelectionError(invalid)

    # Keep the client's order, drop duplicates.
    return tuple(dict.fromkeys(requested))


def _owned_filters(*, owner_id: int, query: str | None) -> list[ColumnElement[bool]]:
    filters: list[ColumnElement[bool]] = [Patient.physiotherapist_id == owner_id]
    if query:
        full_name = Patient.first_name + " " + Patient.last_name
        # Bound parameter; LIKE wildcards in the term are escaped and match literally.
        filters.append(full_name.contains(query, autoescape=True))
    return filters


async def _fetch_rows(
    *,
    session: AsyncSession,
    filters: list[ColumnElement[bool]],
    fields: tuple[str, ...] | None,
    limit: int | None = None,
    offset: int | None = None,
) -> list[dict[str, Any]]:
    if fields is None:
        stmt = select(Patient).where(*filters).order_by(Patient.id.asc())
    else:
        columns = [Patient.__table__.c[name] for name in fields]
        stmt = select(*columns).where(*filters).order_by(Patient.id.asc())
    if limit is not None:
        stmt = stmt.limit(limit).offset(offset or 0)

    result = await session.execute(stmt)
    if fields is None:
        return [PatientOut.model_validate(p).model_dump(mode="json") for p in result.scalars()]
    return [dict(row) for row in result.mappings()]


async def list_patients(
    *,
    session: AsyncSession,
    owner_id: int,
    query: str | None = None,
    fields: tuple[str, ...] | None = None,
) -> list[dict[str, Any]]:
    """Every patient of `owner_id` matching `query`, ordered by id."""

    filters = _owned_filters(owner_id=owner_id, query=query)
    return await _fetch_rows(session=session, filters=filters, fields=fields)


async def paginate_patients(
    *,
    session: AsyncSession,
    owner_id: int,
    page: int,
    per_page: int,
    query: str | None = None,
    fields: tuple[str, ...] | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """One page of the owner's patients plus the total number of matches."""

    filters = _owned_filters(owner_id=owner_id, query=query)
    total_stmt = select(func.count(Patient.id)).where(*filters)
    total = int((await session.execute(total_stmt)).scalar_one())

    items: list[dict[str, Any]] = []
    if total:
        items = await _fetch_rows(
            session=session,
            filters=filters,
            fields=fields,
            limit=per_page,
            offset=offset_for(page=page, per_page=per_page),
        )
    return items, total


async def get_patient(*, session: AsyncSession, owner_id: int, patient_id: int) -> Patient:
    if not 1 <= patient_id <= MAX_PATIENT_ID:
        raise NotFoundError()

    stmt = select(Patient).where(
        Patient.id == patient_id,
        Patient.physiotherapist_id == owner_id,
    )
    patient = (await session.execute(stmt)).scalar_one_or_none()
    if patient is None:
        raise NotFoundError()
    return patient


async def create_patient(*, session: AsyncSession, owner_id: int, payload: PatientIn) -> Patient:
    patient = Patient(physiotherapist_id=owner_id, **payload.model_dump())
    session.add(patient)
    await session.commit()
    await session.refresh(patient)

    record_patient_operation("create")
    logger.info(
        "Patient created",
        extra={"owner_id": owner_id, "patient_id": patient.id, "operation": "create"},
    )
    return patient


async def update_patient(*, session: AsyncSession, patient: Patient, payload: PatientIn) -> Patient:
    """Overwrite the fields present in the payload; omitted optional fields are kept."""

    for name, value in payload.model_dump(exclude_unset=True).items():
        setattr(patient, name, value)

    await session.commit()
    await session.refresh(patient)

    record_patient_operation("update")
    logger.info(
        "Patient updated",
        extra={
            "owner_id": patient.physiotherapist_id,
            "patient_id": patient.id,
            "operation": "update",
        },
    )
    return patient


async def delete_patient(*, session: AsyncSession, patient: Patient) -> None:
    owner_id, patient_id = patient.physiotherapist_id, patient.id
    await session.delete(patient)
    await session.commit()

    record_patient_operation("delete")
    logger.info(
        "Patient deleted",
        extra={"owner_id": owner_id, "patient_id": patient_id, "operation": "delete"},
    )
