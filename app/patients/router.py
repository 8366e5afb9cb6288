from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import Envelope, ErrorEnvelope, envelope_response
from app.core.db import get_session
from app.core.security import get_current_owner
from app.core.settings import get_settings
from app.patients.pagination import build_page
from app.patients.schemas import PatientIn, PatientOut, PatientPageOut
from app.patients.service import (
    create_patient,
    delete_patient,
    get_patient,
    list_patients,
    paginate_patients,
    parse_field_selection,
    update_patient,
)
from app.physiotherapists.models import Physiotherapist

_FAILURES: dict[int | str, dict[str, Any]] = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorEnvelope, "description": "Missing/invalid token"},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {
        "model": ErrorEnvelope,
        "description": "Field-keyed validation messages",
    },
}
_NOT_FOUND: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorEnvelope, "description": "Patient not found"},
}

router = APIRouter(prefix="/api/patients", tags=["patients"], responses=_FAILURES)


def _patient_data(patient: Any) -> dict[str, Any]:
    return PatientOut.model_validate(patient).model_dump(mode="json")


@router.get(
    "",
    response_model=Envelope[PatientPageOut | list[PatientOut]],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorEnvelope}},
    summary="List patients",
    description=(
        "Patients of the authenticated physiotherapist.\n\n"
        "- `query`: case-sensitive substring of `first_name last_name`\n"
        "- `paginate`: when true, return a page of fixed size instead of the full list\n"
        "- `fields`: comma separated columns to return; unknown columns are rejected"
    ),
)
async def get_patients(
    request: Request,
    query: str | None = Query(default=None, description="Filter by first and last name."),
    page: int = Query(default=1, ge=1, description="Page number (with `paginate`)."),
    paginate: bool = Query(default=False, description="Return a paginated page (1 or 0)."),
    fields: str | None = Query(default=None, examples=["first_name,last_name"]),
    owner: Physiotherapist = Depends(get_current_owner),
    session: AsyncSession = Depends(get_session),
) -> JSONResponse:
    selected = parse_field_selection(fields)

    if not paginate:
        items = await list_patients(
            session=session, owner_id=owner.id, query=query, fields=selected
        )
        return envelope_response(message_key="patients_listed", data=items)

    per_page = get_settings().patients_per_page
    items, total = await paginate_patients(
        session=session,
        owner_id=owner.id,
        query=query,
        fields=selected,
        page=page,
        per_page=per_page,
    )
    page_out = build_page(
        items=items,
        total=total,
        page=page,
        per_page=per_page,
        path=str(request.url.replace(query="")),
        params=request.query_params.multi_items(),
    )
    return envelope_response(
        message_key="patients_listed", data=page_out.model_dump(mode="json", by_alias=True)
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[PatientOut],
    summary="Create patient",
)
async def create_patient_route(
    payload: PatientIn,
    owner: Physiotherapist = Depends(get_current_owner),
    session: AsyncSession = Depends(get_session),
) -> JSONResponse:
    patient = await create_patient(session=session, owner_id=owner.id, payload=payload)
    return envelope_response(
        message_key="patient_created",
        data=_patient_data(patient),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "/{patient_id}",
    response_model=Envelope[PatientOut],
    responses=_NOT_FOUND,
    summary="Get patient",
)
async def get_patient_by_id(
    patient_id: int,
    owner: Physiotherapist = Depends(get_current_owner),
    session: AsyncSession = Depends(get_session),
) -> JSONResponse:
    patient = await get_patient(session=session, owner_id=owner.id, patient_id=patient_id)
    return envelope_response(message_key="patient_shown", data=_patient_data(patient))


@router.api_route(
    "/{patient_id}",
    methods=["PUT", "PATCH"],
    response_model=Envelope[PatientOut],
    responses=_NOT_FOUND,
    summary="Update patient",
)
async def update_patient_by_id(
    patient_id: int,
    payload: PatientIn,
    owner: Physiotherapist = Depends(get_current_owner),
    session: AsyncSession = Depends(get_session),
) -> JSONResponse:
    patient = await get_patient(session=session, owner_id=owner.id, patient_id=patient_id)
    updated = await update_patient(session=session, patient=patient, payload=payload)
    return envelope_response(message_key="patient_updated", data=_patient_data(updated))


@router.delete(
    "/{patient_id}",
    response_model=Envelope[dict[str, Any]],
    responses=_NOT_FOUND,
    summary="Delete patient",
)
async def delete_patient_by_id(
    patient_id: int,
    owner: Physiotherapist = Depends(get_current_owner),
    session: AsyncSession = Depends(get_session),
) -> JSONResponse:
    patient = await get_patient(session=session, owner_id=owner.id, patient_id=patient_id)
    await delete_patient(session=session, patient=patient)
    return envelope_response(message_key="patient_deleted", data={})
