from __future__ import annotations

from typing import Any, Generic, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.api.messages import message

DataT = TypeVar("DataT")


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class Envelope(BaseModel, Generic[DataT]):
    """Uniform wrapper of every `/api` response."""

    success: bool = Field(description="True when the operation succeeded.")
    message: str = Field(
        description="Localized, human readable outcome.",
        examples=["Pacjent został pobrany pomyślnie"],
    )
    data: DataT = Field(description="Operation payload; `{}` when there is none.")


class ErrorEnvelope(Envelope[dict[str, Any]]):
    success: bool = Field(default=False, description="Always false for failures.")


def envelope_response(
    *,
    message_key: str,
    data: Any = None,
    success: bool = True,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body = {
        "success": success,
        "message": message(message_key),
        "data": {} if data is None else jsonable_encoder(data),
    }
    return JSONResponse(status_code=status_code, content=body)
