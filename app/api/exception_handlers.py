from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.schemas import envelope_response
from app.core.routes import request_id_of, route_template
from app.domain.exceptions import (
    AuthenticationError,
    DomainError,
    InvalidFieldSelectionError,
    NotFoundError,
)

logger = logging.getLogger("app.api.errors")

_LOCATION_ROOTS = {"body", "query", "path", "header"}


def _log_failure(*, request: Request, status_code: int, error: str) -> None:
    # Metadata only: the request body and query may carry PHI.
    logger.info(
        "Request rejected",
        extra={
            "request_id": request_id_of(request),
            "http_method": request.method,
            "request_path": route_template(request),
            "status_code": status_code,
            "error": error,
        },
    )


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _clean_message(msg: str) -> str:
    # Custom validators surface as "Value error, <text>".
    prefix = "Value error, "
    return msg[len(prefix) :] if msg.startswith(prefix) else msg


def field_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries into a `{field: [messages]}` map."""

    grouped: dict[str, list[str]] = {}
    for err in errors:
        field = _field_name(err.get("loc", ()))
        text = _clean_message(str(err.get("msg", "Invalid value")))
        bucket = grouped.setdefault(field, [])
        if text not in bucket:
            bucket.append(text)
    return grouped


_DOMAIN_STATUS: dict[type[DomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidFieldSelectionError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers that turn every failure into the response envelope."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
        _log_failure(request=request, status_code=code, error="validation")
        return envelope_response(
            message_key="validation_failed",
            data=field_errors(exc.errors()),
            success=False,
            status_code=code,
        )

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        code = _DOMAIN_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        data: dict[str, Any] = {}
        if isinstance(exc, InvalidFieldSelectionError):
            data = {"fields": exc.invalid}

        _log_failure(request=request, status_code=code, error=exc.message_key)
        response = envelope_response(
            message_key=exc.message_key, data=data, success=False, status_code=code
        )
        if isinstance(exc, AuthenticationError):
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        _log_failure(request=request, status_code=exc.status_code, error="http")
        response = envelope_response(
            message_key=str(exc.detail) if exc.detail else "error",
            success=False,
            status_code=exc.status_code,
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response
