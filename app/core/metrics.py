from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.routes import route_template

metrics_router = APIRouter(tags=["monitoring"])

# Labels never carry patient or owner ids: routes are templates, operations a fixed set.

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

patient_operations_total = Counter(
    "patient_operations_total",
    "Patient record operations persisted successfully",
    labelnames=("operation",),
)


def record_patient_operation(operation: str) -> None:
    patient_operations_total.labels(operation=operation).inc()


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route_label = route_template(request)
            code = str(int(status_code))
            http_requests_total.labels(
                method=request.method, route=route_label, status_code=code
            ).inc()
            http_request_duration_seconds.labels(
                method=request.method, route=route_label, status_code=code
            ).observe(time.perf_counter() - started)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
