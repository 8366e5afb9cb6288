from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.db import close_db, init_db
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.patients.router import router as patients_router

setup_logging()


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Settings are read at startup so importing the app never requires DATABASE_URL.
        settings = get_settings()
        init_db(app=app, database_url=str(settings.database_url))
        yield
        await close_db(app=app)

    app = FastAPI(
        title="Physiotherapy Patients API",
        description=(
            "Patient records of the authenticated physiotherapist.\n\n"
            "- Every `/api` response is wrapped in `{success, message, data}`.\n"
            "- Records are visible only to their owner; other owners' records are reported "
            "as not found.\n"
            "- Logs and metrics carry route templates and ids only, never patient data."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Liveness check for load balancers and monitoring.",
            },
            {
                "name": "patients",
                "description": "List, create, read, update and delete patient records.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description="Verifies the API process responds. Downstream services are not checked.",
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(patients_router)
    return app


app = create_app()
