"""Application factory, lifespan and process entry point."""

import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.responses import PlainTextResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator

from src.timetrack.api.middlewares import setup_middlewares
from src.timetrack.api.v1.router import api_router
from src.timetrack.core.config import Settings, get_settings
from src.timetrack.core.db import dispose_engine, ping_database
from src.timetrack.core.exceptions import AppError, ErrorCode, setup_exception_handlers
from src.timetrack.core.logging import get_logger, setup_logging
from src.timetrack.core.rate_limit import limiter
from src.timetrack.core.shutdown import request_tracker

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "account", "description": "Accounts and their members"},
    {"name": "auth", "description": "Login, sessions and password recovery"},
    {"name": "profile", "description": "The logged-in user's profile"},
    {"name": "clients", "description": "Clients and their projects"},
    {"name": "tasks", "description": "Billable and non-billable tasks"},
    {"name": "time", "description": "Weekly time sheets"},
    {"name": "reports", "description": "Time totals and CSV exports"},
]

metrics_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Configure logging on startup; drain requests and close the pool on shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting", app_name=settings.app_name, env=settings.app_env)

    yield

    await request_tracker.start_shutdown()
    if not await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period):
        logger.warning(
            "Requests still running after grace period",
            grace_period=settings.shutdown_grace_period,
            in_flight=request_tracker.in_flight_count,
        )
    await dispose_engine()
    logger.info("Shutdown complete")


def _setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Prometheus metrics on ``/metrics``, behind ``X-Metrics-Key`` when a key is set."""
    instrumentator = Instrumentator(excluded_handlers=["/metrics", "/_ping"]).instrument(app)
    expected_key = settings.metrics_api_key
    if not expected_key:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)
        return

    async def require_metrics_key(
        api_key: Annotated[str | None, Depends(metrics_key_header)],
    ) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected_key):
            raise AppError(ErrorCode.NOT_AUTHORIZED, "Invalid or missing metrics API key")

    instrumentator.expose(
        app,
        endpoint="/metrics",
        include_in_schema=False,
        dependencies=[Depends(require_metrics_key)],
    )


async def ping() -> PlainTextResponse:
    """Database liveness: ``ok`` or ``error``."""
    try:
        await ping_database()
    except Exception as exc:
        logger.error("Database ping failed", error=str(exc))
        return PlainTextResponse("error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return PlainTextResponse("ok")


def create_app() -> FastAPI:
    settings = get_settings()
    docs_enabled = settings.enable_openapi

    app = FastAPI(
        title=settings.app_name,
        description="Time tracking for small teams: clients, projects, tasks and time sheets",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.state.limiter = limiter
    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)
    app.add_api_route(
        "/_ping",
        ping,
        methods=["GET"],
        response_class=PlainTextResponse,
        include_in_schema=False,
    )
    _setup_metrics(app, settings)
    return app


app = create_app()


def run() -> None:
    """Serve the app; entry point of the ``timetrack-api`` script."""
    settings = get_settings()
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        timeout_graceful_shutdown=settings.shutdown_grace_period,
    )
    uvicorn.Server(config).run()
