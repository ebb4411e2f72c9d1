"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.timetrack.core.config import Settings
from src.timetrack.core.security import SecurityHeadersMiddleware
from src.timetrack.core.security.headers import DOCS_CSP

from .request_context import request_context_middleware

__all__ = [
    "request_context_middleware",
    "setup_middlewares",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install middlewares, innermost first.

    Correlation ids are assigned by the outermost layer so that everything
    below, including CORS and security header responses, can log them.
    """
    app.middleware("http")(request_context_middleware)

    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=DOCS_CSP if settings.enable_openapi else settings.csp_production,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )

    app.add_middleware(CorrelationIdMiddleware)
