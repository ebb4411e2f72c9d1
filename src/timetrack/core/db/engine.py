"""The process-wide async database engine (asyncpg)."""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.timetrack.core.config import get_settings
from src.timetrack.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None


def ssl_context_for(ssl_mode: str) -> ssl.SSLContext | None:
    """Translate a libpq ``sslmode`` into the SSL context asyncpg expects.

    ``prefer`` and ``require`` encrypt without verifying the server;
    ``verify-ca`` checks the certificate and ``verify-full`` the host name too.
    """
    if ssl_mode == "disable":
        return None
    context = ssl.create_default_context()
    if ssl_mode in ("verify-ca", "verify-full"):
        context.check_hostname = ssl_mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def get_engine() -> AsyncEngine:
    """Create the engine on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        connect_args: dict[str, Any] = {
            "statement_cache_size": settings.database_statement_cache_size,
        }
        context = ssl_context_for(settings.database_ssl_mode)
        if context is not None:
            connect_args["ssl"] = context

        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        logger.debug(
            "Database engine created",
            pool_size=settings.database_pool_size,
            ssl_mode=settings.database_ssl_mode,
        )
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
