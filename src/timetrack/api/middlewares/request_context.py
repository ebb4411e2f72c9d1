"""Per-request bookkeeping: structured log context and in-flight accounting."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.timetrack.core.logging import bind_request_context, clear_request_context
from src.timetrack.core.shutdown import request_tracker

# Probes are not counted so they cannot hold up a drain
UNTRACKED_PATHS = frozenset({"/_ping", "/metrics"})


async def request_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id to the log context; profile ids are added once authenticated."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    try:
        if request.url.path in UNTRACKED_PATHS:
            return await call_next(request)
        async with request_tracker.track_request():
            return await call_next(request)
    finally:
        clear_request_context()
