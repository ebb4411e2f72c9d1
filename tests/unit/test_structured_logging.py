"""Tests for request and profile context in structured logs."""

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.timetrack.core.logging import (
    REDACTED,
    bind_profile_context,
    bind_request_context,
    clear_request_context,
    get_logger,
    redact_sensitive,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )
    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_request_id_is_bound(capturing_logger):
    bind_request_context("req-1")
    get_logger(__name__).info("handled")

    assert capturing_logger.calls[0].kwargs["request_id"] == "req-1"


def test_missing_request_id_is_not_bound(capturing_logger):
    bind_request_context(None)
    get_logger(__name__).info("handled")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_profile_and_account_are_bound(capturing_logger):
    bind_request_context("req-2")
    bind_profile_context(7, 3)
    get_logger(__name__).info("time saved")

    kwargs = capturing_logger.calls[0].kwargs
    assert (kwargs["request_id"], kwargs["profile_id"], kwargs["account_id"]) == ("req-2", 7, 3)


def test_clear_removes_context(capturing_logger):
    bind_profile_context(7, 3)
    clear_request_context()
    get_logger(__name__).info("after request")

    assert "profile_id" not in capturing_logger.calls[0].kwargs


class TestRedaction:
    def test_secrets_are_replaced(self):
        event = {"event": "login", "password": "hunter22", "token": "abc", "email": "a@b.co"}

        redacted = redact_sensitive(None, "info", event)

        assert redacted["password"] == REDACTED
        assert redacted["token"] == REDACTED
        assert redacted["email"] == "a@b.co"

    def test_event_without_secrets_is_untouched(self):
        event = {"event": "handled", "status": 200}
        assert redact_sensitive(None, "info", dict(event)) == event
