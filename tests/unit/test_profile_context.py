"""Tests for the authenticated request context."""

from datetime import timedelta

import pytest

from src.timetrack.models import Account, Profile, ProfileAccount, ProfileContext, Session
from src.timetrack.models.base import persisted_id, utc_now

pytestmark = pytest.mark.unit


def _context(**overrides) -> ProfileContext:
    values = {
        "profile": Profile(id=7, email="ada@example.com", password="x", first_name="Ada"),
        "account": Account(id=3, company="Acme"),
        "membership": ProfileAccount(profile_id=7, account_id=3, role="owner"),
    }
    values.update(overrides)
    return ProfileContext(**values)


class TestPersistedId:
    def test_loaded_row(self):
        assert persisted_id(Account(id=3, company="Acme")) == 3

    def test_unsaved_row_is_rejected(self):
        with pytest.raises(ValueError, match="Account has no primary key yet"):
            persisted_id(Account(company="Acme"))


class TestProfileContext:
    def test_ids(self):
        context = _context()
        assert (context.profile_id, context.account_id) == (7, 3)

    def test_unsaved_profile(self):
        context = _context(profile=Profile(email="ada@example.com", password="x"))
        with pytest.raises(ValueError):
            _ = context.profile_id

    def test_session_token(self):
        session = Session(
            token="tok", profile_id=7, account_id=3, expiration=utc_now() + timedelta(hours=1)
        )
        context = _context(session=session)
        assert context.token == "tok"
        assert context.session_token() == "tok"

    def test_session_token_requires_a_session(self):
        context = _context()
        assert context.token is None
        with pytest.raises(ValueError, match="no session"):
            context.session_token()
