"""Test utilities package."""

from tests.utils.cleanup import cleanup_account_cascade, cleanup_profile_cascade

__all__ = [
    "cleanup_account_cascade",
    "cleanup_profile_cascade",
]
