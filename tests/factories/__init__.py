"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, AccountFactory, ...
"""

from tests.factories.account import (
    DEFAULT_TEST_PASSWORD,
    AccountFactory,
    ProfileAccountFactory,
    ProfileFactory,
)
from tests.factories.base import BaseFactory, unique_suffix, utc_now
from tests.factories.catalog import (
    ClientFactory,
    ProjectFactory,
    ProjectTaskFactory,
    TaskFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "unique_suffix",
    "utc_now",
    # Account
    "AccountFactory",
    "DEFAULT_TEST_PASSWORD",
    "ProfileAccountFactory",
    "ProfileFactory",
    # Catalog
    "ClientFactory",
    "ProjectFactory",
    "ProjectTaskFactory",
    "TaskFactory",
]
