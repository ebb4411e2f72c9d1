"""Field validation predicates and the pydantic helpers built on them.

The predicates are plain functions. The ``check_*`` helpers raise
``PydanticCustomError`` whose type is an ``ErrorCode`` value, so request
validation failures surface with the same codes as service errors.
"""

import re

from pydantic_core import PydanticCustomError

from src.timetrack.core.exceptions import ErrorCode

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

EMAIL_MIN, EMAIL_MAX = 5, 254
PASSWORD_MIN, PASSWORD_MAX = 8, 64
NAME_MIN, NAME_MAX = 1, 64
COMPANY_MIN, COMPANY_MAX = 1, 64
CLIENT_NAME_MIN, CLIENT_NAME_MAX = 1, 64
PROJECT_NAME_MIN, PROJECT_NAME_MAX = 1, 128


def is_null(value: str | None) -> bool:
    return value is None or value.strip() == ""


def is_email(value: str | None) -> bool:
    return value is not None and EMAIL_PATTERN.match(value) is not None


def is_length(value: str | None, minimum: int, maximum: int) -> bool:
    """Length check counted in characters, not bytes."""
    length = len(value or "")
    return minimum <= length <= maximum


def is_timezone(value: str | None) -> bool:
    return not is_null(value) and "/" in (value or "")


def is_int_between(value: int, minimum: int, maximum: int) -> bool:
    return minimum <= value <= maximum


def _fail(code: ErrorCode, message: str) -> PydanticCustomError:
    return PydanticCustomError(code.value, message)


def check_required(value: str | None, message: str) -> str:
    if value is None or is_null(value):
        raise _fail(ErrorCode.MISSING_FIELD, message)
    return value


def check_email(value: str) -> str:
    if not is_email(value):
        raise _fail(ErrorCode.INVALID_EMAIL, "Invalid email address")
    if not is_length(value, EMAIL_MIN, EMAIL_MAX):
        raise _fail(
            ErrorCode.FIELD_SIZE,
            f"Email must be between {EMAIL_MIN} and {EMAIL_MAX} characters",
        )
    return value.lower()


def check_password(value: str) -> str:
    if not is_length(value, PASSWORD_MIN, PASSWORD_MAX):
        raise _fail(
            ErrorCode.FIELD_SIZE,
            f"Password must be between {PASSWORD_MIN} and {PASSWORD_MAX} characters",
        )
    return value


def check_length(value: str, minimum: int, maximum: int, label: str) -> str:
    if not is_length(value, minimum, maximum):
        raise _fail(
            ErrorCode.FIELD_SIZE,
            f"{label} must be between {minimum} and {maximum} characters",
        )
    return value


def check_timezone(value: str) -> str:
    if not is_timezone(value):
        raise _fail(ErrorCode.INVALID_TIMEZONE, "Invalid timezone")
    return value


def check_positive_id(value: int, code: ErrorCode, message: str) -> int:
    if value <= 0:
        raise _fail(code, message)
    return value
