"""Application errors and the handlers that render them as error envelopes."""

from enum import Enum
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.timetrack.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Stable error codes clients branch on."""

    PANIC = "Panic"
    NOT_FOUND = "NotFound"
    METHOD_NOT_ALLOWED = "MethodNotAllowed"

    INVALID_JSON = "InvalidJson"
    INVALID_CONTENT_TYPE = "InvalidContentType"
    JSON_ENCODE_FAILED = "JsonEncodeFailed"
    SYSTEM_ERROR = "SystemError"
    TOO_MANY_REQUESTS = "TooManyRequests"

    ENCRYPTION_FAILED = "EncryptionFailed"
    TOKEN_CREATION_FAILED = "TokenCreationFailed"

    ACCOUNT_EXISTS = "AccountExists"
    UPDATE_FAILED = "UpdateFailed"
    ACCOUNT_CREATE_FAILED = "AccountCreateFailed"
    PROFILE_CREATE_FAILED = "ProfileCreateFailed"
    EMAIL_EXISTS_IN_ACCOUNT = "EmailExistsInAccount"
    PROFILE_NOT_FOUND = "ProfileNotFound"
    INVALID_EMAIL = "InvalidEmail"
    INVALID_FORGOT_TOKEN = "InvalidForgotToken"
    INVALID_ACCOUNT_ID = "InvalidAccountId"
    INVALID_PASSWORD = "InvalidPassword"
    PASSWORD_MISMATCH = "PasswordMismatch"
    INVALID_FIELD = "InvalidField"
    PROFILE_LOCKED = "ProfileLocked"
    NOT_AUTHORIZED = "NotAuthorized"

    INCORRECT_PASSWORD = "IncorrectPassword"
    INVALID_TOKEN = "InvalidToken"
    TOKEN_EXPIRED = "TokenExpired"
    MISSING_TOKEN = "MissingToken"
    INVALID_ACCOUNT_FOR_PROFILE = "InvalidAccountForProfile"

    PROFILE_INACTIVE = "ProfileInactive"
    ACCOUNT_INACTIVE = "AccountInactive"

    MISSING_FIELD = "MissingField"
    FIELD_SIZE = "FieldSize"

    INVALID_WEEK_START = "InvalidWeekStart"
    INVALID_ROLE = "InvalidRole"
    INVALID_TIMEZONE = "InvalidTimezone"

    INVALID_CLIENT = "InvalidClient"
    INVALID_TASK = "InvalidTask"
    INVALID_PROJECT = "InvalidProject"


_ERROR_CODE_VALUES = frozenset(code.value for code in ErrorCode)

_SYSTEM_CODES = frozenset(
    {
        ErrorCode.PANIC,
        ErrorCode.SYSTEM_ERROR,
        ErrorCode.JSON_ENCODE_FAILED,
        ErrorCode.ENCRYPTION_FAILED,
        ErrorCode.TOKEN_CREATION_FAILED,
        ErrorCode.ACCOUNT_CREATE_FAILED,
        ErrorCode.PROFILE_CREATE_FAILED,
        ErrorCode.UPDATE_FAILED,
    }
)

_AUTH_CODES = frozenset(
    {
        ErrorCode.INVALID_TOKEN,
        ErrorCode.TOKEN_EXPIRED,
        ErrorCode.MISSING_TOKEN,
        ErrorCode.NOT_AUTHORIZED,
        ErrorCode.PROFILE_INACTIVE,
        ErrorCode.ACCOUNT_INACTIVE,
        ErrorCode.PROFILE_LOCKED,
        ErrorCode.INCORRECT_PASSWORD,
    }
)


def default_status_for(code: ErrorCode) -> int:
    """HTTP status an error code maps to when the raise site does not override it."""
    if code in _SYSTEM_CODES:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if code in _AUTH_CODES:
        return status.HTTP_401_UNAUTHORIZED
    if code == ErrorCode.NOT_FOUND:
        return status.HTTP_404_NOT_FOUND
    if code == ErrorCode.METHOD_NOT_ALLOWED:
        return status.HTTP_405_METHOD_NOT_ALLOWED
    if code == ErrorCode.TOO_MANY_REQUESTS:
        return status.HTTP_429_TOO_MANY_REQUESTS
    # Kept at 200 for compatibility with existing clients
    if code == ErrorCode.EMAIL_EXISTS_IN_ACCOUNT:
        return status.HTTP_200_OK
    return status.HTTP_400_BAD_REQUEST


class AppError(Exception):
    """Domain error carrying a stable code, a message and optional detail.

    Services raise it; the exception handler turns it into the error envelope.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        field: str | None = None,
        detail: dict[str, Any] | None = None,
        error: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail: dict[str, Any] = dict(detail or {})
        if field:
            self.detail["field"] = field
        self.error = error
        self.status_code = status_code if status_code is not None else default_status_for(code)

    @property
    def field(self) -> str | None:
        return self.detail.get("field")

    def with_status(self, status_code: int) -> "AppError":
        """Return the same error reported under a different HTTP status."""
        self.status_code = status_code
        return self

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": "error"}
        if self.error:
            body["error"] = self.error
        body["message"] = self.message
        body["code"] = self.code.value
        if self.detail:
            body["detail"] = self.detail
        return body

    def __repr__(self) -> str:
        return f"AppError(code={self.code.value!r}, message={self.message!r})"


def error_response(exc: AppError) -> JSONResponse:
    content = exc.to_dict()
    content["request_id"] = correlation_id.get()
    return JSONResponse(status_code=exc.status_code, content=content)


def _log_app_error(request: Request, exc: AppError) -> None:
    fields = {"code": exc.code.value, "path": request.url.path, **exc.detail}
    if exc.error:
        fields["error"] = exc.error
    if exc.status_code >= 500:
        logger.error(exc.message, **fields)
    else:
        logger.warning(exc.message, **fields)


def _validation_error_to_app_error(exc: RequestValidationError) -> AppError:
    errors = exc.errors()
    if not errors:
        return AppError(ErrorCode.INVALID_JSON, "Invalid request")

    first = errors[0]
    error_type = str(first.get("type", ""))
    loc = [part for part in first.get("loc", ()) if isinstance(part, str)]
    field = loc[-1] if len(loc) > 1 else None
    message = str(first.get("msg", "Invalid request"))

    if error_type in _ERROR_CODE_VALUES:
        code = ErrorCode(error_type)
    elif error_type in ("json_invalid", "model_attributes_type", "dict_type") or field is None:
        code = ErrorCode.INVALID_JSON
    elif error_type == "missing":
        code = ErrorCode.MISSING_FIELD
    else:
        code = ErrorCode.INVALID_FIELD

    return AppError(code, message, field=field, status_code=status.HTTP_400_BAD_REQUEST)


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every failure as the shared error envelope, with request_id attached."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        _log_app_error(request, exc)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        app_error = _validation_error_to_app_error(exc)
        _log_app_error(request, app_error)
        return error_response(app_error)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            app_error = AppError(ErrorCode.NOT_FOUND, "Not found")
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            app_error = AppError(ErrorCode.METHOD_NOT_ALLOWED, "Method not allowed")
        else:
            app_error = AppError(
                ErrorCode.SYSTEM_ERROR if exc.status_code >= 500 else ErrorCode.INVALID_FIELD,
                str(exc.detail),
                status_code=exc.status_code,
            )
        response = error_response(app_error)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        app_error = AppError(
            ErrorCode.TOO_MANY_REQUESTS,
            "Too many requests. Please slow down.",
            detail={"limit": str(exc.detail)},
        )
        _log_app_error(request, app_error)
        return error_response(app_error)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return error_response(AppError(ErrorCode.PANIC, "Internal server error"))
