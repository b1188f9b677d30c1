"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMPTY_POST_CONTENT = "EMPTY_POST_CONTENT"

    # Data integrity (422)
    MALFORMED_RECORD = "MALFORMED_RECORD"

    # Session errors (409)
    SESSION_NOT_STARTED = "SESSION_NOT_STARTED"
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    FEED_UNAVAILABLE = "FEED_UNAVAILABLE"
    SEARCH_UNAVAILABLE = "SEARCH_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ForbiddenError(AppException):
    """The requesting user may not act on this resource."""

    def __init__(self, message: str = "Access denied", details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
            details=details,
        )


class ValidationError(AppException):
    """Input rejected before reaching the store."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class StoreUnavailableError(AppException):
    """Transient failure talking to the backing store."""

    def __init__(self, operation: str, message: str = "Data store unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.STORE_UNAVAILABLE,
            message=message,
            status_code=503,
            details={"operation": operation},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="No profile found",
            status_code=404,
            details={"user_id": user_id},
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class MalformedRecordError(AppException):
    """A stored record is missing a field the system relies on."""

    def __init__(self, record_id: str, field: str) -> None:
        super().__init__(
            error_code=ErrorCode.MALFORMED_RECORD,
            message=f"Record {record_id} is missing required field '{field}'",
            status_code=422,
            details={"record_id": record_id, "field": field},
        )


class FeedUnavailableError(AppException):
    """The post query behind a full feed load failed."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.FEED_UNAVAILABLE,
            message="Error fetching posts.",
            status_code=503,
        )


class SearchUnavailableError(AppException):
    """The profile directory could not be listed."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SEARCH_UNAVAILABLE,
            message="Error searching profiles.",
            status_code=503,
        )


class SessionNotStartedError(AppException):
    """No active feed session for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SESSION_NOT_STARTED,
            message="No active session. Sign in first.",
            status_code=409,
            details={"user_id": user_id},
        )


class UsernameTakenError(AppException):
    """Username is already claimed by another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message=f"Username already taken: {username}",
            status_code=409,
            details={"username": username},
        )
