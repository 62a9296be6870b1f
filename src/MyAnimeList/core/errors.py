"""Exception taxonomy for API and authentication failures."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a failed API call."""

    INVALID_PARAMETERS = "invalid-parameters"
    INVALID_AUTH = "invalid-auth"
    FORBIDDEN = "forbidden"
    REQUEST_FAILED = "request-failed"


class MyAnimeListError(Exception):
    """Base class for every error raised by this package."""


class ApiError(MyAnimeListError):
    """A request that did not produce a usable result.

    Attributes:
        kind: Error classification.
        message: Human readable message, upstream text when available.
        status: Upstream HTTP status code, None for transport failures.
    """

    kind: ErrorKind = ErrorKind.REQUEST_FAILED

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"HTTP {self.status}: {self.message}"


class InvalidParametersError(ApiError):
    """Malformed or out-of-range request inputs (HTTP 400)."""

    kind = ErrorKind.INVALID_PARAMETERS


class InvalidAuthError(ApiError):
    """Missing, expired or invalid access token (HTTP 401)."""

    kind = ErrorKind.INVALID_AUTH


class ConnectionForbiddenError(ApiError):
    """Request rejected by server-side policy (HTTP 403)."""

    kind = ErrorKind.FORBIDDEN


class FailedRequestError(ApiError):
    """Any other transport or server failure, including malformed bodies."""

    kind = ErrorKind.REQUEST_FAILED


class AuthRefreshFailedError(MyAnimeListError):
    """The token endpoint exchange itself failed.

    The authenticator keeps its previous token when this is raised.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


_ERRORS_BY_STATUS: dict[int, type[ApiError]] = {
    400: InvalidParametersError,
    401: InvalidAuthError,
    403: ConnectionForbiddenError,
}


def error_for_status(status: int, message: str) -> ApiError:
    """Build the error matching an upstream non-2xx status."""
    error_cls = _ERRORS_BY_STATUS.get(status, FailedRequestError)
    return error_cls(message, status=status)
