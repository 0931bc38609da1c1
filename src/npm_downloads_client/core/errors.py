"""Error types raised by the client."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

DOWNLOADS_ERROR_MESSAGE = "Unable to get downloads stats from the npm API"
MAX_RETRIES_MESSAGE = "API endpoint failed to provide a valid response, max retries exceeded"
NON_JSON_MESSAGE = "API endpoint returned a non JSON response"


@dataclass(slots=True, frozen=True)
class FieldIssue:
    """One offending field found while validating a payload or an input."""

    path: tuple[str | int, ...]
    message: str
    expected: str | None = None
    received: str | None = None

    @property
    def dotted_path(self) -> str:
        return ".".join(str(part) for part in self.path)


class NpmApiError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.cause = cause


class NpmTransportError(NpmApiError):
    """Network/transport-level failure."""


class NpmClientClosedError(NpmApiError):
    """Raised when client is used after close."""


class NpmValidationError(NpmApiError):
    """Invalid input or payload."""

    def __init__(
        self,
        message: str,
        *,
        issues: Iterable[FieldIssue] = (),
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message, http_status=http_status, cause=cause)
        self.issues = tuple(issues)


class NpmInvalidPeriodError(NpmValidationError):
    """A date, week or month token could not be resolved."""

    def __init__(self, message: str, *, issues: Iterable[FieldIssue] = ()) -> None:
        super().__init__(message, issues=issues, cause="invalid_period")


class NpmResponseValidationError(NpmValidationError):
    """Response payload does not match the expected shape."""

    def __init__(self, issues: Iterable[FieldIssue]) -> None:
        super().__init__("Object shape is not valid.", issues=issues, cause="validation")


class NpmServerError(NpmApiError):
    """Retriable server-side failure (500, 502, 503 or 504)."""


class NpmStatusError(NpmApiError):
    """Non-retriable HTTP status."""

    def __init__(self, http_status: int) -> None:
        super().__init__(
            f"API endpoint returned status code {http_status}",
            http_status=http_status,
            cause="status",
        )


class NpmNonJSONResponseError(NpmApiError):
    """Successful HTTP status with a body that is not JSON."""

    def __init__(self, *, http_status: int | None = None) -> None:
        super().__init__(NON_JSON_MESSAGE, http_status=http_status, cause="non_json")


class NpmMaxRetriesExceededError(NpmApiError):
    """Retry budget exhausted on transient server failures."""

    def __init__(self, *, attempts: int, http_status: int | None = None) -> None:
        super().__init__(MAX_RETRIES_MESSAGE, http_status=http_status, cause="retries_exhausted")
        self.attempts = attempts


class NpmDownloadsError(NpmApiError):
    """Outward failure of a downloads lookup; the original error is ``__cause__``."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(
            DOWNLOADS_ERROR_MESSAGE,
            http_status=getattr(error, "http_status", None),
            cause=cause_from_error(error),
        )


def cause_from_error(exc: BaseException) -> str:
    if isinstance(exc, NpmApiError) and exc.cause:
        return exc.cause
    if isinstance(exc, NpmValidationError):
        return "validation"
    return "network"


__all__ = [
    "DOWNLOADS_ERROR_MESSAGE",
    "MAX_RETRIES_MESSAGE",
    "NON_JSON_MESSAGE",
    "FieldIssue",
    "NpmApiError",
    "NpmTransportError",
    "NpmClientClosedError",
    "NpmValidationError",
    "NpmInvalidPeriodError",
    "NpmResponseValidationError",
    "NpmServerError",
    "NpmStatusError",
    "NpmNonJSONResponseError",
    "NpmMaxRetriesExceededError",
    "NpmDownloadsError",
    "cause_from_error",
]
