"""
Error taxonomy for the PDF Services client.

Every failure surfaced by the client is a PDFServicesError carrying a kind tag,
so callers can branch on ``error.kind`` or catch a specific subclass. Errors are
classified as retryable or not; the client itself never retries, the flag only
informs caller-side retry policies.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Tag distinguishing the error families."""

    AUTH = "auth"
    QUOTA = "quota"
    SERVICE = "service"
    NOT_FOUND = "not_found"
    SDK = "sdk"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class PDFServicesError(Exception):
    """Base error with retry classification.

    Attributes:
        code: Machine-readable error code (e.g. "UNAUTHORIZED").
        message_safe: Human-readable message safe for logs.
        message_debug: Detailed debug info (response body excerpt etc.).
        retryable: Whether the failed call may be repeated as-is.
        cause: The underlying exception, if any.
        debug_id: Unique ID for correlating log lines.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        code: str,
        message_safe: str,
        message_debug: str | None = None,
        retryable: bool = False,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        """Initialize a PDFServicesError.

        Args:
            code: Machine-readable error code.
            message_safe: Human-readable message safe for logs.
            message_debug: Optional detailed debug message.
            retryable: Whether the operation can be retried.
            cause: Optional underlying exception.
            debug_id: Optional correlation ID (auto-generated if None).
        """
        super().__init__(message_safe)
        self.code = code
        self.message_safe = message_safe
        self.message_debug = message_debug
        self.retryable = retryable
        self.cause = cause
        self.debug_id = debug_id or str(uuid.uuid4())[:8]

    def __str__(self) -> str:
        return f"[{self.code}] {self.message_safe}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, code={self.code!r}, "
            f"message_safe={self.message_safe!r}, "
            f"retryable={self.retryable}, "
            f"debug_id={self.debug_id!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary (excludes debug info).

        Returns:
            Dictionary with kind, code, message and debug_id.
        """
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message_safe,
            "debug_id": self.debug_id,
        }


class AuthError(PDFServicesError):
    """Credentials are missing, invalid or lack access to the operation.

    Attributes:
        request_id: Service-side tracking id (``x-request-id``) of the rejected
            call, if the service returned one.
    """

    kind = ErrorKind.AUTH

    def __init__(
        self,
        message_safe: str = "Authentication failed",
        code: str = "UNAUTHORIZED",
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
        request_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )
        self.request_id = request_id

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.request_id:
            result["request_id"] = self.request_id
        return result


class ServiceError(PDFServicesError):
    """The remote API rejected the request.

    Attributes:
        status_code: HTTP status returned by the service.
        request_id: Service-side tracking id (``x-request-id``), if returned.
    """

    kind = ErrorKind.SERVICE

    def __init__(
        self,
        message_safe: str,
        code: str = "SERVICE_ERROR",
        status_code: int | None = None,
        request_id: str | None = None,
        message_debug: str | None = None,
        retryable: bool = False,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=retryable,
            cause=cause,
            debug_id=debug_id,
        )
        self.status_code = status_code
        self.request_id = request_id

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        if self.request_id:
            result["request_id"] = self.request_id
        return result


class QuotaExceededError(ServiceError):
    """Service usage limits of the plan have been reached."""

    kind = ErrorKind.QUOTA

    def __init__(
        self,
        message_safe: str = "Service usage limit reached",
        code: str = "QUOTA_EXCEEDED",
        status_code: int | None = 429,
        request_id: str | None = None,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            message_safe=message_safe,
            code=code,
            status_code=status_code,
            request_id=request_id,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )


class NotFoundError(ServiceError):
    """Asset or job is unknown to the service, or its URL has expired."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message_safe: str = "Resource not found",
        code: str = "NOT_FOUND",
        status_code: int | None = 404,
        request_id: str | None = None,
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            message_safe=message_safe,
            code=code,
            status_code=status_code,
            request_id=request_id,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )


class SDKError(PDFServicesError):
    """Local client-side misuse, detected before anything is sent."""

    kind = ErrorKind.SDK

    def __init__(
        self,
        message_safe: str,
        code: str = "SDK_ERROR",
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )


class ValidationError(SDKError):
    """A job parameter or argument failed validation.

    Attributes:
        field: Name of the offending field, if known.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message_safe: str,
        field: str | None = None,
        code: str = "INVALID_INPUT",
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            message_safe=message_safe,
            code=code,
            message_debug=message_debug,
            cause=cause,
            debug_id=debug_id,
        )
        self.field = field

    @classmethod
    def missing(cls, field: str, owner: str) -> "ValidationError":
        """Build the error for a required field that was not set."""
        return cls(f"{owner}: '{field}' is required", field=field, code="MISSING_FIELD")


class TransportError(PDFServicesError):
    """Network or I/O failure while talking to the service."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message_safe: str,
        code: str = "CONNECTION_ERROR",
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=code,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=True,
            cause=cause,
            debug_id=debug_id,
        )


class JobTimeoutError(PDFServicesError):
    """Waiting for a job exceeded the caller's total wait budget.

    Attributes:
        location: Location of the job that was still in progress.
        elapsed: Seconds spent waiting before giving up.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        location: str,
        elapsed: float,
        budget: float,
        debug_id: str | None = None,
    ):
        super().__init__(
            code="JOB_TIMEOUT",
            message_safe=f"Job still in progress after {elapsed:.1f}s (budget {budget:.1f}s)",
            message_debug=location,
            retryable=False,
            debug_id=debug_id,
        )
        self.location = location
        self.elapsed = elapsed
        self.budget = budget


class UnknownError(PDFServicesError):
    """Catch-all for failures that fit no other kind."""

    kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message_safe: str = "Unexpected error",
        message_debug: str | None = None,
        cause: Exception | None = None,
        debug_id: str | None = None,
    ):
        super().__init__(
            code=ErrorCode.INTERNAL_ERROR,
            message_safe=message_safe,
            message_debug=message_debug,
            retryable=False,
            cause=cause,
            debug_id=debug_id,
        )


# Common error codes
class ErrorCode:
    """Standard error codes for common failure scenarios."""

    # Network/connectivity
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Authentication/Authorization
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"

    # Validation
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_FIELD = "MISSING_FIELD"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    NOT_FOUND = "NOT_FOUND"

    # Service usage
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"

    # Job lifecycle
    JOB_TIMEOUT = "JOB_TIMEOUT"
    MISSING_LOCATION = "MISSING_LOCATION"

    # Internal
    INTERNAL_ERROR = "INTERNAL_ERROR"
