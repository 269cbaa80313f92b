"""
Runtime layer for the PDF Services client.

This package provides the shared plumbing under the client:
- RunContext: Per-job context with correlation id and deadline
- PDFServicesError and subclasses: Tagged error taxonomy
- ServiceHttpClient: Pooled async HTTP client with error mapping
- RetryPolicy: Caller-side retry behavior
"""

from .context import RunContext
from .errors import (
    AuthError,
    ErrorCode,
    ErrorKind,
    JobTimeoutError,
    NotFoundError,
    PDFServicesError,
    QuotaExceededError,
    SDKError,
    ServiceError,
    TransportError,
    UnknownError,
    ValidationError,
)
from .http_client import ServiceHttpClient
from .retry import RetryPolicy, retry_call, with_retry

__all__ = [
    "AuthError",
    "ErrorCode",
    "ErrorKind",
    "JobTimeoutError",
    "NotFoundError",
    "PDFServicesError",
    "QuotaExceededError",
    "RetryPolicy",
    "RunContext",
    "SDKError",
    "ServiceError",
    "ServiceHttpClient",
    "TransportError",
    "UnknownError",
    "ValidationError",
    "retry_call",
    "with_retry",
]
