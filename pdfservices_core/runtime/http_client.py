"""
Shared async HTTP client for talking to the PDF Services API.

This module provides a pooled HTTP client that injects correlation headers and
converts HTTP failures into the package's error taxonomy. It never retries:
callers decide what to repeat (see runtime.retry).
"""

from __future__ import annotations

from typing import Any, Iterable

import httpx
from loguru import logger

from .context import RunContext
from .errors import (
    AuthError,
    ErrorCode,
    NotFoundError,
    PDFServicesError,
    QuotaExceededError,
    ServiceError,
    TransportError,
    UnknownError,
)

# Error codes the service uses for plan/usage limits
QUOTA_ERROR_CODES = frozenset(
    {"QUOTA_EXCEEDED", "INSUFFICIENT_QUOTA", "USAGE_LIMIT_EXCEEDED", "TOO_MANY_REQUESTS"}
)

DEFAULT_NOT_FOUND_STATUSES = (404, 410)


def _error_details(response: httpx.Response) -> tuple[str | None, str | None]:
    """Pull (code, message) out of an error body, whatever its shape."""
    try:
        body = response.json()
    except ValueError:
        text = response.text
        return None, text[:500] if text else None

    if not isinstance(body, dict):
        return None, str(body)[:500]

    error = body.get("error")
    if isinstance(error, dict):
        return error.get("code"), error.get("message")
    if isinstance(error, str):
        # IMS style: {"error": "invalid_client", "error_description": "..."}
        return error, body.get("error_description")
    return body.get("code"), body.get("message") or body.get("reason")


def error_from_response(
    response: httpx.Response,
    not_found_statuses: Iterable[int] = DEFAULT_NOT_FOUND_STATUSES,
) -> PDFServicesError | None:
    """Map an HTTP response onto the error taxonomy.

    Args:
        response: The HTTP response.
        not_found_statuses: Statuses meaning "stale or unknown handle".

    Returns:
        The error to raise, or None for a successful response.
    """
    status = response.status_code
    if status < 400:
        return None

    code, message = _error_details(response)
    request_id = response.headers.get("x-request-id")
    debug = response.text[:500] if response.text else None

    if status in tuple(not_found_statuses):
        return NotFoundError(
            message_safe=message or "Resource not found or expired",
            status_code=status,
            request_id=request_id,
            message_debug=debug,
        )

    if status == 401:
        return AuthError(
            message_safe=message or "Unauthorized",
            code=ErrorCode.UNAUTHORIZED,
            message_debug=debug,
            request_id=request_id,
        )

    if status == 403:
        return AuthError(
            message_safe=message or "Forbidden",
            code=ErrorCode.FORBIDDEN,
            message_debug=debug,
            request_id=request_id,
        )

    if status == 429 or (code and code.upper() in QUOTA_ERROR_CODES):
        return QuotaExceededError(
            message_safe=message or "Service usage limit reached",
            code=ErrorCode.QUOTA_EXCEEDED,
            status_code=status,
            request_id=request_id,
            message_debug=debug,
        )

    if status >= 500:
        return ServiceError(
            message_safe=message or f"Service returned {status}",
            code=code or ErrorCode.SERVICE_UNAVAILABLE,
            status_code=status,
            request_id=request_id,
            message_debug=debug,
            retryable=True,
        )

    return ServiceError(
        message_safe=message or f"Request failed with status {status}",
        code=code or ErrorCode.INVALID_INPUT,
        status_code=status,
        request_id=request_id,
        message_debug=debug,
    )


class ServiceHttpClient:
    """Shared HTTP client for PDF Services calls.

    Features:
    - Connection pooling via httpx.AsyncClient
    - Correlation header injection (x-request-id)
    - Absolute URLs (job locations, pre-signed URIs) pass through untouched
    - Optional proxy and injectable transport
    - Structured error conversion

    Example:
        client = ServiceHttpClient("https://pdf-services.adobe.io")
        async with client:
            response = await client.post("/assets", context, json={"mediaType": "application/pdf"})
    """

    def __init__(
        self,
        base_url: str,
        timeout: httpx.Timeout | float = 30.0,
        proxy: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_connections: int = 20,
        max_keepalive: int = 10,
    ):
        """Initialize the HTTP client.

        Args:
            base_url: Base URL for relative request paths.
            timeout: Default timeout in seconds, or a full httpx.Timeout.
            proxy: Optional proxy URL.
            transport: Optional transport (e.g. httpx.MockTransport in tests).
            max_connections: Maximum total connections in pool.
            max_keepalive: Maximum keepalive connections.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.proxy = proxy
        self._transport = transport

        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive,
            keepalive_expiry=30.0,
        )
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx.AsyncClient."""
        if self._client is None:
            kwargs: dict[str, Any] = {"timeout": self.timeout, "limits": self._limits}
            if self._transport is not None:
                kwargs["transport"] = self._transport
            elif self.proxy:
                kwargs["proxy"] = self.proxy
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ServiceHttpClient":
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _build_url(self, path: str) -> str:
        """Build full URL from path; absolute URLs are returned unchanged."""
        if path.startswith(("http://", "https://")):
            return path
        path = path.lstrip("/")
        return f"{self.base_url}/{path}"

    async def request(
        self,
        method: str,
        path: str,
        context: RunContext,
        not_found_statuses: Iterable[int] = DEFAULT_NOT_FOUND_STATUSES,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make one HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: Request path or absolute URL.
            context: RunContext for header injection and log prefixes.
            not_found_statuses: Statuses reported as NotFoundError.
            **kwargs: Additional arguments passed to httpx.

        Returns:
            The HTTP response (status < 400).

        Raises:
            TransportError: Connection failures and HTTP timeouts.
            AuthError, QuotaExceededError, NotFoundError, ServiceError:
                Error responses, see error_from_response.
            UnknownError: Anything else raised while sending.
        """
        client = await self._get_client()
        url = self._build_url(path)

        headers = dict(kwargs.pop("headers", None) or {})
        headers.update(context.get_headers())

        try:
            response = await client.request(
                method=method,
                url=url,
                headers=headers,
                **kwargs,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                message_safe=f"{method} request timed out",
                code=ErrorCode.TIMEOUT,
                message_debug=str(e),
                cause=e,
            ) from e
        except httpx.TransportError as e:
            raise TransportError(
                message_safe="Failed to connect to service",
                code=ErrorCode.CONNECTION_ERROR,
                message_debug=str(e),
                cause=e,
            ) from e
        except PDFServicesError:
            raise
        except Exception as e:
            logger.error(f"{context.log_prefix} Unexpected error on {method}: {e}")
            raise UnknownError(
                message_safe="Unexpected error during request",
                message_debug=str(e),
                cause=e,
            ) from e

        error = error_from_response(response, not_found_statuses)
        if error is not None:
            logger.debug(
                f"{context.log_prefix} {method} {path} failed "
                f"(status={response.status_code}, code={error.code})"
            )
            raise error

        return response

    async def get(self, path: str, context: RunContext, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, context, **kwargs)

    async def post(self, path: str, context: RunContext, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, context, **kwargs)

    async def put(self, path: str, context: RunContext, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, context, **kwargs)

    async def delete(self, path: str, context: RunContext, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, context, **kwargs)
