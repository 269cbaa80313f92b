"""
Async client for the PDF Services job lifecycle.

The flow every operation follows:

    async with PDFServices(credentials, config) as client:
        asset = await client.upload_file("input.pdf")
        handle = await client.submit(CompressPDFJob(input=asset))
        status = await client.await_result(handle)
        if status.succeeded:
            stream = await client.get_content(status.result.asset)

The client raises PDFServicesError subclasses and never retries on its own.
A failed job is returned as a JobStatus in the FAILED state.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import IO, Any, Awaitable, Callable

import aiofiles
import httpx
from loguru import logger

from pdfservices_core.assets import AnyAsset, Asset, ExternalAsset, MediaType, StreamAsset
from pdfservices_core.auth.credentials import Credentials
from pdfservices_core.auth.token_manager import TokenManager
from pdfservices_core.config import ClientConfig
from pdfservices_core.jobs.operations import PDFServicesJob
from pdfservices_core.runtime.context import RunContext
from pdfservices_core.runtime.errors import (
    AuthError,
    ErrorCode,
    JobTimeoutError,
    SDKError,
    ServiceError,
    ValidationError,
)
from pdfservices_core.runtime.http_client import ServiceHttpClient
from pdfservices_core.status import JobError, JobHandle, JobResult, JobState, JobStatus

# Pre-signed storage URLs answer 403 once they expire
DOWNLOAD_NOT_FOUND_STATUSES = (403, 404, 410)


def _read_stream(stream: bytes | bytearray | memoryview | IO[bytes]) -> bytes:
    if isinstance(stream, (bytes, bytearray, memoryview)):
        return bytes(stream)
    read = getattr(stream, "read", None)
    if read is None:
        raise ValidationError(
            f"Cannot upload object of type {type(stream).__name__}; expected bytes or a binary file",
            field="stream",
        )
    data = read()
    if not isinstance(data, (bytes, bytearray)):
        raise ValidationError("Upload stream must be opened in binary mode", field="stream")
    return bytes(data)


class PDFServices:
    """Client for uploading documents, running jobs and fetching results.

    Attributes:
        config: Immutable client configuration.
        http: Shared HTTP client (owned; closed by close()).
        tokens: Access token cache for the credentials.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        log: Any = None,
    ):
        """Initialize the client.

        Args:
            credentials: Service principal or service account credentials.
            config: Client configuration; defaults apply if None.
            transport: Optional httpx transport (e.g. MockTransport in tests).
            sleep: Async sleep used between polls.
            clock: Monotonic clock measuring the await budget.
            log: Loguru logger to write to; the global logger if None.
        """
        self.config = config or ClientConfig()
        timeout = httpx.Timeout(
            self.config.read_write_timeout,
            connect=self.config.connect_timeout,
        )
        self.http = ServiceHttpClient(
            base_url=self.config.api_base_url,
            timeout=timeout,
            proxy=self.config.proxy.url if self.config.proxy else None,
            transport=transport,
        )
        self.tokens = TokenManager(
            credentials,
            self.http,
            ims_endpoint=self.config.ims_endpoint,
        )
        self._sleep = sleep
        self._clock = clock
        self.log = log or logger

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "PDFServices":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # Plumbing

    async def _api(
        self,
        method: str,
        path: str,
        context: RunContext,
        **kwargs: Any,
    ) -> httpx.Response:
        """Authenticated request to the API host."""
        token = await self.tokens.get_token(context)
        headers = {
            "Authorization": f"Bearer {token}",
            "x-api-key": self.tokens.client_id,
        }
        headers.update(kwargs.pop("headers", None) or {})
        try:
            return await self.http.request(method, path, context, headers=headers, **kwargs)
        except AuthError:
            # A rejected token is not reused by the next call
            self.tokens.invalidate()
            raise

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise ServiceError(
                message_safe="Service returned a malformed response",
                status_code=response.status_code,
                request_id=response.headers.get("x-request-id"),
                message_debug=response.text[:500],
                cause=e,
            ) from e
        if not isinstance(body, dict):
            raise ServiceError(
                message_safe="Service returned a malformed response",
                status_code=response.status_code,
                request_id=response.headers.get("x-request-id"),
                message_debug=str(body)[:500],
            )
        return body

    def _retry_after(self, response: httpx.Response) -> float:
        value = response.headers.get("retry-after")
        if value is None:
            return self.config.poll_interval
        try:
            return max(float(value), 0.0)
        except ValueError:
            return self.config.poll_interval

    def _wait_budget(self, context: RunContext) -> float | None:
        candidates = [self.config.max_wait_seconds, context.seconds_remaining()]
        if context.budgets and "max_wait_seconds" in context.budgets:
            candidates.append(float(context.budgets["max_wait_seconds"]))
        limits = [c for c in candidates if c is not None]
        if not limits:
            return None
        return max(min(limits), 0.0)

    # Upload

    async def upload(
        self,
        stream: bytes | bytearray | memoryview | IO[bytes],
        media_type: MediaType | str,
        context: RunContext | None = None,
    ) -> Asset:
        """Upload a document and return its asset handle.

        Every call creates a new asset, even for identical bytes.

        Args:
            stream: Document bytes or a binary file object.
            media_type: MediaType, MIME string or file extension.
            context: Optional run context.

        Returns:
            The new asset.

        Raises:
            ValidationError: If the media type is not supported.
            AuthError: If the credentials are rejected.
            TransportError: On network failure.
        """
        media = MediaType.coerce(media_type)
        data = _read_stream(stream)
        context = context or RunContext.new("upload")

        response = await self._api("POST", "/assets", context, json={"mediaType": media.value})
        body = self._json(response)
        asset_id = body.get("assetID")
        upload_uri = body.get("uploadUri")
        if not asset_id or not upload_uri:
            raise ServiceError(
                message_safe="Asset creation response is missing assetID or uploadUri",
                status_code=response.status_code,
                request_id=response.headers.get("x-request-id"),
                message_debug=str(body)[:500],
            )

        # The upload URI is pre-signed: no API credentials
        await self.http.put(
            upload_uri,
            context,
            content=data,
            headers={"Content-Type": media.value},
        )

        self.log.info(f"{context.log_prefix} Uploaded {len(data)} bytes as asset {asset_id}")
        return Asset(asset_id=asset_id, media_type=media.value, size=len(data))

    async def upload_file(
        self,
        path: str | Path,
        media_type: MediaType | str | None = None,
        context: RunContext | None = None,
    ) -> Asset:
        """Upload a local file; the media type is inferred from its extension if not given."""
        media = MediaType.coerce(media_type) if media_type is not None else MediaType.from_path(path)
        async with aiofiles.open(path, "rb") as f:
            data = await f.read()
        return await self.upload(data, media, context)

    # Jobs

    async def submit(self, job: PDFServicesJob, context: RunContext | None = None) -> JobHandle:
        """Submit a job and return its handle.

        Raises:
            QuotaExceededError: If usage limits are reached.
            ServiceError: If the service rejects the job or returns no location.
            AuthError: If the credentials are rejected.
        """
        context = context or RunContext.new(job.operation)
        response = await self._api(
            "POST",
            f"/operation/{job.operation}",
            context,
            json=job.to_payload(),
        )
        location = response.headers.get("location")
        if not location:
            raise ServiceError(
                message_safe=f"Submitting {job.operation} returned no job location",
                code=ErrorCode.MISSING_LOCATION,
                status_code=response.status_code,
                request_id=response.headers.get("x-request-id"),
            )
        self.log.info(f"{context.log_prefix} Submitted {type(job).__name__}")
        self.log.debug(f"{context.log_prefix} Job location: {location}")
        return JobHandle(location=location, operation=job.operation)

    async def poll(self, handle: JobHandle, context: RunContext | None = None) -> JobStatus:
        """Fetch the current status of a job once.

        Raises:
            NotFoundError: If the job is unknown or expired.
        """
        context = context or RunContext.new(handle.operation)
        response = await self._api("GET", handle.location, context)
        body = self._json(response)

        state = JobState.parse(body.get("status"))
        result = JobResult.from_payload(body) if state is JobState.DONE else None
        error = JobError.from_payload(body.get("error")) if state is JobState.FAILED else None

        return JobStatus(
            state=state,
            retry_after=self._retry_after(response),
            result=result,
            error=error,
            location=handle.location,
        )

    async def await_result(self, handle: JobHandle, context: RunContext | None = None) -> JobStatus:
        """Poll a job until it reaches DONE or FAILED.

        Sleeps for the service-suggested delay between polls.

        Returns:
            The terminal status (FAILED jobs included).

        Raises:
            JobTimeoutError: If the next wait would exceed the wait budget
                (ClientConfig.max_wait_seconds or the context deadline).
        """
        context = context or RunContext.new(handle.operation)
        budget = self._wait_budget(context)
        started = self._clock()
        polls = 0

        while True:
            status = await self.poll(handle, context)
            polls += 1
            if status.is_terminal:
                self.log.info(
                    f"{context.log_prefix} Job finished with state '{status.state.value}' after {polls} poll(s)"
                )
                return status

            elapsed = self._clock() - started
            if budget is not None and elapsed + status.retry_after > budget:
                self.log.warning(f"{context.log_prefix} Giving up on job after {elapsed:.1f}s")
                raise JobTimeoutError(handle.location, elapsed=elapsed, budget=budget)

            self.log.debug(f"{context.log_prefix} Job in progress, next poll in {status.retry_after}s")
            await self._sleep(status.retry_after)

    async def get_job_result(self, handle: JobHandle, context: RunContext | None = None) -> JobStatus:
        """Wait for a job and return its terminal status. Same as await_result."""
        return await self.await_result(handle, context)

    # Results

    async def get_content(self, asset: AnyAsset, context: RunContext | None = None) -> StreamAsset:
        """Download the bytes of an asset.

        Raises:
            NotFoundError: If the asset is unknown or its download URL expired.
            SDKError: For external assets, whose content lives in external storage.
        """
        if isinstance(asset, ExternalAsset):
            raise SDKError(
                "External assets are read from their own storage, not through the service"
            )
        context = context or RunContext.new("download")

        download_uri = asset.download_uri
        media_type = asset.media_type
        if not download_uri:
            response = await self._api("GET", f"/assets/{asset.asset_id}", context)
            body = self._json(response)
            download_uri = body.get("downloadUri")
            media_type = media_type or (body.get("metadata") or {}).get("type")
            if not download_uri:
                raise ServiceError(
                    message_safe=f"Asset {asset.asset_id} has no download URI",
                    status_code=response.status_code,
                    request_id=response.headers.get("x-request-id"),
                )

        response = await self.http.get(
            download_uri,
            context,
            not_found_statuses=DOWNLOAD_NOT_FOUND_STATUSES,
        )
        content = response.content
        self.log.debug(f"{context.log_prefix} Downloaded {len(content)} bytes of asset {asset.asset_id}")
        return StreamAsset(
            content=content,
            media_type=media_type or response.headers.get("content-type"),
        )

    async def delete_asset(self, asset: Asset, context: RunContext | None = None) -> None:
        """Delete an asset from the service."""
        context = context or RunContext.new("delete")
        await self._api("DELETE", f"/assets/{asset.asset_id}", context)
        self.log.debug(f"{context.log_prefix} Deleted asset {asset.asset_id}")
