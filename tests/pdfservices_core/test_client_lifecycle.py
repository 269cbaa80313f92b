"""Lifecycle tests for the PDFServices client against a fake service."""

import io
import json
from datetime import datetime, timedelta

import httpx
import pytest

from pdfservices_core.assets import Asset, ExternalAsset, MediaType
from pdfservices_core.auth.credentials import ServicePrincipalCredentials
from pdfservices_core.client import PDFServices
from pdfservices_core.config import ClientConfig
from pdfservices_core.jobs import CompressPDFJob, SplitPDFJob
from pdfservices_core.runtime.context import RunContext
from pdfservices_core.runtime.errors import (
    AuthError,
    JobTimeoutError,
    NotFoundError,
    SDKError,
    ServiceError,
    ValidationError,
)
from pdfservices_core.status import JobHandle, JobState

API = "https://pdf-services.test"
IMS = "https://ims.test/ims/token/v3"
STORAGE = "https://storage.test"


class FakePDFServicesAPI:
    """In-memory stand-in for IMS, the REST API and pre-signed storage."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.stored: dict[str, bytes] = {}
        self.job_statuses: list[httpx.Response] = []
        self.submit_headers = {"location": f"{API}/operation/compresspdf/job-1/status"}
        self.expired: set[str] = set()
        self.token_count = 0
        self.reject_api_token = False

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "pdf-services.test"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == IMS:
            self.token_count += 1
            return httpx.Response(
                200, json={"access_token": f"token-{self.token_count}", "expires_in": 86399}
            )

        if url.startswith(STORAGE):
            key = request.url.path.rsplit("/", 1)[-1]
            if request.method == "PUT":
                self.stored[key] = request.content
                return httpx.Response(200)
            if key in self.expired:
                return httpx.Response(403, text="Request has expired")
            return httpx.Response(200, content=self.stored[key], headers={"content-type": "application/pdf"})

        if self.reject_api_token:
            return httpx.Response(401, json={"error": {"code": "Unauthorized", "message": "Token expired"}})

        assert request.headers["authorization"].startswith("Bearer token-")
        assert request.headers["x-api-key"] == "cid"
        path = request.url.path

        if request.method == "POST" and path == "/assets":
            key = f"obj-{len(self.stored) + 1}"
            self.stored[key] = b""
            return httpx.Response(
                200,
                json={"assetID": f"urn:aaid:AS:{key}", "uploadUri": f"{STORAGE}/upload/{key}"},
            )

        if request.method == "GET" and path.startswith("/assets/"):
            key = path.rsplit(":", 1)[-1]
            return httpx.Response(
                200,
                json={"downloadUri": f"{STORAGE}/download/{key}", "metadata": {"type": "application/pdf"}},
            )

        if request.method == "DELETE" and path.startswith("/assets/"):
            return httpx.Response(204)

        if request.method == "POST" and path.startswith("/operation/"):
            return httpx.Response(201, headers=self.submit_headers)

        if request.method == "GET" and path.endswith("/status"):
            return self.job_statuses.pop(0)

        return httpx.Response(404)


def in_progress(retry_after: int = 1) -> httpx.Response:
    return httpx.Response(200, json={"status": "in progress"}, headers={"retry-after": str(retry_after)})


def done(key: str = "obj-1") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "status": "done",
            "asset": {
                "assetID": f"urn:aaid:AS:{key}",
                "downloadUri": f"{STORAGE}/download/{key}",
                "metadata": {"type": "application/pdf", "size": 5},
            },
        },
    )


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def api():
    return FakePDFServicesAPI()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeps(clock):
    recorded: list[float] = []

    async def sleep(seconds: float) -> None:
        recorded.append(seconds)
        clock.now += seconds

    sleep.recorded = recorded
    return sleep


@pytest.fixture
def client(api, sleeps, clock):
    return PDFServices(
        ServicePrincipalCredentials(client_id="cid", client_secret="csecret"),
        ClientConfig(base_url=API, ims_endpoint=IMS, max_wait_seconds=30),
        transport=httpx.MockTransport(api),
        sleep=sleeps,
        clock=clock,
    )


@pytest.fixture
def context():
    return RunContext(request_id="lifecycle-1", operation="compresspdf")


class TestUpload:
    """Tests for uploading documents."""

    @pytest.mark.asyncio
    async def test_upload_creates_asset_and_puts_bytes(self, client, api, context):
        """Should create an asset then PUT the bytes to the pre-signed URI."""
        asset = await client.upload(b"%PDF-1.7 data", MediaType.PDF, context)

        assert asset.asset_id == "urn:aaid:AS:obj-1"
        assert asset.media_type == "application/pdf"
        assert asset.size == 13
        assert api.stored["obj-1"] == b"%PDF-1.7 data"

        create = next(r for r in api.requests if r.url.path == "/assets")
        assert json.loads(create.content) == {"mediaType": "application/pdf"}
        put = next(r for r in api.requests if r.method == "PUT")
        assert put.headers["content-type"] == "application/pdf"
        assert "authorization" not in put.headers

    @pytest.mark.asyncio
    async def test_upload_from_binary_stream(self, client, api, context):
        """Should accept an open binary file."""
        asset = await client.upload(io.BytesIO(b"docx bytes"), "docx", context)

        assert api.stored[asset.asset_id.rsplit(":", 1)[-1]] == b"docx bytes"
        create = next(r for r in api.requests if r.url.path == "/assets")
        assert json.loads(create.content)["mediaType"] == MediaType.DOCX.value

    @pytest.mark.asyncio
    async def test_identical_uploads_get_distinct_assets(self, client, context):
        """Should create a new asset per upload."""
        first = await client.upload(b"same", MediaType.PDF, context)
        second = await client.upload(b"same", MediaType.PDF, context)

        assert first.asset_id != second.asset_id

    @pytest.mark.asyncio
    async def test_unsupported_media_type_sends_nothing(self, client, api, context):
        """Should fail validation before any request."""
        with pytest.raises(ValidationError) as exc_info:
            await client.upload(b"x", "application/x-unknown", context)

        assert exc_info.value.field == "media_type"
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_text_stream_rejected(self, client, api, context):
        """Should require a binary stream."""
        with pytest.raises(ValidationError):
            await client.upload(io.StringIO("text"), MediaType.TXT, context)

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_upload_file_infers_media_type(self, client, api, context, tmp_path):
        """Should read the file and infer the type from its extension."""
        path = tmp_path / "input.pdf"
        path.write_bytes(b"%PDF-1.4")

        asset = await client.upload_file(path, context=context)

        assert asset.media_type == "application/pdf"
        assert api.stored["obj-1"] == b"%PDF-1.4"

    @pytest.mark.asyncio
    async def test_token_fetched_once(self, client, api, context):
        """Should reuse the access token across calls."""
        await client.upload(b"a", MediaType.PDF, context)
        await client.upload(b"b", MediaType.PDF, context)

        assert api.token_count == 1


class TestJobLifecycle:
    """Tests for submit, poll and await."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, client, api, sleeps, context):
        """Should upload, submit, poll through IN_PROGRESS and fetch the result."""
        api.job_statuses = [in_progress(1), in_progress(1), done()]

        asset = await client.upload(b"hello", MediaType.PDF, context)
        handle = await client.submit(CompressPDFJob(input=asset), context)
        status = await client.await_result(handle, context)

        assert handle.operation == "compresspdf"
        assert handle.location == f"{API}/operation/compresspdf/job-1/status"
        assert status.state is JobState.DONE
        assert status.succeeded
        assert sleeps.recorded == [1.0, 1.0]
        assert status.result.asset.asset_id == "urn:aaid:AS:obj-1"

        submit = next(r for r in api.requests if r.url.path == "/operation/compresspdf")
        assert json.loads(submit.content) == {"assetID": "urn:aaid:AS:obj-1"}

        stream = await client.get_content(status.result.asset, context)
        assert stream.content == b"hello"
        assert stream.media_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_poll_reports_in_progress(self, client, api, context):
        """Should return a single non-terminal observation."""
        api.job_statuses = [in_progress(3)]
        handle = JobHandle(location=f"{API}/operation/compresspdf/job-1/status", operation="compresspdf")

        status = await client.poll(handle, context)

        assert status.state is JobState.IN_PROGRESS
        assert not status.is_terminal
        assert status.retry_after == 3.0
        assert status.result is None

    @pytest.mark.asyncio
    async def test_missing_retry_after_uses_poll_interval(self, client, api, context):
        """Should fall back to the configured poll interval."""
        api.job_statuses = [httpx.Response(200, json={"status": "in progress"})]
        handle = JobHandle(location=f"{API}/operation/compresspdf/job-1/status", operation="compresspdf")

        status = await client.poll(handle, context)

        assert status.retry_after == client.config.poll_interval

    @pytest.mark.asyncio
    async def test_failed_job_is_returned(self, client, api, sleeps, context):
        """Should return FAILED as a status with error details."""
        api.job_statuses = [
            httpx.Response(
                200,
                json={
                    "status": "failed",
                    "error": {"code": "BAD_PDF", "message": "Input file is corrupted", "status": 400},
                },
            )
        ]
        handle = await client.submit(CompressPDFJob(input=Asset(asset_id="urn:aaid:AS:x")), context)

        status = await client.await_result(handle, context)

        assert status.state is JobState.FAILED
        assert not status.succeeded
        assert status.error.code == "BAD_PDF"
        assert status.error.status == 400
        assert sleeps.recorded == []

    @pytest.mark.asyncio
    async def test_multi_asset_result(self, client, api, context):
        """Should collect assetList outputs."""
        api.submit_headers = {"location": f"{API}/operation/splitpdf/job-2/status"}
        api.job_statuses = [
            httpx.Response(
                200,
                json={
                    "status": "done",
                    "assetList": [{"assetID": "urn:aaid:AS:p1"}, {"assetID": "urn:aaid:AS:p2"}],
                },
            )
        ]
        handle = await client.submit(SplitPDFJob(input=Asset(asset_id="urn:aaid:AS:x"), page_count=1), context)

        status = await client.get_job_result(handle, context)

        assert [a.asset_id for a in status.result.assets] == ["urn:aaid:AS:p1", "urn:aaid:AS:p2"]
        assert status.result.asset is None

    @pytest.mark.asyncio
    async def test_timeout_when_budget_exceeded(self, client, api, sleeps, context):
        """Should raise JobTimeoutError before a wait that would exceed the budget."""
        api.job_statuses = [in_progress(20), in_progress(20)]
        handle = await client.submit(CompressPDFJob(input=Asset(asset_id="urn:aaid:AS:x")), context)

        with pytest.raises(JobTimeoutError) as exc_info:
            await client.await_result(handle, context)

        assert sleeps.recorded == [20.0]
        assert exc_info.value.location == handle.location
        assert exc_info.value.elapsed == 20.0
        assert exc_info.value.budget == 30.0

    @pytest.mark.asyncio
    async def test_context_budget_tightens_wait(self, client, api, sleeps, context):
        """Should honour a smaller per-call wait budget."""
        api.job_statuses = [in_progress(5)]
        handle = await client.submit(CompressPDFJob(input=Asset(asset_id="urn:aaid:AS:x")), context)

        with pytest.raises(JobTimeoutError):
            await client.await_result(handle, context.with_budgets(max_wait_seconds=2))

        assert sleeps.recorded == []

    @pytest.mark.asyncio
    async def test_naive_deadline_allows_completion(self, client, api, sleeps, context):
        """Should accept a local deadline without a timezone and finish the job."""
        api.job_statuses = [in_progress(1), done()]
        handle = await client.submit(CompressPDFJob(input=Asset(asset_id="urn:aaid:AS:x")), context)

        status = await client.await_result(handle, context.with_deadline(datetime.now() + timedelta(minutes=5)))

        assert status.state is JobState.DONE
        assert sleeps.recorded == [1.0]

    @pytest.mark.asyncio
    async def test_naive_deadline_limits_wait(self, client, api, sleeps, context):
        """Should apply a naive deadline as the wait budget."""
        api.job_statuses = [in_progress(5)]
        handle = await client.submit(CompressPDFJob(input=Asset(asset_id="urn:aaid:AS:x")), context)

        with pytest.raises(JobTimeoutError) as exc_info:
            await client.await_result(handle, context.with_deadline(datetime.now() + timedelta(seconds=3)))

        assert exc_info.value.budget <= 3.0
        assert sleeps.recorded == []

    @pytest.mark.asyncio
    async def test_missing_location_is_service_error(self, client, api, context):
        """Should reject a submit response without a location."""
        api.submit_headers = {}

        with pytest.raises(ServiceError) as exc_info:
            await client.submit(CompressPDFJob(input=Asset(asset_id="urn:aaid:AS:x")), context)

        assert exc_info.value.code == "MISSING_LOCATION"

    @pytest.mark.asyncio
    async def test_unknown_job_is_not_found(self, client, api, context):
        """Should raise NotFoundError for an unknown job location."""
        api.job_statuses = [httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "No such job"}})]
        handle = JobHandle(location=f"{API}/operation/compresspdf/gone/status", operation="compresspdf")

        with pytest.raises(NotFoundError):
            await client.poll(handle, context)

    @pytest.mark.asyncio
    async def test_rejected_token_is_dropped(self, client, api, context):
        """Should raise AuthError and fetch a new token on the next call."""
        api.reject_api_token = True

        with pytest.raises(AuthError):
            await client.upload(b"x", MediaType.PDF, context)

        api.reject_api_token = False
        await client.upload(b"x", MediaType.PDF, context)

        assert api.token_count == 2


class TestContent:
    """Tests for downloading and deleting assets."""

    @pytest.mark.asyncio
    async def test_round_trip_is_byte_identical(self, client, context):
        """Should download exactly the uploaded bytes."""
        data = bytes(range(256)) * 4

        asset = await client.upload(data, MediaType.PDF, context)
        stream = await client.get_content(asset, context)

        assert stream.content == data
        assert len(stream) == len(data)

    @pytest.mark.asyncio
    async def test_resolves_download_uri(self, client, api, context):
        """Should look up the download URI when the asset has none."""
        await client.upload(b"abc", MediaType.PDF, context)

        await client.get_content(Asset(asset_id="urn:aaid:AS:obj-1"), context)

        lookup = [r for r in api.api_requests if r.method == "GET" and r.url.path.startswith("/assets/")]
        assert len(lookup) == 1

    @pytest.mark.asyncio
    async def test_expired_download_is_not_found(self, client, api, context):
        """Should report an expired pre-signed URL as NotFoundError."""
        asset = await client.upload(b"abc", MediaType.PDF, context)
        api.expired.add("obj-1")

        with pytest.raises(NotFoundError) as exc_info:
            await client.get_content(asset, context)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_external_asset_content_is_sdk_error(self, client, api):
        """Should refuse to download external assets."""
        with pytest.raises(SDKError):
            await client.get_content(ExternalAsset(uri="https://bucket.example/out.pdf"))

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_delete_asset(self, client, api, context):
        """Should DELETE the asset by id."""
        await client.delete_asset(Asset(asset_id="urn:aaid:AS:obj-9"), context)

        delete = [r for r in api.api_requests if r.method == "DELETE"]
        assert delete[0].url.path == "/assets/urn:aaid:AS:obj-9"


class TestLifecycle:
    """Tests for client lifecycle."""

    @pytest.mark.asyncio
    async def test_context_manager_closes_http(self, api):
        """Should close the HTTP client on exit."""
        async with PDFServices(
            ServicePrincipalCredentials(client_id="cid", client_secret="csecret"),
            ClientConfig(base_url=API, ims_endpoint=IMS),
            transport=httpx.MockTransport(api),
        ) as client:
            await client.upload(b"x", MediaType.PDF)

        assert client.http._client is None
