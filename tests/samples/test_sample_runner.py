"""Tests for the shared sample plumbing and a few sample programs."""

import argparse
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pdfservices_core.assets import Asset, MediaType, StreamAsset
from pdfservices_core.jobs import CompressPDFJob, ReplacePagesJob, SplitPDFJob
from pdfservices_core.runtime.errors import (
    AuthError,
    JobTimeoutError,
    NotFoundError,
    QuotaExceededError,
    SDKError,
    ServiceError,
    TransportError,
    UnknownError,
    ValidationError,
)
from pdfservices_core.runtime.retry import RetryPolicy
from pdfservices_core.status import JobError, JobHandle, JobResult, JobState, JobStatus
from samples import compress_pdf, replace_pages, split_pdf
from samples.common import build_parser, parse_page_spec, run_sample, save_result, upload_input


class FakeClient:
    """Async context manager standing in for PDFServices."""

    def __init__(self):
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        self.closed = True


def raising(error: Exception):
    async def operation(client, args):
        raise error

    return operation


def done_status(*assets: Asset, single: Asset | None = None) -> JobStatus:
    return JobStatus(state=JobState.DONE, result=JobResult(asset=single, assets=assets))


class TestRunSample:
    """Tests for the sample runner."""

    def test_runs_operation_with_parsed_args(self, tmp_path):
        """Should pass the parsed arguments and close the client."""
        client = FakeClient()
        seen = {}

        async def operation(c, args):
            seen["client"] = c
            seen["args"] = args

        code = run_sample(
            operation,
            ["--input", "in.pdf", "--output-dir", str(tmp_path), "--log-level", "error"],
            default_input="default.pdf",
            client_factory=lambda: client,
        )

        assert code == 0
        assert seen["client"] is client
        assert seen["args"].input == "in.pdf"
        assert seen["args"].output_dir == str(tmp_path)
        assert client.closed

    @pytest.mark.parametrize(
        "error",
        [
            AuthError(),
            QuotaExceededError(),
            ServiceError("rejected", status_code=400),
            NotFoundError(),
            SDKError("misuse"),
            ValidationError("bad", field="x"),
            TransportError("down"),
            JobTimeoutError("https://loc", elapsed=3.0, budget=2.0),
            UnknownError(),
        ],
    )
    def test_errors_are_logged_and_exit_zero(self, error):
        """Should log every error kind and still exit with 0."""
        with patch("samples.common.logger") as mock_logger:
            code = run_sample(raising(error), ["--log-level", "ERROR"], client_factory=FakeClient)

        assert code == 0
        message = mock_logger.error.call_args[0][0]
        assert message.startswith("Exception encountered while executing operation")

    def test_os_error_is_logged(self):
        """Should log missing input files."""
        with patch("samples.common.logger") as mock_logger:
            code = run_sample(raising(FileNotFoundError("in.pdf")), ["--log-level", "ERROR"], client_factory=FakeClient)

        assert code == 0
        mock_logger.error.assert_called_once()

    def test_unexpected_error_logged_with_traceback(self):
        """Should log unexpected exceptions with their traceback."""
        with patch("samples.common.logger") as mock_logger:
            code = run_sample(raising(RuntimeError("boom")), ["--log-level", "ERROR"], client_factory=FakeClient)

        assert code == 0
        mock_logger.exception.assert_called_once()

    def test_missing_credentials_exit_zero(self):
        """Should log an AuthError raised while building the client."""

        def factory():
            raise AuthError(message_safe="PDF_SERVICES_CLIENT_ID and PDF_SERVICES_CLIENT_SECRET must be set")

        with patch("samples.common.logger") as mock_logger:
            code = run_sample(raising(AssertionError("not reached")), ["--log-level", "ERROR"], client_factory=factory)

        assert code == 0
        assert "PDF_SERVICES_CLIENT_ID" in mock_logger.error.call_args[0][0]


class TestBuildParser:
    """Tests for the shared parser."""

    def test_multiple_inputs(self, tmp_path):
        """Should accept several inputs when the default is a list."""
        first, second = tmp_path / "a.pdf", tmp_path / "b.pdf"
        first.write_bytes(b"%PDF")
        second.write_bytes(b"%PDF")
        parser = build_parser("combine", default_input=[str(first), str(second)])

        assert parser.parse_args([]).input == [str(first), str(second)]
        assert parser.parse_args(["--input", "x.pdf", "y.pdf", "z.pdf"]).input == ["x.pdf", "y.pdf", "z.pdf"]

    def test_bundled_default_is_used(self, tmp_path):
        """Should fall back to a default input that exists."""
        bundled = tmp_path / "in.pdf"
        bundled.write_bytes(b"%PDF")

        assert build_parser("compress", default_input=str(bundled)).parse_args([]).input == str(bundled)

    def test_input_required_without_bundled_file(self, tmp_path):
        """Should require --input when the default file is not bundled."""
        parser = build_parser("compress", default_input=str(tmp_path / "missing.pdf"))

        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args([])

        assert exc_info.value.code == 2
        assert parser.parse_args(["--input", "mine.pdf"]).input == "mine.pdf"

    def test_inputs_required_when_any_default_missing(self, tmp_path):
        """Should require --input when one of several defaults is missing."""
        present = tmp_path / "a.pdf"
        present.write_bytes(b"%PDF")
        parser = build_parser("combine", default_input=[str(present), str(tmp_path / "b.pdf")])

        with pytest.raises(SystemExit):
            parser.parse_args([])

    def test_missing_input_exits_before_running(self, tmp_path):
        """Should stop at argument parsing instead of running the operation."""
        operation = AsyncMock()

        with pytest.raises(SystemExit):
            run_sample(
                operation,
                ["--log-level", "ERROR"],
                default_input=str(tmp_path / "missing.pdf"),
                client_factory=FakeClient,
            )

        operation.assert_not_awaited()

    def test_no_input_option(self):
        """Should omit --input when there is no default input."""
        args = build_parser("external").parse_args([])

        assert not hasattr(args, "input")


class TestParsePageSpec:
    """Tests for path:base_page[:ranges] parsing."""

    def test_path_and_page(self):
        """Should parse a path and base page."""
        assert parse_page_spec("insert.pdf:2") == ("insert.pdf", 2, None)

    def test_with_ranges(self):
        """Should parse optional page ranges."""
        path, page, ranges = parse_page_spec("insert.pdf:3:1-2,4")

        assert (path, page) == ("insert.pdf", 3)
        assert str(ranges) == "1-2,4"

    def test_path_with_colon(self):
        """Should keep colons that belong to the path."""
        assert parse_page_spec("C:/docs/insert.pdf:5")[:2] == ("C:/docs/insert.pdf", 5)

    @pytest.mark.parametrize("value", ["insert.pdf", "insert.pdf:x", "insert.pdf:"])
    def test_invalid(self, value):
        """Should reject a missing or non-numeric base page."""
        with pytest.raises(ValidationError) as exc_info:
            parse_page_spec(value)

        assert exc_info.value.field == "base_page"


class TestSaveResult:
    """Tests for downloading job outputs."""

    @pytest.mark.asyncio
    async def test_saves_single_asset(self, tmp_path):
        """Should write the primary asset."""
        client = MagicMock()
        client.get_content = AsyncMock(return_value=StreamAsset(content=b"%PDF"))

        paths = await save_result(
            client, done_status(single=Asset(asset_id="a")), str(tmp_path), "compress", "pdf", MagicMock()
        )

        assert len(paths) == 1
        assert paths[0].name.startswith("compress-")
        assert paths[0].read_bytes() == b"%PDF"

    @pytest.mark.asyncio
    async def test_saves_indexed_assets(self, tmp_path):
        """Should write one indexed file per asset of a multi-file result."""
        client = MagicMock()
        client.get_content = AsyncMock(side_effect=[StreamAsset(content=b"1"), StreamAsset(content=b"2")])

        paths = await save_result(
            client,
            done_status(Asset(asset_id="p1"), Asset(asset_id="p2")),
            str(tmp_path),
            "split",
            "pdf",
            MagicMock(),
        )

        assert [p.stem.rsplit("_", 1)[-1] for p in paths] == ["0", "1"]
        assert paths[1].read_bytes() == b"2"

    @pytest.mark.asyncio
    async def test_failed_job_saves_nothing(self, tmp_path):
        """Should not download anything for a failed job."""
        client = MagicMock()
        client.get_content = AsyncMock()
        status = JobStatus(state=JobState.FAILED, error=JobError(code="BAD_PDF", message="corrupt"))

        paths = await save_result(client, status, str(tmp_path), "compress", "pdf", MagicMock())

        assert paths == []
        client.get_content.assert_not_awaited()


class TestSamples:
    """Tests for individual sample programs."""

    @pytest.mark.asyncio
    async def test_compress_sample(self, tmp_path):
        """Should upload, submit a compress job and save the output."""
        input_asset = Asset(asset_id="urn:aaid:AS:in")
        client = MagicMock()
        client.upload_file = AsyncMock(return_value=input_asset)
        client.submit = AsyncMock(return_value=JobHandle(location="https://loc", operation="compresspdf"))
        client.get_job_result = AsyncMock(return_value=done_status(single=Asset(asset_id="urn:aaid:AS:out")))
        client.get_content = AsyncMock(return_value=StreamAsset(content=b"small"))
        args = argparse.Namespace(input="in.pdf", output_dir=str(tmp_path), level="HIGH")

        paths = await compress_pdf.run(client, args)

        job = client.submit.await_args[0][0]
        assert isinstance(job, CompressPDFJob)
        assert job.input == input_asset
        assert job.compression_level.value == "HIGH"
        assert paths[0].read_bytes() == b"small"

    @pytest.mark.parametrize(
        "argv, expected",
        [
            ([], {"pageCount": 2}),
            (["--page-count", "3"], {"pageCount": 3}),
            (["--file-count", "4"], {"fileCount": 4}),
            (["--page-ranges", "1,3-4"], {"pageRanges": [{"start": 1, "end": 1}, {"start": 3, "end": 4}]}),
        ],
    )
    def test_split_options(self, argv, expected):
        """Should build the split option from the command line."""
        parser = argparse.ArgumentParser()
        split_pdf.configure(parser)

        job = split_pdf.build_job(Asset(asset_id="a"), parser.parse_args(argv))

        assert isinstance(job, SplitPDFJob)
        assert job.to_payload()["splitoption"] == expected

    def test_split_options_are_exclusive(self):
        """Should refuse more than one split option."""
        parser = argparse.ArgumentParser()
        split_pdf.configure(parser)

        with pytest.raises(SystemExit):
            parser.parse_args(["--page-count", "2", "--file-count", "3"])


class TestUploadInput:
    """Tests for uploads with caller-side retry."""

    @pytest.mark.asyncio
    async def test_retries_transient_failure(self):
        """Should repeat an upload that hit a transport error."""
        asset = Asset(asset_id="urn:aaid:AS:in")
        client = MagicMock()
        client.upload_file = AsyncMock(side_effect=[TransportError("connection reset"), asset])

        result = await upload_input(
            client, "in.pdf", MediaType.PDF, None, policy=RetryPolicy(base_delay=0, jitter=False)
        )

        assert result == asset
        assert client.upload_file.await_count == 2
        client.upload_file.assert_awaited_with("in.pdf", MediaType.PDF, None)

    @pytest.mark.asyncio
    async def test_does_not_retry_rejected_upload(self):
        """Should surface non-retryable errors on the first attempt."""
        client = MagicMock()
        client.upload_file = AsyncMock(side_effect=QuotaExceededError())

        with pytest.raises(QuotaExceededError):
            await upload_input(client, "in.pdf", policy=RetryPolicy(base_delay=0, jitter=False))

        assert client.upload_file.await_count == 1


class TestReplacePagesSample:
    """Tests for the replace pages program."""

    def test_replace_option_required(self):
        """Should refuse to run without a replacement."""
        parser = argparse.ArgumentParser()
        replace_pages.configure(parser)

        with pytest.raises(SystemExit):
            parser.parse_args([])

    @pytest.mark.asyncio
    async def test_passes_base_page_count(self, tmp_path):
        """Should build a job that closes at the base document's last page."""
        client = MagicMock()
        client.upload_file = AsyncMock(side_effect=[Asset(asset_id="base"), Asset(asset_id="last")])
        client.submit = AsyncMock(return_value=JobHandle(location="https://loc", operation="combinepdf"))
        client.get_job_result = AsyncMock(return_value=done_status(single=Asset(asset_id="out")))
        client.get_content = AsyncMock(return_value=StreamAsset(content=b"%PDF"))
        parser = argparse.ArgumentParser()
        replace_pages.configure(parser)
        args = parser.parse_args(["--replace", "last.pdf:4", "--base-page-count", "4"])
        args.input = "base.pdf"
        args.output_dir = str(tmp_path)

        await replace_pages.run(client, args)

        job = client.submit.await_args[0][0]
        assert isinstance(job, ReplacePagesJob)
        assert job.base_page_count == 4
        assert job.to_payload()["assets"] == [
            {"assetID": "base", "pageRanges": [{"start": 1, "end": 3}]},
            {"assetID": "last"},
        ]
