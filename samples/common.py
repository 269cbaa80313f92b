"""
Shared plumbing for the sample programs.

Every sample follows the same shape: parse arguments, configure logging,
build a client from settings, run one operation, save the result. Errors of
every kind are logged at this boundary and the process exits with code 0.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Sequence

from loguru import logger

from pdfservices_core.assets import Asset, MediaType
from pdfservices_core.auth.credentials import load_credentials
from pdfservices_core.client import PDFServices
from pdfservices_core.config import ClientConfig, Settings, settings
from pdfservices_core.jobs.params import PageRanges
from pdfservices_core.logging import setup_logging
from pdfservices_core.output import create_output_path, save_stream_asset, save_stream_assets
from pdfservices_core.runtime.context import RunContext
from pdfservices_core.runtime.errors import (
    AuthError,
    JobTimeoutError,
    PDFServicesError,
    QuotaExceededError,
    SDKError,
    ServiceError,
    TransportError,
    ValidationError,
)
from pdfservices_core.runtime.retry import RetryPolicy, retry_call
from pdfservices_core.status import JobStatus

SampleOperation = Callable[[PDFServices, argparse.Namespace], Awaitable[Any]]

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"

# Uploads are repeated on transport errors and 5xx; the job calls are not
UPLOAD_RETRY_POLICY = RetryPolicy(max_attempts=3, base_delay=2.0)


def create_client(source: Settings | None = None, **kwargs: Any) -> PDFServices:
    """Build a client from settings (credentials, region, timeouts, proxy)."""
    source = source or settings
    credentials = load_credentials(source)
    return PDFServices(credentials, ClientConfig.from_settings(source), **kwargs)


def _is_bundled(default_input: str | list[str]) -> bool:
    paths = default_input if isinstance(default_input, list) else [default_input]
    return all(Path(p).is_file() for p in paths)


def build_parser(
    description: str | None,
    default_input: str | list[str] | None = None,
) -> argparse.ArgumentParser:
    """Argument parser with the options every sample shares.

    ``--input`` falls back to ``default_input`` only when those files exist;
    otherwise it is required.
    """
    parser = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    if default_input is not None:
        many = isinstance(default_input, list)
        if _is_bundled(default_input):
            input_options: dict[str, Any] = {"default": default_input}
        else:
            input_options = {"required": True}
        parser.add_argument(
            "--input",
            nargs="+" if many else None,
            help="Input files" if many else "Input file",
            **input_options,
        )
    parser.add_argument(
        "--output-dir",
        default=settings.OUTPUT_DIR,
        help="Directory for results (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Log level (default: %(default)s)",
    )
    return parser


def resource(name: str) -> str:
    """Path of a bundled sample input."""
    return str(RESOURCES_DIR / name)


def parse_page_spec(value: str) -> tuple[str, int, PageRanges | None]:
    """Parse ``path:base_page[:page_ranges]`` as used by insert and replace.

    Raises:
        ValidationError: If the base page is missing or not a number.
    """
    parts = value.rsplit(":", 2)
    if len(parts) == 3 and not parts[1].isdigit():
        parts = value.rsplit(":", 1)
    if len(parts) < 2 or not parts[1].isdigit():
        raise ValidationError(f"Expected path:base_page[:page_ranges], got {value!r}", field="base_page")
    page_ranges = PageRanges.parse(parts[2]) if len(parts) == 3 else None
    return parts[0], int(parts[1]), page_ranges


def check_succeeded(status: JobStatus) -> bool:
    """Log a failed job; return whether the job produced a result."""
    if status.succeeded and status.result is not None:
        return True
    if status.error is not None:
        logger.error(f"Job failed: [{status.error.code}] {status.error.message}")
    else:
        logger.error(f"Job ended in state '{status.state.value}' without a result")
    return False


async def upload_input(
    client: PDFServices,
    path: str | Path,
    media_type: MediaType | str | None = None,
    context: RunContext | None = None,
    policy: RetryPolicy = UPLOAD_RETRY_POLICY,
) -> Asset:
    """Upload a local input, retrying transient failures."""
    return await retry_call(client.upload_file, path, media_type, context, policy=policy)


async def save_asset(
    client: PDFServices,
    asset: Asset,
    output_dir: str,
    operation: str,
    extension: str,
    context: RunContext,
) -> Path:
    """Download one asset to a timestamped file."""
    stream = await client.get_content(asset, context)
    return await save_stream_asset(stream, create_output_path(output_dir, operation, extension))


async def save_result(
    client: PDFServices,
    status: JobStatus,
    output_dir: str,
    operation: str,
    extension: str,
    context: RunContext,
) -> list[Path]:
    """Download the outputs of a finished job.

    Multi-file results are saved with an index suffix per file.

    Returns:
        Paths written; empty if the job failed.
    """
    if not check_succeeded(status):
        return []
    result = status.result
    if result.assets:
        streams = [await client.get_content(asset, context) for asset in result.assets]
        return await save_stream_assets(streams, output_dir, operation, extension)
    if result.asset is None:
        logger.warning("Job finished without an output asset")
        return []
    return [await save_asset(client, result.asset, output_dir, operation, extension, context)]


async def _execute(
    operation: SampleOperation,
    args: argparse.Namespace,
    client_factory: Callable[[], PDFServices],
) -> None:
    async with client_factory() as client:
        await operation(client, args)


def run_sample(
    operation: SampleOperation,
    argv: Sequence[str] | None = None,
    description: str | None = None,
    default_input: str | list[str] | None = None,
    configure: Callable[[argparse.ArgumentParser], None] | None = None,
    client_factory: Callable[[], PDFServices] = create_client,
) -> int:
    """Run one sample operation end to end.

    Args:
        operation: Coroutine function taking (client, args).
        argv: Command line arguments; sys.argv if None.
        description: Help text for the parser.
        default_input: Default input path(s); a list allows several inputs.
        configure: Hook adding sample specific arguments.
        client_factory: Builds the client; from settings by default.

    Returns:
        Process exit code, always 0.
    """
    parser = build_parser(description, default_input)
    if configure is not None:
        configure(parser)
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level.upper())

    try:
        asyncio.run(_execute(operation, args, client_factory))
    except (
        AuthError,
        QuotaExceededError,
        ServiceError,
        SDKError,
        TransportError,
        JobTimeoutError,
    ) as e:
        logger.error(f"Exception encountered while executing operation: {e} ({e.kind.value}, debug_id={e.debug_id})")
    except PDFServicesError as e:
        logger.error(f"Exception encountered while executing operation: {e!r}")
    except OSError as e:
        logger.error(f"Exception encountered while executing operation: {e}")
    except Exception:
        logger.exception("Exception encountered while executing operation")
    return 0
