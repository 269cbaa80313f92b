"""
Create a PDF from a DOCX held in external storage and write the result back
to external storage, polling the job explicitly.

Both locations are pre-signed URLs; nothing is uploaded or downloaded through
the service.

Usage:
    python -m samples.external_storage_create_pdf \
        --input-url <INPUT_PRESIGNED_URL> --output-url <OUTPUT_PRESIGNED_URL>
"""

import argparse
import asyncio

from loguru import logger

from pdfservices_core.assets import ExternalAsset, ExternalStorageType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import CreatePDFJob
from pdfservices_core.runtime.context import RunContext
from samples.common import check_succeeded, run_sample


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input-url", required=True, help="Pre-signed URL of the input DOCX")
    parser.add_argument("--output-url", required=True, help="Pre-signed URL for the output PDF")
    parser.add_argument(
        "--storage",
        choices=[s.value for s in ExternalStorageType],
        default=ExternalStorageType.S3.value,
    )


async def run(client: PDFServices, args: argparse.Namespace, sleep=asyncio.sleep):
    context = RunContext.new("create-external")
    storage = ExternalStorageType(args.storage)

    job = CreatePDFJob(
        input=ExternalAsset(uri=args.input_url, storage_type=storage),
        output=ExternalAsset(uri=args.output_url, storage_type=storage),
    )
    handle = await client.submit(job, context)

    status = await client.poll(handle, context)
    while not status.is_terminal:
        await sleep(status.retry_after)
        status = await client.poll(handle, context)

    if status.succeeded:
        logger.info("Output is now available on the provided output external storage.")
    else:
        check_succeeded(status)
    return status


def main(argv=None) -> int:
    return run_sample(run, argv, description=__doc__, configure=configure)


if __name__ == "__main__":
    raise SystemExit(main())
