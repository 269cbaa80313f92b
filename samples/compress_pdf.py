"""
Compress a PDF, optionally choosing the compression level.

Usage:
    python -m samples.compress_pdf --input compressPDFInput.pdf --level LOW
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import CompressionLevel, CompressPDFJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--level",
        choices=[level.value for level in CompressionLevel],
        default=None,
        help="Compression level (service default if omitted)",
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("compress")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    level = CompressionLevel(args.level) if args.level else None
    job = CompressPDFJob(input=asset, compression_level=level)

    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "compress", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("compressPDFInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
