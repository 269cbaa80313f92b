"""
Add a watermark to a PDF, taken from the first page of a watermark PDF.

Usage:
    python -m samples.pdf_watermark --input watermarkPDFInput.pdf --watermark watermark.pdf
    python -m samples.pdf_watermark --input in.pdf --watermark watermark.pdf --page-ranges 2-5,8 --opacity 50 --foreground
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import PageRanges, PDFWatermarkJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--watermark", required=True, help="Watermark PDF")
    parser.add_argument("--page-ranges", default=None, help="Pages to watermark (all if omitted)")
    parser.add_argument("--opacity", type=int, default=None, help="Opacity 0-100")
    parser.add_argument("--foreground", action="store_true", help="Place watermark above content")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("watermark")
    page_ranges = PageRanges.parse(args.page_ranges) if args.page_ranges else None

    document = await upload_input(client, args.input, MediaType.PDF, context)
    watermark = await upload_input(client, args.watermark, MediaType.PDF, context)

    job = PDFWatermarkJob(
        input=document,
        watermark=watermark,
        page_ranges=page_ranges,
        opacity=args.opacity,
        appear_on_foreground=True if args.foreground else None,
    )
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "watermark", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("watermarkPDFInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
