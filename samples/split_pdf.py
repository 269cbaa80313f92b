"""
Split a PDF into several files, by pages per file, number of files or page
ranges (one output file per range).

Usage:
    python -m samples.split_pdf --input splitPDFInput.pdf --page-count 2
    python -m samples.split_pdf --file-count 3
    python -m samples.split_pdf --page-ranges 1,3-4
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import PageRanges, SplitPDFJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--page-count", type=int, default=None, help="Pages per output file")
    group.add_argument("--file-count", type=int, default=None, help="Number of output files")
    group.add_argument("--page-ranges", default=None, help='Page ranges, e.g. "1,3-4"')


def build_job(asset, args: argparse.Namespace) -> SplitPDFJob:
    if args.file_count is not None:
        return SplitPDFJob(input=asset, file_count=args.file_count)
    if args.page_ranges is not None:
        return SplitPDFJob(input=asset, page_ranges=PageRanges.parse(args.page_ranges))
    return SplitPDFJob(input=asset, page_count=args.page_count or 2)


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("split")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    handle = await client.submit(build_job(asset, args), context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "split", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("splitPDFInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
