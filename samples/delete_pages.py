"""
Delete pages from a PDF.

Usage:
    python -m samples.delete_pages --input deletePagesInput.pdf --page-ranges 1,3-4
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import DeletePagesJob, PageRanges
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page-ranges", default="1,3-4", help="Pages to delete (default: %(default)s)")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("delete")
    page_ranges = PageRanges.parse(args.page_ranges)
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = DeletePagesJob(input=asset, page_ranges=page_ranges)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "delete", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("deletePagesInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
