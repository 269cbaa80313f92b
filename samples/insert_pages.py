"""
Insert pages of other PDFs into a base PDF.

Pages 1-3 of the first file go before page 2 of the base document; all pages
of the second file go before page 3.

Usage:
    python -m samples.insert_pages --input baseInput.pdf \
        --insert firstFileToInsertInput.pdf:2:1-3 --insert secondFileToInsertInput.pdf:3
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import InsertPagesJob, PageInsertion
from pdfservices_core.runtime.context import RunContext
from samples.common import parse_page_spec, resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--insert",
        action="append",
        required=True,
        help="path:base_page[:page_ranges]; repeat for several files",
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("insert")
    specs = [parse_page_spec(v) for v in args.insert]

    base = await upload_input(client, args.input, MediaType.PDF, context)
    insertions = []
    for path, base_page, page_ranges in specs:
        asset = await upload_input(client, path, MediaType.PDF, context)
        insertions.append(PageInsertion(asset=asset, base_page=base_page, page_ranges=page_ranges))

    job = InsertPagesJob(base=base, insertions=tuple(insertions))
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "insert", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("baseInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
