"""
Replace single pages of a base PDF with pages from other PDFs.

Page 1 of the base document is replaced by pages 1-3 of the first file, and
page 3 by all pages of the second file.

Usage:
    python -m samples.replace_pages --input baseInput.pdf \
        --replace replacePagesInput1.pdf:1:1-3 --replace replacePagesInput2.pdf:3
    python -m samples.replace_pages --input baseInput.pdf \
        --replace lastPage.pdf:4 --base-page-count 4
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import PageInsertion, ReplacePagesJob
from pdfservices_core.runtime.context import RunContext
from samples.common import parse_page_spec, resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--replace",
        action="append",
        required=True,
        help="path:base_page[:page_ranges]; repeat for several files",
    )
    parser.add_argument(
        "--base-page-count",
        type=int,
        default=None,
        help="Number of pages in the base document; needed to replace its last page",
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("replace")
    specs = [parse_page_spec(v) for v in args.replace]

    base = await upload_input(client, args.input, MediaType.PDF, context)
    replacements = []
    for path, base_page, page_ranges in specs:
        asset = await upload_input(client, path, MediaType.PDF, context)
        replacements.append(PageInsertion(asset=asset, base_page=base_page, page_ranges=page_ranges))

    job = ReplacePagesJob(
        base=base,
        replacements=tuple(replacements),
        base_page_count=args.base_page_count,
    )
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "replace", "pdf", context)


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
