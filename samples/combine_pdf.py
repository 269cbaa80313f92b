"""
Combine several PDFs into one, optionally taking only some pages of each.

Page ranges are given per input, in the same order, e.g. "1,3-4" or "2-"; use
"all" to take every page of an input.

Usage:
    python -m samples.combine_pdf --input first.pdf second.pdf
    python -m samples.combine_pdf --input first.pdf second.pdf --page-ranges 1,3-4 all
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import CombineInput, CombinePDFJob, PageRanges
from pdfservices_core.runtime.context import RunContext
from pdfservices_core.runtime.errors import ValidationError
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page-ranges", nargs="*", default=None, help="Page ranges per input")


def parse_ranges(values: list[str] | None, count: int) -> list[PageRanges | None]:
    if not values:
        return [None] * count
    if len(values) != count:
        raise ValidationError(
            f"Got {len(values)} page ranges for {count} inputs",
            field="page_ranges",
        )
    return [None if v == "all" else PageRanges.parse(v) for v in values]


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("combine")
    ranges = parse_ranges(args.page_ranges, len(args.input))

    inputs = []
    for path, page_ranges in zip(args.input, ranges):
        asset = await upload_input(client, path, MediaType.PDF, context)
        inputs.append(CombineInput(asset=asset, page_ranges=page_ranges))

    job = CombinePDFJob(inputs=tuple(inputs))
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "combine", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=[resource("combineFilesInput1.pdf"), resource("combineFilesInput2.pdf")],
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
