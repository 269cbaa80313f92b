"""
Rotate pages of a PDF: the first page by 90 degrees, and pages 3-4 by 180
degrees, unless other ranges are given.

Usage:
    python -m samples.rotate_pages --input rotatePagesInput.pdf --rotate-90 1 --rotate-180 3-4
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import Angle, PageRanges, PageRotation, RotatePagesJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rotate-90", default="1", help="Pages rotated by 90 degrees")
    parser.add_argument("--rotate-180", default="3-4", help="Pages rotated by 180 degrees")
    parser.add_argument("--rotate-270", default=None, help="Pages rotated by 270 degrees")


def build_rotations(args: argparse.Namespace) -> tuple[PageRotation, ...]:
    requested = [
        (Angle.ANGLE_90, args.rotate_90),
        (Angle.ANGLE_180, args.rotate_180),
        (Angle.ANGLE_270, args.rotate_270),
    ]
    return tuple(
        PageRotation(angle=angle, page_ranges=PageRanges.parse(ranges))
        for angle, ranges in requested
        if ranges
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("rotate")
    rotations = build_rotations(args)
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = RotatePagesJob(input=asset, rotations=rotations)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "rotate", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("rotatePagesInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
