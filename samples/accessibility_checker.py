"""
Check a PDF for accessibility issues; saves the annotated PDF and a JSON
report.

Usage:
    python -m samples.accessibility_checker --input accessibilityCheckerInput.pdf --page-start 1 --page-end 5
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import PDFAccessibilityCheckerJob
from pdfservices_core.runtime.context import RunContext
from samples.common import check_succeeded, resource, run_sample, save_asset, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page-start", type=int, default=None)
    parser.add_argument("--page-end", type=int, default=None)


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("accessibilitychecker")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = PDFAccessibilityCheckerJob(input=asset, page_start=args.page_start, page_end=args.page_end)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    if not check_succeeded(status):
        return []

    result = status.result
    paths = []
    if result.asset is not None:
        paths.append(await save_asset(client, result.asset, args.output_dir, "accessibilitychecker", "pdf", context))
    if result.report is not None:
        paths.append(
            await save_asset(client, result.report, args.output_dir, "accessibilitychecker-report", "json", context)
        )
    return paths


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("accessibilityCheckerInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
