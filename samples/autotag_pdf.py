"""
Auto-tag a PDF for accessibility, optionally shifting headings and producing
an XLSX tagging report.

Usage:
    python -m samples.autotag_pdf --input autotagPDFInput.pdf --generate-report --shift-headings
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import AutotagPDFJob
from pdfservices_core.runtime.context import RunContext
from samples.common import check_succeeded, resource, run_sample, save_asset, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--shift-headings", action="store_true")
    parser.add_argument("--generate-report", action="store_true")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("autotag")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = AutotagPDFJob(
        input=asset,
        shift_headings=args.shift_headings,
        generate_report=args.generate_report,
    )
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    if not check_succeeded(status):
        return []

    result = status.result
    paths = []
    tagged = result.tagged_pdf or result.asset
    if tagged is not None:
        paths.append(await save_asset(client, tagged, args.output_dir, "autotag", "pdf", context))
    if result.report is not None:
        paths.append(await save_asset(client, result.report, args.output_dir, "autotag-report", "xlsx", context))
    return paths


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("autotagPDFInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
