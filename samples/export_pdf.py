"""
Export a PDF to a Word, PowerPoint, Excel or RTF document.

Usage:
    python -m samples.export_pdf --input exportPDFInput.pdf --format docx --ocr-locale en-US
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import ExportPDFJob, ExportPDFTargetFormat
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=[f.value for f in ExportPDFTargetFormat],
        default=ExportPDFTargetFormat.DOCX.value,
        help="Target format (default: %(default)s)",
    )
    parser.add_argument("--ocr-locale", default="en-US", help="OCR locale for scanned input")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("export")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    target = ExportPDFTargetFormat(args.format)
    job = ExportPDFJob(input=asset, target_format=target, ocr_locale=args.ocr_locale)

    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "export", target.value, context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("exportPDFInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
