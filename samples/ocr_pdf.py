"""
Run OCR on a scanned PDF to make its text searchable.

Usage:
    python -m samples.ocr_pdf --input ocrInput.pdf --locale en-US --type searchable_image_exact
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import OCRPDFJob, OCRSupportedType
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--locale", default="en-US", help="OCR language (default: %(default)s)")
    parser.add_argument(
        "--type",
        choices=[t.value for t in OCRSupportedType],
        default=OCRSupportedType.SEARCHABLE_IMAGE.value,
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("ocr")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = OCRPDFJob(input=asset, ocr_locale=args.locale, ocr_type=OCRSupportedType(args.type))
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "ocr", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("ocrInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
