"""
Export every page of a PDF as an image, either as separate files or one zip.

Usage:
    python -m samples.export_pdf_to_images --input exportPDFToImageInput.pdf --format png
    python -m samples.export_pdf_to_images --format jpeg --zip
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import (
    ExportPDFToImagesJob,
    ExportPDFToImagesOutputType,
    ExportPDFToImagesTargetFormat,
)
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=[f.value for f in ExportPDFToImagesTargetFormat],
        default=ExportPDFToImagesTargetFormat.JPEG.value,
    )
    parser.add_argument("--zip", action="store_true", help="Return one zip of page images")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("exportpdftoimages")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    target = ExportPDFToImagesTargetFormat(args.format)
    output_type = (
        ExportPDFToImagesOutputType.ZIP_OF_PAGE_IMAGES
        if args.zip
        else ExportPDFToImagesOutputType.LIST_OF_PAGE_IMAGES
    )
    job = ExportPDFToImagesJob(input=asset, target_format=target, output_type=output_type)

    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    extension = "zip" if args.zip else target.value
    return await save_result(client, status, args.output_dir, "exportpdftoimages", extension, context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("exportPDFToImageInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
