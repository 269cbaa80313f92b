"""
Extract text, tables and figures from a PDF.

The service returns a zip holding structuredData.json and, when renditions are
requested, table and figure files.

Usage:
    python -m samples.extract_pdf --input extractPdfInput.pdf --elements text tables
    python -m samples.extract_pdf --renditions tables figures --table-format csv --styling
"""

import argparse

from loguru import logger

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import (
    ExtractElementType,
    ExtractPDFJob,
    ExtractRenditionsElementType,
    TableStructureType,
)
from pdfservices_core.runtime.context import RunContext
from samples.common import check_succeeded, resource, run_sample, save_asset, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--elements",
        nargs="+",
        choices=[e.value for e in ExtractElementType],
        default=[ExtractElementType.TEXT.value],
    )
    parser.add_argument(
        "--renditions",
        nargs="*",
        choices=[e.value for e in ExtractRenditionsElementType],
        default=[],
    )
    parser.add_argument("--table-format", choices=[t.value for t in TableStructureType], default=None)
    parser.add_argument("--char-info", action="store_true", help="Include character bounds")
    parser.add_argument("--styling", action="store_true", help="Include styling information")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("extract")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = ExtractPDFJob(
        input=asset,
        elements_to_extract=tuple(ExtractElementType(e) for e in args.elements),
        elements_to_extract_renditions=tuple(ExtractRenditionsElementType(e) for e in args.renditions),
        table_structure_type=TableStructureType(args.table_format) if args.table_format else None,
        add_char_info=args.char_info or None,
        get_styling_info=args.styling or None,
    )
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    if not check_succeeded(status):
        return []

    result = status.result
    archive = result.resource or result.asset
    if archive is not None:
        return [await save_asset(client, archive, args.output_dir, "extract", "zip", context)]
    if result.content is not None:
        return [await save_asset(client, result.content, args.output_dir, "extract", "json", context)]
    logger.warning("Extract job finished without an output asset")
    return []


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("extractPdfInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
