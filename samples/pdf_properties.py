"""
Read the properties of a PDF (page count, fonts, encryption, ...) and print
them as JSON, optionally writing them to a file too.

Usage:
    python -m samples.pdf_properties --input pdfPropertiesInput.pdf --page-level
    python -m samples.pdf_properties --save
"""

import argparse
import json

from loguru import logger

from pdfservices_core.assets import MediaType, StreamAsset
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import PDFPropertiesJob
from pdfservices_core.output import create_output_path, save_stream_asset
from pdfservices_core.runtime.context import RunContext
from samples.common import check_succeeded, resource, run_sample, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page-level", action="store_true", help="Include page level properties")
    parser.add_argument("--save", action="store_true", help="Also write the properties to a JSON file")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("pdfproperties")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = PDFPropertiesJob(input=asset, include_page_level_properties=args.page_level)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    if not check_succeeded(status):
        return None

    properties = status.result.properties or {}
    document = properties.get("document", {})
    logger.info(f"Page count: {document.get('page_count')}, PDF version: {document.get('pdf_version')}")
    print(json.dumps(properties, indent=2))

    if args.save:
        stream = StreamAsset(content=json.dumps(properties, indent=2).encode(), media_type=MediaType.JSON.value)
        await save_stream_asset(stream, create_output_path(args.output_dir, "pdfproperties", "json"))
    return properties


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("pdfPropertiesInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
