"""
Merge JSON data into a Word template to produce a PDF or DOCX.

Usage:
    python -m samples.document_merge --input salesOrderTemplate.docx --data salesOrder.json
    python -m samples.document_merge --format docx --fragments orderFragments.json
"""

import argparse
import json

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import DocumentMergeJob, OutputFormat
from pdfservices_core.output import read_file
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", default=resource("salesOrder.json"), help="JSON data to merge")
    parser.add_argument("--fragments", default=None, help="JSON file with fragments")
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.PDF.value,
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("documentmerge")
    data = json.loads(await read_file(args.data))
    fragments = None
    if args.fragments:
        loaded = json.loads(await read_file(args.fragments))
        fragments = tuple(loaded) if isinstance(loaded, list) else (loaded,)

    asset = await upload_input(client, args.input, MediaType.DOCX, context)
    output_format = OutputFormat(args.format)
    job = DocumentMergeJob(
        input=asset,
        json_data_for_merge=data,
        output_format=output_format,
        fragments=fragments,
    )

    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "documentmerge", output_format.value, context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("salesOrderTemplate.docx"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
