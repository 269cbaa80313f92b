"""
Create a PDF from a Word document, read from a local stream.

Usage:
    python -m samples.create_pdf_from_docx --input createPDFInput.docx
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import CreatePDFJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--language", default="en-US", help="Document language (default: %(default)s)")
    parser.add_argument("--create-tags", action="store_true", help="Add accessibility tags")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("create")

    with open(args.input, "rb") as stream:
        asset = await client.upload(stream, MediaType.from_path(args.input), context)

    job = CreatePDFJob(
        input=asset,
        document_language=args.language,
        create_tags=args.create_tags,
    )
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "create", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("createPDFInput.docx"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
