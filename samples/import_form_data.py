"""
Fill the form fields of a PDF from JSON data.

Usage:
    python -m samples.import_form_data --input importPdfFormDataInput.pdf --data importPdfFormData.json
"""

import argparse
import json

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import ImportPDFFormDataJob
from pdfservices_core.output import read_file
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", default=resource("importPdfFormData.json"), help="Form field values")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("importformdata")
    form_data = json.loads(await read_file(args.data))
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = ImportPDFFormDataJob(input=asset, json_form_fields_data=form_data)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "importformdata", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("importPdfFormDataInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
