"""
Linearize a PDF for fast web view.

Usage:
    python -m samples.linearize_pdf --input linearizePDFInput.pdf
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import LinearizePDFJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("linearize")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    handle = await client.submit(LinearizePDFJob(input=asset), context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "linearize", "pdf", context)


def main(argv=None) -> int:
    return run_sample(run, argv, description=__doc__, default_input=resource("linearizePDFInput.pdf"))


if __name__ == "__main__":
    raise SystemExit(main())
