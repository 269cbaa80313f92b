"""
Remove password security from a PDF.

Usage:
    python -m samples.remove_protection --input removeProtectionInput.pdf --password password
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import RemoveProtectionJob
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--password", default="password", help="Current document password")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("removeprotection")
    asset = await upload_input(client, args.input, MediaType.PDF, context)

    job = RemoveProtectionJob(input=asset, password=args.password)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "removeprotection", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("removeProtectionInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
