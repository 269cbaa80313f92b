"""
Protect a PDF with a user password, or with an owner password and a set of
permissions.

Usage:
    python -m samples.protect_pdf --input protectPDFInput.pdf --user-password encryptPassword
    python -m samples.protect_pdf --owner-password password --permission PRINT_LOW_QUALITY \
        --permission COPY_CONTENT --content ALL_CONTENT_EXCEPT_METADATA
"""

import argparse

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import (
    ContentEncryption,
    EncryptionAlgorithm,
    Permission,
    ProtectPDFJob,
)
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--user-password", default=None, help="Password to open the document")
    parser.add_argument("--owner-password", default=None, help="Password to change permissions")
    parser.add_argument(
        "--algorithm",
        choices=[a.value for a in EncryptionAlgorithm],
        default=EncryptionAlgorithm.AES_256.value,
    )
    parser.add_argument(
        "--content",
        choices=[c.value for c in ContentEncryption],
        default=None,
        help="Content to encrypt (service default if omitted)",
    )
    parser.add_argument(
        "--permission",
        action="append",
        choices=[p.value for p in Permission],
        default=[],
        help="Permission to grant; repeat for several",
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("protect")

    job_options = dict(
        user_password=args.user_password,
        owner_password=args.owner_password,
        encryption_algorithm=EncryptionAlgorithm(args.algorithm),
        content_encryption=ContentEncryption(args.content) if args.content else None,
        permissions=tuple(Permission(p) for p in args.permission),
    )
    if args.user_password is None and args.owner_password is None:
        job_options["user_password"] = "encryptPassword"

    asset = await upload_input(client, args.input, MediaType.PDF, context)
    job = ProtectPDFJob(input=asset, **job_options)

    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "protect", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("protectPDFInput.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
