"""
Apply an electronic seal to a PDF with a certificate held by a trust service
provider (TSP), using the Cloud Signature Consortium API.

The provider name, credential id, PIN and access token come from the
command line or the CSC_* environment variables.

Usage:
    python -m samples.electronic_seal --input sampleInvoice.pdf --seal-image sampleSealImage.png \
        --provider <PROVIDER_NAME> --credential-id <CREDENTIAL_ID> --pin <PIN> --access-token <TOKEN>
"""

import argparse
import os

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import (
    AppearanceItem,
    AppearanceOptions,
    CSCAuthContext,
    CSCCredentials,
    ElectronicSealJob,
    FieldLocation,
    FieldOptions,
)
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seal-image", default=None, help="Optional seal background image")
    parser.add_argument("--provider", default=os.environ.get("CSC_PROVIDER_NAME", ""))
    parser.add_argument("--credential-id", default=os.environ.get("CSC_CREDENTIAL_ID", ""))
    parser.add_argument("--pin", default=os.environ.get("CSC_PIN", ""))
    parser.add_argument("--access-token", default=os.environ.get("CSC_ACCESS_TOKEN", ""))
    parser.add_argument("--field-name", default="Signature1")
    parser.add_argument("--page", type=int, default=1, help="Page the seal is applied on")


def build_seal_job(input_asset, seal_image, args: argparse.Namespace) -> ElectronicSealJob:
    credentials = CSCCredentials(
        provider_name=args.provider,
        credential_id=args.credential_id,
        pin=args.pin,
        auth_context=CSCAuthContext(access_token=args.access_token),
    )
    field_options = FieldOptions(
        field_name=args.field_name,
        page_number=args.page,
        visible=True,
        location=FieldLocation(left=150, top=250, right=350, bottom=200),
    )
    appearance = AppearanceOptions(
        items=(
            AppearanceItem.NAME,
            AppearanceItem.LABELS,
            AppearanceItem.DATE,
            AppearanceItem.SEAL_IMAGE,
            AppearanceItem.DISTINGUISHED_NAME,
        )
    )
    return ElectronicSealJob(
        input=input_asset,
        seal_image=seal_image,
        certificate_credentials=credentials,
        field_options=field_options,
        appearance_options=appearance,
    )


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("electronicseal")
    document = await upload_input(client, args.input, MediaType.PDF, context)
    seal_image = None
    if args.seal_image:
        seal_image = await upload_input(client, args.seal_image, context=context)

    job = build_seal_job(document, seal_image, args)
    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "electronicseal", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("sampleInvoice.pdf"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
