"""
Convert HTML to PDF from a zipped site, a single HTML file or a public URL.

A JSON data file can be merged into dynamic HTML; the page reads it from the
global ``json`` variable.

Usage:
    python -m samples.html_to_pdf --input createPDFFromStaticHtmlInput.zip
    python -m samples.html_to_pdf --url https://www.adobe.io --header-footer
"""

import argparse
import json

from pdfservices_core.assets import MediaType
from pdfservices_core.client import PDFServices
from pdfservices_core.jobs import HTMLToPDFJob, PageLayout
from pdfservices_core.output import read_file
from pdfservices_core.runtime.context import RunContext
from samples.common import resource, run_sample, save_result, upload_input


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--url", default=None, help="Render this URL instead of --input")
    parser.add_argument("--data", default=None, help="JSON file merged into dynamic HTML")
    parser.add_argument("--header-footer", action="store_true", help="Include header and footer")
    parser.add_argument("--page-width", type=float, default=11.5, help="Page width in inches")
    parser.add_argument("--page-height", type=float, default=8.0, help="Page height in inches")


async def run(client: PDFServices, args: argparse.Namespace):
    context = RunContext.new("htmltopdf")

    data = None
    if args.data:
        data = json.loads(await read_file(args.data))

    layout = PageLayout(page_width=args.page_width, page_height=args.page_height)
    if args.url:
        job = HTMLToPDFJob(
            input_url=args.url,
            include_header_footer=args.header_footer,
            page_layout=layout,
            data_to_merge=data,
        )
    else:
        media_type = MediaType.from_path(args.input)
        asset = await upload_input(client, args.input, media_type, context)
        job = HTMLToPDFJob(
            input=asset,
            include_header_footer=args.header_footer,
            page_layout=layout,
            data_to_merge=data,
        )

    handle = await client.submit(job, context)
    status = await client.get_job_result(handle, context)
    return await save_result(client, status, args.output_dir, "htmltopdf", "pdf", context)


def main(argv=None) -> int:
    return run_sample(
        run,
        argv,
        description=__doc__,
        default_input=resource("createPDFFromStaticHtmlInput.zip"),
        configure=configure,
    )


if __name__ == "__main__":
    raise SystemExit(main())
