"""
Job definitions for every PDF Services operation.

Each job is an immutable model validated on construction. ``to_payload()``
renders the request body for the operation endpoint named by ``operation``.
Inputs may be uploaded Assets or ExternalAssets; an optional external
``output`` makes the service write the result to third-party storage.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar

from pydantic import Field, model_validator

from pdfservices_core.assets import AnyAsset, ExternalAsset
from pdfservices_core.jobs.params import (
    Angle,
    AppearanceOptions,
    CompressionLevel,
    ContentEncryption,
    CSCCredentials,
    EncryptionAlgorithm,
    ExportPDFTargetFormat,
    ExportPDFToImagesOutputType,
    ExportPDFToImagesTargetFormat,
    ExtractElementType,
    ExtractRenditionsElementType,
    FieldOptions,
    OCRSupportedType,
    OutputFormat,
    PageLayout,
    PageRanges,
    Permission,
    SignatureFormat,
    TableStructureType,
    require_ranges,
)
from pdfservices_core.runtime.errors import ValidationError
from pdfservices_core.validation import ValidatedModel

MAX_COMBINE_INPUTS = 12
MAX_PASSWORD_LENGTH = 128


def asset_ref(asset: AnyAsset, id_key: str = "assetID", external_key: str = "input") -> dict[str, Any]:
    """Reference an input in a request body, by asset id or external URI."""
    if isinstance(asset, ExternalAsset):
        return {external_key: asset.to_payload()}
    return {id_key: asset.asset_id}


class PDFServicesJob(ValidatedModel):
    """Base class for all jobs."""

    operation: ClassVar[str]

    output: ExternalAsset | None = None

    def build_payload(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_payload(self) -> dict[str, Any]:
        payload = self.build_payload()
        if self.output is not None:
            payload["output"] = self.output.to_payload()
        return payload


class SingleInputJob(PDFServicesJob):
    """Job operating on one input document."""

    input: AnyAsset

    def build_payload(self) -> dict[str, Any]:
        return asset_ref(self.input)


class CreatePDFJob(SingleInputJob):
    """Convert an Office document, image or text file to PDF."""

    operation: ClassVar[str] = "createpdf"

    document_language: str = "en-US"
    create_tags: bool = False

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["documentLanguage"] = self.document_language
        payload["createTags"] = self.create_tags
        return payload


class HTMLToPDFJob(PDFServicesJob):
    """Render HTML to PDF from a zipped or single HTML asset, or from a URL.

    Attributes:
        input: HTML asset (a zip carrying index.html and resources, or one file).
        input_url: Public URL to render instead of an asset.
        include_header_footer: Add the default header and footer.
        page_layout: Page size in inches.
        data_to_merge: JSON data exposed to the page's scripts as ``json``.
    """

    operation: ClassVar[str] = "htmltopdf"

    input: AnyAsset | None = None
    input_url: str | None = None
    include_header_footer: bool = False
    page_layout: PageLayout = Field(default_factory=PageLayout)
    data_to_merge: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _check_source(self) -> "HTMLToPDFJob":
        if (self.input is None) == (self.input_url is None):
            raise ValidationError(
                "HTMLToPDFJob: exactly one of 'input' or 'input_url' is required",
                field="input",
            )
        return self

    def build_payload(self) -> dict[str, Any]:
        if self.input is not None:
            payload = asset_ref(self.input)
        else:
            payload = {"inputUrl": self.input_url}
        payload["includeHeaderFooter"] = self.include_header_footer
        payload["pageLayout"] = self.page_layout.to_payload()
        if self.data_to_merge is not None:
            payload["json"] = json.dumps(self.data_to_merge)
        return payload


class ExportPDFJob(SingleInputJob):
    """Export a PDF to an Office or RTF document."""

    operation: ClassVar[str] = "exportpdf"

    target_format: ExportPDFTargetFormat
    ocr_locale: str = "en-US"

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["targetFormat"] = self.target_format.value
        payload["ocrLang"] = self.ocr_locale
        return payload


class ExportPDFToImagesJob(SingleInputJob):
    """Render each page of a PDF as an image."""

    operation: ClassVar[str] = "exportpdftoimages"

    target_format: ExportPDFToImagesTargetFormat
    output_type: ExportPDFToImagesOutputType

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["targetFormat"] = self.target_format.value
        payload["outputType"] = self.output_type.value
        return payload


class CombineInput(ValidatedModel):
    """One document in a combine, with the pages to take from it (all by default)."""

    asset: AnyAsset
    page_ranges: PageRanges | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = asset_ref(self.asset)
        if self.page_ranges is not None and not self.page_ranges.is_empty():
            payload["pageRanges"] = self.page_ranges.to_payload()
        return payload


class CombinePDFJob(PDFServicesJob):
    """Combine 2 to 12 PDFs, in order, into one."""

    operation: ClassVar[str] = "combinepdf"

    inputs: tuple[CombineInput, ...]

    @model_validator(mode="after")
    def _check_input_count(self) -> "CombinePDFJob":
        count = len(self.inputs)
        if count < 2 or count > MAX_COMBINE_INPUTS:
            raise ValidationError(
                f"CombinePDFJob: 'inputs' needs 2 to {MAX_COMBINE_INPUTS} documents, got {count}",
                field="inputs",
            )
        return self

    @classmethod
    def from_assets(cls, *assets: AnyAsset, **kwargs: Any) -> "CombinePDFJob":
        """Combine whole documents."""
        return cls(inputs=tuple(CombineInput(asset=a) for a in assets), **kwargs)

    def build_payload(self) -> dict[str, Any]:
        return {"assets": [entry.to_payload() for entry in self.inputs]}


class PageInsertion(ValidatedModel):
    """Pages of ``asset`` inserted before page ``base_page`` of the base document."""

    asset: AnyAsset
    base_page: int = Field(ge=1)
    page_ranges: PageRanges | None = None


def _base_segment(base: AnyAsset, start: int, end: int | None) -> dict[str, Any]:
    segment = asset_ref(base)
    page_range = {"start": start} if end is None else {"start": start, "end": end}
    segment["pageRanges"] = [page_range]
    return segment


def _source_segment(entry: PageInsertion) -> dict[str, Any]:
    return CombineInput(asset=entry.asset, page_ranges=entry.page_ranges).to_payload()


def _trailing_segment(base: AnyAsset, start: int, page_count: int | None) -> list[dict[str, Any]]:
    """The base pages from ``start`` on; open ended unless the page count is known."""
    if page_count is None:
        return [_base_segment(base, start, None)]
    if start > page_count:
        return []
    return [_base_segment(base, start, page_count)]


class InsertPagesJob(PDFServicesJob):
    """Insert pages from other documents into a base document.

    Rendered as a combine of base segments and inserted documents, so it is
    submitted to the combine endpoint.
    With ``base_page_count`` set, pages can also be appended after the last
    page (``base_page = base_page_count + 1``).
    """

    operation: ClassVar[str] = "combinepdf"

    base: AnyAsset
    insertions: tuple[PageInsertion, ...] = Field(min_length=1)
    base_page_count: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_within_base(self) -> "InsertPagesJob":
        if self.base_page_count is None:
            return self
        # Inserting before page count + 1 appends to the end
        for entry in self.insertions:
            if entry.base_page > self.base_page_count + 1:
                raise ValidationError(
                    f"InsertPagesJob: cannot insert before page {entry.base_page} "
                    f"of a {self.base_page_count} page document",
                    field="insertions",
                )
        return self

    def build_payload(self) -> dict[str, Any]:
        assets: list[dict[str, Any]] = []
        next_base_page = 1
        for entry in sorted(self.insertions, key=lambda e: e.base_page):
            if entry.base_page > next_base_page:
                assets.append(_base_segment(self.base, next_base_page, entry.base_page - 1))
                next_base_page = entry.base_page
            assets.append(_source_segment(entry))
        assets.extend(_trailing_segment(self.base, next_base_page, self.base_page_count))
        return {"assets": assets}


class ReplacePagesJob(PDFServicesJob):
    """Replace single pages of a base document with pages from other documents.

    Each entry replaces page ``base_page`` of the base document with the
    selected pages of its asset. Base pages must be distinct.
    Without ``base_page_count`` the trailing base segment is open ended, which
    the service rejects when the last page itself is replaced.
    """

    operation: ClassVar[str] = "combinepdf"

    base: AnyAsset
    replacements: tuple[PageInsertion, ...] = Field(min_length=1)
    base_page_count: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_distinct_pages(self) -> "ReplacePagesJob":
        pages = [entry.base_page for entry in self.replacements]
        if len(pages) != len(set(pages)):
            raise ValidationError(
                "ReplacePagesJob: each base page can only be replaced once",
                field="replacements",
            )
        return self

    @model_validator(mode="after")
    def _check_within_base(self) -> "ReplacePagesJob":
        if self.base_page_count is None:
            return self
        for entry in self.replacements:
            if entry.base_page > self.base_page_count:
                raise ValidationError(
                    f"ReplacePagesJob: page {entry.base_page} is past the end of a "
                    f"{self.base_page_count} page document",
                    field="replacements",
                )
        return self

    def build_payload(self) -> dict[str, Any]:
        assets: list[dict[str, Any]] = []
        next_base_page = 1
        for entry in sorted(self.replacements, key=lambda e: e.base_page):
            if entry.base_page > next_base_page:
                assets.append(_base_segment(self.base, next_base_page, entry.base_page - 1))
            assets.append(_source_segment(entry))
            next_base_page = entry.base_page + 1
        assets.extend(_trailing_segment(self.base, next_base_page, self.base_page_count))
        return {"assets": assets}


class CompressPDFJob(SingleInputJob):
    """Reduce the size of a PDF."""

    operation: ClassVar[str] = "compresspdf"

    compression_level: CompressionLevel | None = None

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        if self.compression_level is not None:
            payload["compressionLevel"] = self.compression_level.value
        return payload


class OCRPDFJob(SingleInputJob):
    """Make a scanned PDF searchable."""

    operation: ClassVar[str] = "ocr"

    ocr_locale: str = "en-US"
    ocr_type: OCRSupportedType = OCRSupportedType.SEARCHABLE_IMAGE

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["ocrLang"] = self.ocr_locale
        payload["ocrType"] = self.ocr_type.value
        return payload


class ProtectPDFJob(SingleInputJob):
    """Password protect a PDF and optionally restrict permissions.

    Attributes:
        user_password: Password required to open the document.
        owner_password: Password required to change permissions.
        encryption_algorithm: AES_128 or AES_256.
        content_encryption: Which content to encrypt; service default if None.
        permissions: Permissions granted to users; requires owner_password.
    """

    operation: ClassVar[str] = "protectpdf"

    user_password: str | None = Field(default=None, min_length=1, max_length=MAX_PASSWORD_LENGTH, repr=False)
    owner_password: str | None = Field(default=None, min_length=1, max_length=MAX_PASSWORD_LENGTH, repr=False)
    encryption_algorithm: EncryptionAlgorithm
    content_encryption: ContentEncryption | None = None
    permissions: tuple[Permission, ...] = ()

    @model_validator(mode="after")
    def _check_passwords(self) -> "ProtectPDFJob":
        if self.user_password is None and self.owner_password is None:
            raise ValidationError(
                "ProtectPDFJob: one of 'user_password' or 'owner_password' is required",
                field="user_password",
            )
        if self.user_password is not None and self.user_password == self.owner_password:
            raise ValidationError(
                "ProtectPDFJob: 'owner_password' must differ from 'user_password'",
                field="owner_password",
            )
        if self.permissions and self.owner_password is None:
            raise ValidationError(
                "ProtectPDFJob: 'permissions' require an 'owner_password'",
                field="permissions",
            )
        if (
            self.content_encryption == ContentEncryption.ONLY_EMBEDDED_FILES
            and self.encryption_algorithm == EncryptionAlgorithm.AES_128
        ):
            raise ValidationError(
                "ProtectPDFJob: ONLY_EMBEDDED_FILES requires AES_256",
                field="content_encryption",
            )
        return self

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        passwords: dict[str, str] = {}
        if self.user_password is not None:
            passwords["userPassword"] = self.user_password
        if self.owner_password is not None:
            passwords["ownerPassword"] = self.owner_password
        payload["passwordProtection"] = passwords
        payload["encryptionAlgorithm"] = self.encryption_algorithm.value
        if self.content_encryption is not None:
            payload["contentToEncrypt"] = self.content_encryption.value
        if self.permissions:
            payload["permissions"] = [p.value for p in self.permissions]
        return payload


class RemoveProtectionJob(SingleInputJob):
    """Remove password security from a PDF."""

    operation: ClassVar[str] = "removeprotection"

    password: str = Field(min_length=1, repr=False)

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["password"] = self.password
        return payload


class SplitPDFJob(SingleInputJob):
    """Split a PDF by page count, file count or page ranges (exactly one)."""

    operation: ClassVar[str] = "splitpdf"

    page_count: int | None = Field(default=None, ge=1)
    file_count: int | None = Field(default=None, ge=1)
    page_ranges: PageRanges | None = None

    @model_validator(mode="after")
    def _check_split_option(self) -> "SplitPDFJob":
        chosen = [
            name
            for name in ("page_count", "file_count", "page_ranges")
            if getattr(self, name) is not None
        ]
        if len(chosen) != 1:
            raise ValidationError(
                "SplitPDFJob: exactly one of 'page_count', 'file_count' or 'page_ranges' is required",
                field="page_count",
            )
        if self.page_ranges is not None:
            require_ranges(self.page_ranges, "page_ranges", "SplitPDFJob")
        return self

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        if self.page_count is not None:
            payload["splitoption"] = {"pageCount": self.page_count}
        elif self.file_count is not None:
            payload["splitoption"] = {"fileCount": self.file_count}
        else:
            payload["splitoption"] = {"pageRanges": self.page_ranges.to_payload()}
        return payload


class PageRotation(ValidatedModel):
    angle: Angle
    page_ranges: PageRanges

    @model_validator(mode="after")
    def _check_ranges(self) -> "PageRotation":
        require_ranges(self.page_ranges, "page_ranges", "PageRotation")
        return self


class RotatePagesJob(SingleInputJob):
    """Rotate selected pages of a PDF."""

    operation: ClassVar[str] = "pagemanipulation"

    rotations: tuple[PageRotation, ...] = Field(min_length=1)

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["pageActions"] = [
            {"rotate": {"angle": r.angle.value, "pageRanges": r.page_ranges.to_payload()}}
            for r in self.rotations
        ]
        return payload


class DeletePagesJob(SingleInputJob):
    """Delete selected pages from a PDF."""

    operation: ClassVar[str] = "pagemanipulation"

    page_ranges: PageRanges

    @model_validator(mode="after")
    def _check_ranges(self) -> "DeletePagesJob":
        require_ranges(self.page_ranges, "page_ranges", "DeletePagesJob")
        return self

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["pageActions"] = [{"delete": {"pageRanges": self.page_ranges.to_payload()}}]
        return payload


class LinearizePDFJob(SingleInputJob):
    """Optimize a PDF for fast web view."""

    operation: ClassVar[str] = "linearizepdf"


class PDFPropertiesJob(SingleInputJob):
    """Read document and optionally page-level properties of a PDF."""

    operation: ClassVar[str] = "pdfproperties"

    include_page_level_properties: bool = False

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["pageLevel"] = self.include_page_level_properties
        return payload


class AutotagPDFJob(SingleInputJob):
    """Add accessibility tags to a PDF, optionally with a report."""

    operation: ClassVar[str] = "autotag"

    shift_headings: bool = False
    generate_report: bool = False

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["shiftHeadings"] = self.shift_headings
        payload["generateReport"] = self.generate_report
        return payload


class ExtractPDFJob(SingleInputJob):
    """Extract text, tables and figures from a PDF into a zip of JSON and renditions.

    Attributes:
        elements_to_extract: Structured elements to extract.
        elements_to_extract_renditions: Elements to extract as files.
        table_structure_type: Format of table renditions.
        add_char_info: Include character level bounds.
        get_styling_info: Include font and styling information.
    """

    operation: ClassVar[str] = "extractpdf"

    elements_to_extract: tuple[ExtractElementType, ...] = (ExtractElementType.TEXT,)
    elements_to_extract_renditions: tuple[ExtractRenditionsElementType, ...] = ()
    table_structure_type: TableStructureType | None = None
    add_char_info: bool | None = None
    get_styling_info: bool | None = None

    @model_validator(mode="after")
    def _check_elements(self) -> "ExtractPDFJob":
        if not self.elements_to_extract and not self.elements_to_extract_renditions:
            raise ValidationError(
                "ExtractPDFJob: at least one element type to extract is required",
                field="elements_to_extract",
            )
        return self

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        if self.elements_to_extract:
            payload["elementsToExtract"] = [e.value for e in self.elements_to_extract]
        if self.elements_to_extract_renditions:
            payload["renditionsToExtract"] = [e.value for e in self.elements_to_extract_renditions]
        if self.table_structure_type is not None:
            payload["tableOutputFormat"] = self.table_structure_type.value
        if self.add_char_info is not None:
            payload["addCharInfo"] = self.add_char_info
        if self.get_styling_info is not None:
            payload["getStylingInfo"] = self.get_styling_info
        return payload


class DocumentMergeJob(SingleInputJob):
    """Merge JSON data into a Word template."""

    operation: ClassVar[str] = "documentgeneration"

    json_data_for_merge: dict[str, Any]
    output_format: OutputFormat = OutputFormat.PDF
    fragments: tuple[dict[str, Any], ...] | None = None

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["outputFormat"] = self.output_format.value
        payload["jsonDataForMerge"] = self.json_data_for_merge
        if self.fragments:
            payload["fragments"] = list(self.fragments)
        return payload


class ElectronicSealJob(SingleInputJob):
    """Apply an electronic seal backed by a trust service provider certificate.

    Attributes:
        seal_image: Optional background image for the seal appearance.
        certificate_credentials: CSC credentials of the signing certificate.
        field_options: Seal field name and placement.
        appearance_options: Items shown in the seal; service default if None.
        signature_format: PKCS7 or PADES.
    """

    operation: ClassVar[str] = "electronicseal"

    seal_image: AnyAsset | None = None
    certificate_credentials: CSCCredentials
    field_options: FieldOptions
    appearance_options: AppearanceOptions | None = None
    signature_format: SignatureFormat = SignatureFormat.PKCS7

    def build_payload(self) -> dict[str, Any]:
        payload = asset_ref(self.input, "inputDocumentAssetID", "inputDocument")
        if self.seal_image is not None:
            payload.update(asset_ref(self.seal_image, "sealImageAssetID", "sealImage"))
        seal_options: dict[str, Any] = {
            "signatureFormat": self.signature_format.value,
            "cscCredentialOptions": self.certificate_credentials.to_payload(),
            "sealFieldOptions": self.field_options.to_payload(),
        }
        if self.appearance_options is not None:
            seal_options["sealAppearanceOptions"] = self.appearance_options.to_payload()
        payload["sealOptions"] = seal_options
        return payload


class PDFWatermarkJob(SingleInputJob):
    """Stamp the first page of a watermark PDF onto a document."""

    operation: ClassVar[str] = "addwatermark"

    watermark: AnyAsset
    page_ranges: PageRanges | None = None
    opacity: int | None = Field(default=None, ge=0, le=100)
    appear_on_foreground: bool | None = None

    def build_payload(self) -> dict[str, Any]:
        payload = asset_ref(self.input, "inputDocumentAssetID", "inputDocument")
        payload.update(asset_ref(self.watermark, "watermarkDocumentAssetID", "watermarkDocument"))
        if self.page_ranges is not None and not self.page_ranges.is_empty():
            payload["pageRanges"] = self.page_ranges.to_payload()
        appearance: dict[str, Any] = {}
        if self.opacity is not None:
            appearance["opacity"] = self.opacity
        if self.appear_on_foreground is not None:
            appearance["appearOnForeground"] = self.appear_on_foreground
        if appearance:
            payload["appearance"] = appearance
        return payload


class PDFAccessibilityCheckerJob(SingleInputJob):
    """Check a PDF against accessibility standards and return a report."""

    operation: ClassVar[str] = "accessibilitychecker"

    page_start: int | None = Field(default=None, ge=1)
    page_end: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_pages(self) -> "PDFAccessibilityCheckerJob":
        if self.page_start is not None and self.page_end is not None and self.page_start > self.page_end:
            raise ValidationError(
                "PDFAccessibilityCheckerJob: 'page_start' must not be after 'page_end'",
                field="page_start",
            )
        return self

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        if self.page_start is not None:
            payload["pageStart"] = self.page_start
        if self.page_end is not None:
            payload["pageEnd"] = self.page_end
        return payload


class ImportPDFFormDataJob(SingleInputJob):
    """Fill the form fields of a PDF from JSON data."""

    operation: ClassVar[str] = "setformdata"

    json_form_fields_data: dict[str, Any]

    def build_payload(self) -> dict[str, Any]:
        payload = super().build_payload()
        payload["jsonFormFieldsData"] = self.json_form_fields_data
        return payload


__all__ = [
    "AutotagPDFJob",
    "CombineInput",
    "CombinePDFJob",
    "CompressPDFJob",
    "CreatePDFJob",
    "DeletePagesJob",
    "DocumentMergeJob",
    "ElectronicSealJob",
    "ExportPDFJob",
    "ExportPDFToImagesJob",
    "ExtractPDFJob",
    "HTMLToPDFJob",
    "ImportPDFFormDataJob",
    "InsertPagesJob",
    "LinearizePDFJob",
    "OCRPDFJob",
    "PDFAccessibilityCheckerJob",
    "PDFPropertiesJob",
    "PDFServicesJob",
    "PDFWatermarkJob",
    "PageInsertion",
    "PageRotation",
    "ProtectPDFJob",
    "RemoveProtectionJob",
    "ReplacePagesJob",
    "RotatePagesJob",
    "SplitPDFJob",
    "asset_ref",
]
