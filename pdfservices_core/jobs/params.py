"""
Shared parameter types for PDF Services jobs.

Page ranges, option enums and the nested option objects used by several
operations. All types are immutable and validated on construction.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from pdfservices_core.runtime.errors import ValidationError
from pdfservices_core.validation import ValidatedModel


class PageRange(ValidatedModel):
    """A single page (start == end), a closed range, or an open range (end None)."""

    start: int = Field(ge=1)
    end: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> "PageRange":
        if self.end is not None and self.end < self.start:
            raise ValidationError(
                f"PageRange: end page {self.end} is before start page {self.start}",
                field="end",
            )
        return self

    def __str__(self) -> str:
        if self.end is None:
            return f"{self.start}-"
        if self.end == self.start:
            return str(self.start)
        return f"{self.start}-{self.end}"

    def to_payload(self) -> dict[str, int]:
        payload = {"start": self.start}
        if self.end is not None:
            payload["end"] = self.end
        return payload


_RANGE_PATTERN = re.compile(r"^(\d+)(?:-(\d*))?$")


class PageRanges(ValidatedModel):
    """Ordered collection of page ranges.

    Builders return new instances:

        ranges = PageRanges().add_single_page(1).add_range(3, 4).add_all_from(7)
    """

    ranges: tuple[PageRange, ...] = ()

    def add_single_page(self, page: int) -> "PageRanges":
        return PageRanges(ranges=(*self.ranges, PageRange(start=page, end=page)))

    def add_range(self, start: int, end: int) -> "PageRanges":
        return PageRanges(ranges=(*self.ranges, PageRange(start=start, end=end)))

    def add_all_from(self, start: int) -> "PageRanges":
        return PageRanges(ranges=(*self.ranges, PageRange(start=start)))

    @classmethod
    def parse(cls, text: str) -> "PageRanges":
        """Parse a range list such as ``"1,3-4,7-"``.

        Raises:
            ValidationError: If a part is not a page, range or open range.
        """
        ranges: list[PageRange] = []
        for part in text.split(","):
            part = part.strip()
            match = _RANGE_PATTERN.match(part)
            if not match:
                raise ValidationError(f"PageRanges: cannot parse {part!r}", field="page_ranges")
            start = int(match.group(1))
            if match.group(2) is None:
                ranges.append(PageRange(start=start, end=start))
            elif match.group(2) == "":
                ranges.append(PageRange(start=start))
            else:
                ranges.append(PageRange(start=start, end=int(match.group(2))))
        return cls(ranges=tuple(ranges))

    def is_empty(self) -> bool:
        return not self.ranges

    def __len__(self) -> int:
        return len(self.ranges)

    def __str__(self) -> str:
        return ",".join(str(r) for r in self.ranges)

    def to_payload(self) -> list[dict[str, int]]:
        return [r.to_payload() for r in self.ranges]


def require_ranges(ranges: PageRanges | None, field: str, owner: str) -> None:
    """Raise ValidationError if ``ranges`` is missing or empty."""
    if ranges is None:
        raise ValidationError.missing(field, owner)
    if ranges.is_empty():
        raise ValidationError(f"{owner}: '{field}' must contain at least one range", field=field)


# Option enums

class CompressionLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ExportPDFTargetFormat(str, Enum):
    DOC = "doc"
    DOCX = "docx"
    PPTX = "pptx"
    RTF = "rtf"
    XLSX = "xlsx"


class ExportPDFToImagesTargetFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"


class ExportPDFToImagesOutputType(str, Enum):
    LIST_OF_PAGE_IMAGES = "listOfPageImages"
    ZIP_OF_PAGE_IMAGES = "zipOfPageImages"


class OCRSupportedType(str, Enum):
    SEARCHABLE_IMAGE = "searchable_image"
    SEARCHABLE_IMAGE_EXACT = "searchable_image_exact"


class EncryptionAlgorithm(str, Enum):
    AES_128 = "AES_128"
    AES_256 = "AES_256"


class ContentEncryption(str, Enum):
    ALL_CONTENT = "ALL_CONTENT"
    ALL_CONTENT_EXCEPT_METADATA = "ALL_CONTENT_EXCEPT_METADATA"
    ONLY_EMBEDDED_FILES = "ONLY_EMBEDDED_FILES"


class Permission(str, Enum):
    PRINT_LOW_QUALITY = "PRINT_LOW_QUALITY"
    PRINT_HIGH_QUALITY = "PRINT_HIGH_QUALITY"
    EDIT_CONTENT = "EDIT_CONTENT"
    EDIT_DOCUMENT_ASSEMBLY = "EDIT_DOCUMENT_ASSEMBLY"
    EDIT_ANNOTATIONS = "EDIT_ANNOTATIONS"
    EDIT_FILL_AND_SIGN_FORM_FIELDS = "EDIT_FILL_AND_SIGN_FORM_FIELDS"
    COPY_CONTENT = "COPY_CONTENT"


class Angle(int, Enum):
    ANGLE_90 = 90
    ANGLE_180 = 180
    ANGLE_270 = 270


class OutputFormat(str, Enum):
    """Document generation output format."""

    PDF = "pdf"
    DOCX = "docx"


class ExtractElementType(str, Enum):
    TEXT = "text"
    TABLES = "tables"


class ExtractRenditionsElementType(str, Enum):
    TABLES = "tables"
    FIGURES = "figures"


class TableStructureType(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


class SignatureFormat(str, Enum):
    PKCS7 = "PKCS7"
    PADES = "PADES"


class AppearanceItem(str, Enum):
    """Items displayed in an electronic seal's appearance."""

    NAME = "NAME"
    DATE = "DATE"
    DISTINGUISHED_NAME = "DISTINGUISHED_NAME"
    LABELS = "LABELS"
    SEAL_IMAGE = "SEAL_IMAGE"


class PageLayout(ValidatedModel):
    """Page size for HTML to PDF conversion, in inches."""

    page_width: float = Field(default=8.5, gt=0)
    page_height: float = Field(default=11.0, gt=0)

    def to_payload(self) -> dict[str, float]:
        return {"pageWidth": self.page_width, "pageHeight": self.page_height}


# Electronic seal options

class FieldLocation(ValidatedModel):
    """Seal field rectangle in PDF user space coordinates."""

    left: int = Field(ge=0)
    top: int = Field(ge=0)
    right: int = Field(ge=0)
    bottom: int = Field(ge=0)

    def to_payload(self) -> dict[str, int]:
        return {"left": self.left, "top": self.top, "right": self.right, "bottom": self.bottom}


class FieldOptions(ValidatedModel):
    """Where the seal signature field is placed."""

    field_name: str = Field(min_length=1)
    page_number: int | None = Field(default=None, ge=1)
    visible: bool = True
    location: FieldLocation | None = None

    @model_validator(mode="after")
    def _check_visible_placement(self) -> "FieldOptions":
        if self.visible and self.location is not None and self.page_number is None:
            raise ValidationError.missing("page_number", "FieldOptions")
        return self

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"fieldName": self.field_name, "visible": self.visible}
        if self.page_number is not None:
            payload["pageNumber"] = self.page_number
        if self.location is not None:
            payload["location"] = self.location.to_payload()
        return payload


class CSCAuthContext(ValidatedModel):
    access_token: str = Field(min_length=1, repr=False)
    token_type: str = "Bearer"

    def to_payload(self) -> dict[str, str]:
        return {"accessToken": self.access_token, "tokenType": self.token_type}


class CSCCredentials(ValidatedModel):
    """Cloud Signature Consortium credentials held by a trust service provider.

    Attributes:
        provider_name: Trust service provider name.
        credential_id: Digital ID stored with the provider.
        pin: PIN of the digital ID.
        auth_context: Access token for the provider's API.
    """

    provider_name: str = Field(min_length=1)
    credential_id: str = Field(min_length=1)
    pin: str = Field(min_length=1, repr=False)
    auth_context: CSCAuthContext

    def to_payload(self) -> dict[str, Any]:
        return {
            "providerName": self.provider_name,
            "credentialId": self.credential_id,
            "authorizationContext": self.auth_context.to_payload(),
            "credentialAuthParameters": {"pin": self.pin},
        }


class AppearanceOptions(ValidatedModel):
    items: tuple[AppearanceItem, ...] = (AppearanceItem.NAME, AppearanceItem.LABELS)

    def add_item(self, item: AppearanceItem) -> "AppearanceOptions":
        if item in self.items:
            return self
        return AppearanceOptions(items=(*self.items, item))

    def to_payload(self) -> dict[str, list[str]]:
        return {"displayOptions": [item.value for item in self.items]}
