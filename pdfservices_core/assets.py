"""
Asset handles and media types.

An Asset is the service's handle to an uploaded document or a job output.
An ExternalAsset points at third-party storage through a pre-signed URL and
is used in place of upload/download.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, Field

from pdfservices_core.runtime.errors import ErrorCode, ValidationError
from pdfservices_core.validation import ValidatedModel


class MediaType(str, Enum):
    """Media types accepted by the upload endpoint."""

    PDF = "application/pdf"
    DOC = "application/msword"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    PPT = "application/vnd.ms-powerpoint"
    PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
    XLS = "application/vnd.ms-excel"
    XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    RTF = "text/rtf"
    TXT = "text/plain"
    HTML = "text/html"
    ZIP = "application/zip"
    BMP = "image/bmp"
    GIF = "image/gif"
    JPEG = "image/jpeg"
    PNG = "image/png"
    TIFF = "image/tiff"
    JSON = "application/json"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def coerce(cls, value: "MediaType | str") -> "MediaType":
        """Return the MediaType for an enum member, MIME string or extension.

        Raises:
            ValidationError: If the value names no supported media type.
        """
        if isinstance(value, MediaType):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        by_extension = _BY_EXTENSION.get(text.lstrip("."))
        if by_extension is not None:
            return by_extension
        raise ValidationError(
            f"Unsupported media type: {value!r}",
            field="media_type",
            code=ErrorCode.UNSUPPORTED_MEDIA_TYPE,
        )

    @classmethod
    def from_path(cls, path: str | Path) -> "MediaType":
        """Guess the media type from a file extension."""
        suffix = Path(path).suffix
        if not suffix:
            raise ValidationError(
                f"Cannot infer media type of {str(path)!r} without an extension",
                field="media_type",
                code=ErrorCode.UNSUPPORTED_MEDIA_TYPE,
            )
        return cls.coerce(suffix)


_EXTENSIONS = {
    MediaType.PDF: "pdf",
    MediaType.DOC: "doc",
    MediaType.DOCX: "docx",
    MediaType.PPT: "ppt",
    MediaType.PPTX: "pptx",
    MediaType.XLS: "xls",
    MediaType.XLSX: "xlsx",
    MediaType.RTF: "rtf",
    MediaType.TXT: "txt",
    MediaType.HTML: "html",
    MediaType.ZIP: "zip",
    MediaType.BMP: "bmp",
    MediaType.GIF: "gif",
    MediaType.JPEG: "jpeg",
    MediaType.PNG: "png",
    MediaType.TIFF: "tiff",
    MediaType.JSON: "json",
}

_BY_EXTENSION = {ext: media_type for media_type, ext in _EXTENSIONS.items()}
_BY_EXTENSION.update({"jpg": MediaType.JPEG, "tif": MediaType.TIFF, "htm": MediaType.HTML})


class Asset(ValidatedModel):
    """Handle to a document held by the service.

    Attributes:
        asset_id: Service-side asset identifier.
        download_uri: Pre-signed download URL, present on job results.
        media_type: MIME type reported by the service, if known.
        size: Size in bytes reported by the service, if known.
    """

    asset_id: str = Field(min_length=1)
    download_uri: str | None = None
    media_type: str | None = None
    size: int | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Asset":
        """Build an Asset from the service's JSON representation."""
        metadata = payload.get("metadata") or {}
        return cls(
            asset_id=payload.get("assetID", ""),
            download_uri=payload.get("downloadUri"),
            media_type=metadata.get("type"),
            size=metadata.get("size"),
        )


class ExternalStorageType(str, Enum):
    """Third-party storage providers accepted for external assets."""

    S3 = "S3"
    SHAREPOINT = "SHAREPOINT"
    DROPBOX = "DROPBOX"
    BLOB = "BLOB"


class ExternalAsset(ValidatedModel):
    """Document in third-party storage, addressed by a pre-signed URL."""

    uri: str = Field(min_length=1)
    storage_type: ExternalStorageType = ExternalStorageType.S3

    def to_payload(self) -> dict[str, str]:
        return {"uri": self.uri, "storage": self.storage_type.value}


AnyAsset = Union[Asset, ExternalAsset]


class StreamAsset(BaseModel):
    """Downloaded content of one asset."""

    content: bytes
    media_type: str | None = None

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.content)
