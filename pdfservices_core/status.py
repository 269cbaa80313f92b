"""
Job handles, states and results.

A job moves IN_PROGRESS -> DONE or IN_PROGRESS -> FAILED. A failed job is
reported as a JobStatus carrying a JobError, not as an exception.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from pdfservices_core.assets import Asset


class JobState(str, Enum):
    IN_PROGRESS = "in progress"
    DONE = "done"
    FAILED = "failed"

    @classmethod
    def parse(cls, value: str | None) -> "JobState":
        """Map a status string from the service to a JobState.

        Anything that is not a terminal state counts as in progress.
        """
        normalized = (value or "").strip().lower()
        if normalized == cls.DONE.value:
            return cls.DONE
        if normalized == cls.FAILED.value:
            return cls.FAILED
        return cls.IN_PROGRESS


class JobHandle(BaseModel):
    """Opaque reference to a submitted job.

    Attributes:
        location: URL to poll for the job status.
        operation: Endpoint the job was submitted to.
    """

    location: str
    operation: str

    model_config = {"frozen": True}


class JobError(BaseModel):
    code: str
    message: str
    status: int | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_payload(cls, payload: Any) -> "JobError":
        if not isinstance(payload, dict):
            return cls(code="UNKNOWN", message=str(payload))
        status = payload.get("status")
        return cls(
            code=str(payload.get("code") or "UNKNOWN"),
            message=str(payload.get("message") or "Job failed"),
            status=status if isinstance(status, int) else None,
        )


# Result fields holding a single asset, keyed by their name in the status body
_SINGLE_ASSET_FIELDS = {
    "asset": "asset",
    "report": "report",
    "resource": "resource",
    "content": "content",
    "tagged-pdf": "tagged_pdf",
}


class JobResult(BaseModel):
    """Assets and inline data produced by a finished job.

    Attributes:
        asset: The primary output document.
        assets: Outputs of multi-file operations (split, images).
        report: Report asset (autotag, accessibility checker).
        resource: Zipped renditions (extract).
        content: Structured JSON content asset (extract).
        tagged_pdf: Tagged PDF output (autotag).
        properties: Inline JSON document (pdf properties).
    """

    asset: Asset | None = None
    assets: tuple[Asset, ...] = ()
    report: Asset | None = None
    resource: Asset | None = None
    content: Asset | None = None
    tagged_pdf: Asset | None = None
    properties: dict[str, Any] | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "JobResult":
        fields: dict[str, Any] = {}
        for key, name in _SINGLE_ASSET_FIELDS.items():
            value = payload.get(key)
            if isinstance(value, dict):
                fields[name] = Asset.from_payload(value)
        asset_list = payload.get("assetList")
        if isinstance(asset_list, list):
            fields["assets"] = tuple(Asset.from_payload(a) for a in asset_list if isinstance(a, dict))
        metadata = payload.get("metadata")
        if isinstance(metadata, dict):
            fields["properties"] = metadata
        return cls(**fields)


class JobStatus(BaseModel):
    """One observation of a job.

    Attributes:
        state: Current state.
        retry_after: Seconds to wait before polling again.
        result: Outputs, when state is DONE.
        error: Failure details, when state is FAILED.
        location: The polled job location.
    """

    state: JobState
    retry_after: float = 0.0
    result: JobResult | None = None
    error: JobError | None = None
    location: str | None = None

    model_config = {"frozen": True}

    @property
    def is_terminal(self) -> bool:
        return self.state is not JobState.IN_PROGRESS

    @property
    def succeeded(self) -> bool:
        return self.state is JobState.DONE
