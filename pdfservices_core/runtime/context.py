"""
Request-scoped context for PDF Services calls.

RunContext carries a correlation id and an optional deadline across the calls
that make up one job (upload, submit, poll, fetch). The correlation id is sent
as ``x-request-id`` so service-side logs can be matched with ours.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


def _as_aware(value: datetime) -> datetime:
    # astimezone() on a naive datetime assumes local time
    return value if value.tzinfo is not None else value.astimezone()


class RunContext(BaseModel):
    """Request-scoped context for one sample run or job.

    Attributes:
        request_id: Unique identifier for request tracing.
        operation: Optional operation name, used in log prefixes.
        deadline: Optional absolute deadline for awaiting a job.
        budgets: Optional operational constraints (e.g., {"max_wait_seconds": 600}).
    """

    request_id: str
    operation: str | None = None
    deadline: datetime | None = None
    budgets: dict[str, int] | None = Field(default=None)

    model_config = {"frozen": True}

    @field_validator("deadline")
    @classmethod
    def _aware_deadline(cls, value: datetime | None) -> datetime | None:
        return _as_aware(value) if value is not None else None

    @classmethod
    def new(cls, operation: str | None = None) -> "RunContext":
        """Create a context with a freshly generated request id.

        Args:
            operation: Optional operation name for log prefixes.

        Returns:
            A new RunContext.
        """
        return cls(request_id=str(uuid.uuid4()), operation=operation)

    def with_deadline(self, deadline: datetime) -> "RunContext":
        """Return a new context with the specified deadline.

        Args:
            deadline: Absolute datetime by which the job should complete.
                A deadline without a timezone is taken as local time.

        Returns:
            New RunContext with the deadline set.
        """
        return self.model_copy(update={"deadline": _as_aware(deadline)})

    def with_budgets(self, **budgets: int) -> "RunContext":
        """Return a new context with the specified budgets merged in."""
        current = self.budgets or {}
        return self.model_copy(update={"budgets": {**current, **budgets}})

    def seconds_remaining(self, now: datetime | None = None) -> float | None:
        """Seconds left until the deadline, or None when no deadline is set."""
        if self.deadline is None:
            return None
        now = _as_aware(now) if now is not None else datetime.now(timezone.utc)
        return (self.deadline - now).total_seconds()

    def get_headers(self) -> dict[str, str]:
        """Get HTTP headers for propagating context.

        Returns:
            Dictionary of headers to inject into outbound requests.
        """
        return {"x-request-id": self.request_id}

    @property
    def log_prefix(self) -> str:
        if self.operation:
            return f"[{self.request_id[:8]}:{self.operation}]"
        return f"[{self.request_id[:8]}]"
