"""
Base model for validated, immutable value objects.

Construction failures surface as the package's own ValidationError naming the
offending field, so callers only need to handle one error taxonomy.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from pdfservices_core.runtime.errors import ErrorCode, ValidationError


def validation_error_from_pydantic(exc: PydanticValidationError, owner: str) -> ValidationError:
    """Translate the first pydantic error into a ValidationError."""
    errors = exc.errors()
    if not errors:
        return ValidationError(f"{owner}: invalid value", message_debug=str(exc))

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    if first.get("type") == "missing" and field:
        return ValidationError(
            f"{owner}: '{field}' is required",
            field=field,
            code=ErrorCode.MISSING_FIELD,
            message_debug=str(exc),
        )

    message = first.get("msg", "invalid value").removeprefix("Value error, ")
    where = f"'{field}' " if field else ""
    return ValidationError(
        f"{owner}: {where}{message}",
        field=field,
        message_debug=str(exc),
    )


class ValidatedModel(BaseModel):
    """Frozen pydantic model raising ValidationError on bad input.

    Validators in subclasses raise ValidationError directly when they know
    the field at fault; pydantic lets non-ValueError exceptions through.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise validation_error_from_pydantic(e, type(self).__name__) from e
