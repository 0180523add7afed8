"""
Validation result models.

These models carry the outcome of checking a value against a compiled
field, or a whole record against a compiled form schema.
"""

from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import ErrorDetails


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(
        ..., description="Top-level field with the error, empty for a single-value check"
    )
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    loc: list[str | int] = Field(
        default_factory=list, description="Full path to the failing value"
    )
    received: Any | None = Field(default=None, description="Received value")

    @classmethod
    def from_error_details(
        cls,
        error: ErrorDetails,
        field_name: str | None = None,
    ) -> "FieldValidationError":
        """
        Build from one entry of ``pydantic.ValidationError.errors()``.

        Args:
            error: The pydantic error entry.
            field_name: Field to attribute the error to. If None, the first
                element of the error location is used.
        """
        loc = list(error["loc"])
        if field_name is None:
            field_name = str(loc[0]) if loc else ""
        return cls(
            field_name=field_name,
            error_type=error["type"],
            message=error["msg"],
            loc=loc,
            received=error.get("input"),
        )

    @property
    def path(self) -> str:
        """Dotted path of ``loc``, e.g. ``user.email`` or ``tags.2``."""
        return ".".join(str(part) for part in self.loc)


class ValidationResult(BaseModel):
    """Result of checking a value or a record."""

    is_valid: bool = Field(..., description="Whether the data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: Any | None = Field(
        default=None, description="Validated data if valid"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    @property
    def first_message(self) -> str | None:
        """Message of the first reported error, if any."""
        return self.errors[0].message if self.errors else None

    def get_field_errors(self, field_name: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_name == field_name]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field names to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.field_name not in result:
                result[error.field_name] = []
            result[error.field_name].append(error.message)
        return result

    def first_errors(self) -> dict[str, str]:
        """Map each failing field to the first message reported for it."""
        result: dict[str, str] = {}
        for error in self.errors:
            result.setdefault(error.field_name, error.message)
        return result
