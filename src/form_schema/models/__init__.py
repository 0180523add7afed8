"""
Data models for form-schema.

This module contains:
- Field descriptors (pydantic, declarative input)
- Validation results (pydantic, output of every check)
- Live field state (dataclass, owned by the controller)
"""

from form_schema.models.field_definitions import (
    FieldDescriptor,
    FieldDescriptors,
    FieldKind,
)
from form_schema.models.form_fields import (
    FieldState,
    FormFields,
)
from form_schema.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Descriptors
    "FieldDescriptor",
    "FieldDescriptors",
    "FieldKind",
    # Field state
    "FieldState",
    "FormFields",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
