"""
Field descriptor models for declarative form schemas.

A descriptor states one field's kind, its constraints and its messages.
The compiler turns each descriptor into a validator and an initial value.
Descriptors can be built in Python or validated from plain mappings using
the camelCase keys of the descriptor language (``type``, ``minError``,
``initialValue``, ``schema``...).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FieldKind(str, Enum):
    """Field kinds understood by the compiler."""

    STRING = "string"
    EMAIL = "email"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    DATE = "date"
    URL = "url"
    ENUM = "enum"


class FieldDescriptor(BaseModel):
    """
    Declarative description of a single form field.

    ``kind`` is kept as plain text so that an unknown kind is reported by
    the compiler (``UnsupportedKindError``) rather than while parsing the
    descriptor.
    """

    kind: str = Field(..., alias="type", description="Field kind, e.g. string, email, enum")
    required_message: str | None = Field(
        default=None,
        alias="required",
        description="Message used when the value is missing or of the wrong type",
    )

    # String length bounds
    min: int | None = Field(default=None, description="Minimum string length")
    min_message: str | None = Field(default=None, alias="minError")
    max: int | None = Field(default=None, description="Maximum string length")
    max_message: str | None = Field(default=None, alias="maxError")

    # Format messages
    email_message: str | None = Field(default=None, alias="emailError")
    url_message: str | None = Field(default=None, alias="urlError")

    enum_values: list[str] | None = Field(
        default=None,
        alias="values",
        description="Allowed values, required for enum fields",
    )
    initial_value: Any = Field(
        default=None,
        alias="initialValue",
        description="Explicit initial value; None counts when given explicitly",
    )
    nested: "FieldDescriptor | dict[str, FieldDescriptor] | None" = Field(
        default=None,
        alias="schema",
        description="Element descriptor for arrays, member descriptors for objects",
    )

    model_config = {"populate_by_name": True}

    @property
    def has_initial_value(self) -> bool:
        """Whether ``initial_value`` was given, even as None."""
        return "initial_value" in self.model_fields_set


FieldDescriptor.model_rebuild()


# Type alias for a named set of descriptors
FieldDescriptors = dict[str, FieldDescriptor]
