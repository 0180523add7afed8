"""
Schema builder.

Compiles a named set of field descriptors into a FormSchema: the compiled
field validators, a compound validator over whole records, and the
initial-values record.
"""

import logging
from typing import Any, Iterator, Mapping

from pydantic import TypeAdapter, ValidationError
from pydantic_core import ErrorDetails
from typing_extensions import TypedDict

from form_schema.compiler.constants import MISSING
from form_schema.compiler.field_compiler import CompiledField, compile_field
from form_schema.config import LOGGER_NAME, get_config
from form_schema.errors import InvalidDescriptorError
from form_schema.models.field_definitions import FieldDescriptor
from form_schema.models.validation_result import FieldValidationError, ValidationResult

logger = logging.getLogger(LOGGER_NAME)


class FormSchema:
    """
    Compiled form schema.

    Fields keep the order of the descriptors they were built from. Records
    are checked field by field: every failing field reports its own errors
    and passing fields report none.

    Usage:
        schema, initial_values = create_schema({
            "name": {"type": "string", "min": 2},
            "email": {"type": "email"},
        })

        result = schema.check({"name": "J", "email": "j@example.com"})
        result.first_errors()  # {"name": "String should have at least 2 characters"}
    """

    def __init__(
        self,
        fields: Mapping[str, CompiledField],
        initial_values: Mapping[str, Any],
    ):
        self.fields: dict[str, CompiledField] = dict(fields)
        self.initial_values: dict[str, Any] = dict(initial_values)

        record = TypedDict(
            "FormRecord",
            {name: compiled.annotation for name, compiled in self.fields.items()},
        )
        self._adapter = TypeAdapter(record)

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, name: str) -> CompiledField:
        return self.fields[name]

    def check(self, data: Any) -> ValidationResult:
        """
        Check a full candidate record against every field.

        Args:
            data: Mapping of field name to candidate value. Extra keys are ignored.

        Returns:
            ValidationResult; on failure ``errors`` holds the errors of every
            failing field, in field order.
        """
        try:
            self._adapter.validate_python(data)
        except ValidationError as exc:
            return ValidationResult(
                is_valid=False,
                errors=[self._field_error(error) for error in exc.errors()],
            )
        return ValidationResult(is_valid=True, validated_data=dict(data))

    def check_field(self, name: str, value: Any) -> ValidationResult:
        """Check one value against a single field's validator."""
        return self.fields[name].check(value)

    def _field_error(self, error: ErrorDetails) -> FieldValidationError:
        detail = FieldValidationError.from_error_details(error)
        loc = error["loc"]
        if error["type"] == MISSING and len(loc) == 1 and loc[0] in self.fields:
            message = self.fields[loc[0]].required_message
            if message:
                detail = detail.model_copy(update={"message": message})
        return detail


def create_schema(
    descriptors: Mapping[str, FieldDescriptor | Mapping[str, Any]],
) -> tuple[FormSchema, dict[str, Any]]:
    """
    Build a FormSchema and its initial-values record.

    Args:
        descriptors: Field name -> descriptor (or mapping in the descriptor
            language). Order is preserved.

    Returns:
        Tuple of (schema, initial_values).

    Raises:
        UnsupportedKindError: If any descriptor has an unknown kind.
        InvalidDescriptorError: If any descriptor is malformed for its kind.
            Also raised when a field is named like the form-level error key.

    Example:
        >>> schema, initial_values = create_schema({
        ...     "name": {"type": "string", "required": "Name is required"},
        ...     "age": {"type": "number", "initialValue": 18},
        ... })
        >>> initial_values
        {'name': '', 'age': 18}
    """
    reserved = get_config().form_error_key
    if reserved in descriptors:
        logger.error(f"Field name {reserved!r} is reserved for form-level errors")
        raise InvalidDescriptorError(f"Field name {reserved!r} is reserved for form-level errors")

    fields: dict[str, CompiledField] = {}
    initial_values: dict[str, Any] = {}

    for name, descriptor in descriptors.items():
        fields[name], initial_values[name] = compile_field(descriptor)

    logger.debug(f"Built schema with fields: {list(fields)}")
    schema = FormSchema(fields, initial_values)
    return schema, schema.initial_values
