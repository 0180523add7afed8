"""
Field compiler.

Turns one FieldDescriptor into a CompiledField (a pydantic TypeAdapter
over an Annotated type) and derives the field's initial value.

Composite kinds recurse: array elements and object members are compiled
into the element/member types of the outer annotation, so a nested failure
reports the inner field's own message at its own location.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Annotated, Any, Callable, Literal, Mapping

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    AllowInfNan,
    AnyUrl,
    Strict,
    StrictBool,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)
from pydantic_core import PydanticCustomError
from typing_extensions import TypedDict

from form_schema.compiler.constants import (
    BOOL_TYPE,
    CANONICAL_DEFAULTS,
    DATE_EMPTY,
    DATE_PARSING,
    DICT_TYPE,
    ENUM_VALUES_REQUIRED,
    FINITE_NUMBER,
    FLOAT_TYPE,
    LIST_TYPE,
    LITERAL_ERROR,
    MISSING,
    STRING_TOO_LONG,
    STRING_TOO_SHORT,
    STRING_TYPE,
    URL_PARSING,
    VALUE_ERROR,
)
from form_schema.config import LOGGER_NAME, get_config
from form_schema.errors import InvalidDescriptorError, UnsupportedKindError
from form_schema.models.field_definitions import FieldDescriptor, FieldKind
from form_schema.models.validation_result import FieldValidationError, ValidationResult

logger = logging.getLogger(LOGGER_NAME)

_DATE_ADAPTER = TypeAdapter(date | datetime)
_URL_ADAPTER = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class CompiledField:
    """Immutable validator compiled from a single descriptor."""

    kind: FieldKind
    annotation: Any
    adapter: TypeAdapter = field(repr=False, compare=False)
    required_message: str | None = None

    def check(self, value: Any) -> ValidationResult:
        """Check a value; failures are returned, never raised."""
        try:
            self.adapter.validate_python(value)
        except ValidationError as exc:
            return ValidationResult(
                is_valid=False,
                errors=[
                    FieldValidationError.from_error_details(error, field_name="")
                    for error in exc.errors()
                ],
            )
        return ValidationResult(is_valid=True, validated_data=value)

    def is_valid(self, value: Any) -> bool:
        return self.check(value).is_valid


def as_descriptor(descriptor: FieldDescriptor | Mapping[str, Any]) -> FieldDescriptor:
    """Accept a FieldDescriptor or a plain mapping in the descriptor language."""
    if isinstance(descriptor, FieldDescriptor):
        return descriptor
    try:
        return FieldDescriptor.model_validate(descriptor)
    except ValidationError as exc:
        raise InvalidDescriptorError(f"Invalid field descriptor: {exc}") from exc


def _relabel(
    messages: Mapping[str, str | None],
    member_messages: Mapping[str, str | None] | None = None,
) -> WrapValidator:
    """
    Replace pydantic's message for the first error with a descriptor message.

    ``messages`` maps error types raised for the value itself to their
    replacement. ``member_messages`` maps object member names to the text
    reported when that member is missing. Errors coming from nested
    fields already carry their own message and are left alone.
    """
    messages = {error_type: text for error_type, text in messages.items() if text}
    member_messages = {name: text for name, text in (member_messages or {}).items() if text}

    def relabel(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = first["loc"]
            if not loc:
                message = messages.get(first["type"])
            elif len(loc) == 1 and first["type"] == MISSING:
                message = member_messages.get(str(loc[0]))
            else:
                message = None
            if message is None:
                raise
            raise ValidationError.from_exception_data(
                exc.title,
                [
                    {
                        "type": PydanticCustomError(first["type"], message),
                        "loc": loc,
                        "input": first["input"],
                    }
                ],
            ) from None

    return WrapValidator(relabel)


def _check_email(value: str) -> str:
    # The whole value must be the address; "Name <addr>" forms are rejected.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise PydanticCustomError(
            VALUE_ERROR,
            "value is not a valid email address: {reason}",
            {"reason": str(e)},
        ) from None
    return value


def _date_check(message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if not value:
            raise PydanticCustomError(DATE_EMPTY, message)
        try:
            _DATE_ADAPTER.validate_python(value)
        except ValidationError:
            raise PydanticCustomError(DATE_PARSING, message) from None
        return value

    return check


def _url_check(message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError:
            raise PydanticCustomError(URL_PARSING, message) from None
        return value

    return check


def _build_string(descriptor: FieldDescriptor) -> Any:
    return Annotated[
        str,
        StringConstraints(strict=True, min_length=descriptor.min, max_length=descriptor.max),
        _relabel({
            STRING_TYPE: descriptor.required_message,
            STRING_TOO_SHORT: descriptor.min_message,
            STRING_TOO_LONG: descriptor.max_message,
        }),
    ]


def _build_email(descriptor: FieldDescriptor) -> Any:
    return Annotated[
        str,
        StringConstraints(strict=True),
        AfterValidator(_check_email),
        _relabel({
            STRING_TYPE: descriptor.required_message,
            VALUE_ERROR: descriptor.email_message,
        }),
    ]


def _build_number(descriptor: FieldDescriptor) -> Any:
    message = descriptor.required_message or get_config().number_message
    return Annotated[
        float,
        Strict(),
        AllowInfNan(False),
        _relabel({FLOAT_TYPE: message, FINITE_NUMBER: message}),
    ]


def _build_boolean(descriptor: FieldDescriptor) -> Any:
    return Annotated[StrictBool, _relabel({BOOL_TYPE: descriptor.required_message})]


def _build_array(descriptor: FieldDescriptor) -> Any:
    item: Any = Any
    if isinstance(descriptor.nested, FieldDescriptor):
        item = build_validator(descriptor.nested).annotation
    return Annotated[
        list[item],
        Strict(),
        _relabel({LIST_TYPE: descriptor.required_message}),
    ]


def _build_object(descriptor: FieldDescriptor) -> Any:
    if not isinstance(descriptor.nested, dict):
        return Annotated[
            dict[Any, Any],
            _relabel({DICT_TYPE: descriptor.required_message}),
        ]

    members = {
        name: build_validator(member).annotation
        for name, member in descriptor.nested.items()
    }
    return Annotated[
        TypedDict("ObjectMembers", members),
        _relabel(
            {DICT_TYPE: descriptor.required_message},
            {name: member.required_message for name, member in descriptor.nested.items()},
        ),
    ]


def _build_date(descriptor: FieldDescriptor) -> Any:
    default = get_config().date_message
    message = descriptor.required_message or default
    return Annotated[
        str,
        StringConstraints(strict=True),
        AfterValidator(_date_check(default)),
        _relabel({STRING_TYPE: message, DATE_EMPTY: message}),
    ]


def _build_url(descriptor: FieldDescriptor) -> Any:
    return Annotated[
        str,
        StringConstraints(strict=True),
        AfterValidator(_url_check(descriptor.url_message or get_config().url_message)),
        _relabel({STRING_TYPE: descriptor.required_message}),
    ]


def _build_enum(descriptor: FieldDescriptor) -> Any:
    if not descriptor.enum_values:
        logger.error(f"Enum descriptor without values: {descriptor!r}")
        raise InvalidDescriptorError(ENUM_VALUES_REQUIRED)
    return Annotated[
        Literal[tuple(descriptor.enum_values)],
        _relabel({LITERAL_ERROR: descriptor.required_message}),
    ]


_BUILDERS: dict[FieldKind, Callable[[FieldDescriptor], Any]] = {
    FieldKind.STRING: _build_string,
    FieldKind.EMAIL: _build_email,
    FieldKind.NUMBER: _build_number,
    FieldKind.BOOLEAN: _build_boolean,
    FieldKind.ARRAY: _build_array,
    FieldKind.OBJECT: _build_object,
    FieldKind.DATE: _build_date,
    FieldKind.URL: _build_url,
    FieldKind.ENUM: _build_enum,
}


def _kind_of(descriptor: FieldDescriptor) -> FieldKind | None:
    try:
        return FieldKind(descriptor.kind)
    except ValueError:
        return None


def build_validator(descriptor: FieldDescriptor | Mapping[str, Any]) -> CompiledField:
    """
    Compile a descriptor into a CompiledField.

    Args:
        descriptor: FieldDescriptor or mapping in the descriptor language.

    Returns:
        CompiledField whose ``check`` validates candidate values.

    Raises:
        UnsupportedKindError: If the descriptor's kind is unknown.
        InvalidDescriptorError: If the descriptor is malformed for its kind.
    """
    descriptor = as_descriptor(descriptor)
    kind = _kind_of(descriptor)
    if kind is None:
        logger.error(f"Unsupported field type: {descriptor.kind}")
        raise UnsupportedKindError(descriptor.kind)

    annotation = _BUILDERS[kind](descriptor)
    logger.debug(f"Compiled {kind.value} field")
    return CompiledField(
        kind=kind,
        annotation=annotation,
        adapter=TypeAdapter(annotation),
        required_message=descriptor.required_message,
    )


def get_initial_value(descriptor: FieldDescriptor | Mapping[str, Any]) -> Any:
    """
    Initial value of a field.

    An explicit ``initial_value`` wins, even when it is None. Otherwise the
    kind's canonical default is used; an unknown kind yields None.
    """
    descriptor = as_descriptor(descriptor)
    if descriptor.has_initial_value:
        return descriptor.initial_value

    kind = _kind_of(descriptor)
    if kind is None:
        return None
    return CANONICAL_DEFAULTS[kind]()


def compile_field(
    descriptor: FieldDescriptor | Mapping[str, Any],
) -> tuple[CompiledField, Any]:
    """Compile a descriptor into its validator and its initial value."""
    descriptor = as_descriptor(descriptor)
    return build_validator(descriptor), get_initial_value(descriptor)
