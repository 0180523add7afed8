"""
Constants for the descriptor compiler.

Pydantic error types the compiler relabels with descriptor messages,
and the canonical initial value of every field kind.
"""

from form_schema.models.field_definitions import FieldKind

# Pydantic error types raised by the per-kind validators
STRING_TYPE = "string_type"
STRING_TOO_SHORT = "string_too_short"
STRING_TOO_LONG = "string_too_long"
FLOAT_TYPE = "float_type"
FINITE_NUMBER = "finite_number"
BOOL_TYPE = "bool_type"
LIST_TYPE = "list_type"
DICT_TYPE = "dict_type"
LITERAL_ERROR = "literal_error"
MISSING = "missing"
VALUE_ERROR = "value_error"

# Custom error types raised by the format checks
DATE_EMPTY = "date_empty"
DATE_PARSING = "date_parsing"
URL_PARSING = "url_parsing"

# Canonical initial values; factories so list/dict defaults are never shared
CANONICAL_DEFAULTS = {
    FieldKind.STRING: str,
    FieldKind.EMAIL: str,
    FieldKind.NUMBER: int,
    FieldKind.BOOLEAN: bool,
    FieldKind.ARRAY: list,
    FieldKind.OBJECT: dict,
    FieldKind.DATE: str,
    FieldKind.URL: str,
    FieldKind.ENUM: str,
}

ENUM_VALUES_REQUIRED = "Enum type requires values array"
