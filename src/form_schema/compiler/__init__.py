"""
Descriptor compiler for form-schema.

Turns field descriptors into pydantic-backed validators and initial values.
"""

from form_schema.compiler.field_compiler import (
    CompiledField,
    as_descriptor,
    build_validator,
    compile_field,
    get_initial_value,
)
from form_schema.compiler.schema_builder import (
    FormSchema,
    create_schema,
)

__all__ = [
    "CompiledField",
    "FormSchema",
    "as_descriptor",
    "build_validator",
    "compile_field",
    "create_schema",
    "get_initial_value",
]
