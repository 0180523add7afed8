"""
form-schema: declarative form schemas with live form state.

Declare fields once, get a validator and initial values from the same
declaration, then drive a form's state (values, errors, touch tracking)
through a controller.

Simple Usage:
    from form_schema import create_schema, use_form

    schema, initial_values = create_schema({
        "name": {"type": "string", "required": "Name is required", "min": 2,
                 "minError": "Name must be at least 2 characters"},
        "email": {"type": "email", "emailError": "Please enter a valid email"},
        "age": {"type": "number", "initialValue": 18},
    })

    form = use_form(schema, initial_values)
    form.set_value("name", "J")
    form.on_blur("name")          # form["name"].error is now set

    if form.validate_form():
        data = form.collect_data()

Descriptors from a file:
    from form_schema import load_descriptors, create_schema

    schema, initial_values = create_schema(load_descriptors("signup.json"))
"""

from form_schema.compiler import (
    CompiledField,
    FormSchema,
    build_validator,
    compile_field,
    create_schema,
    get_initial_value,
)
from form_schema.config import (
    FormSchemaConfig,
    configure_logging,
    get_config,
    update_config,
)
from form_schema.controller import (
    FormController,
    use_form,
)
from form_schema.errors import (
    FormSchemaError,
    InvalidDescriptorError,
    UnsupportedKindError,
)
from form_schema.loaders import load_descriptors
from form_schema.models import (
    FieldDescriptor,
    FieldKind,
    FieldState,
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Main interface
    "create_schema",
    "use_form",
    "FormController",
    "FormSchema",
    # Compiler
    "CompiledField",
    "build_validator",
    "compile_field",
    "get_initial_value",
    # Descriptors
    "FieldDescriptor",
    "FieldKind",
    "load_descriptors",
    # State and results
    "FieldState",
    "ValidationResult",
    "FieldValidationError",
    # Errors
    "FormSchemaError",
    "UnsupportedKindError",
    "InvalidDescriptorError",
    # Configuration
    "FormSchemaConfig",
    "configure_logging",
    "get_config",
    "update_config",
]

__version__ = "0.1.0"
