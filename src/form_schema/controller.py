"""
Form State Controller.

Owns the live state of every field of a compiled schema and exposes the
operations a form UI needs: setting values, touch tracking, per-field and
whole-form validation, change detection and reset.
"""

import copy
import logging
from typing import Any, Callable, Mapping

from form_schema.compiler.schema_builder import FormSchema
from form_schema.config import LOGGER_NAME, get_config
from form_schema.models.form_fields import FieldState, FormFields

logger = logging.getLogger(LOGGER_NAME)

Listener = Callable[["FormController"], None]


class FormController:
    """
    Mutable form state over a compiled schema.

    Usage:
        schema, initial_values = create_schema({
            "name": {"type": "string", "min": 2, "minError": "Too short"},
            "email": {"type": "email"},
        })
        form = FormController(schema, initial_values)

        form.set_value("name", "J")
        form.on_blur("name")
        form["name"].error  # "Too short"

        if form.validate_form():
            submit(form.collect_data())

    Unknown field names passed to the mutators are ignored. The set of
    fields is fixed at construction.
    """

    def __init__(
        self,
        schema: FormSchema,
        initial_values: Mapping[str, Any] | None = None,
    ):
        """
        Initialize the controller.

        Args:
            schema: Compiled form schema.
            initial_values: Field name -> initial value. If None, uses
                schema.initial_values. Fields missing from it start as "".
        """
        self.schema = schema
        if initial_values is None:
            initial_values = schema.initial_values
        self._initial_values = {
            name: copy.deepcopy(initial_values.get(name, "")) for name in schema
        }
        self.fields: FormFields = {
            name: FieldState(value=copy.deepcopy(value))
            for name, value in self._initial_values.items()
        }
        self.form_error: str = ""
        self.is_submitting: bool = False
        self._listeners: list[Listener] = []

    def __getitem__(self, name: str) -> FieldState:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    @property
    def initial_values(self) -> dict[str, Any]:
        """Values every field was seeded with (and resets to)."""
        return copy.deepcopy(self._initial_values)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call ``listener(controller)`` after every mutating operation.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _field(self, name: str) -> FieldState | None:
        state = self.fields.get(name)
        if state is None:
            logger.debug(f"Ignoring unknown field: {name}")
        return state

    # Mutators

    def set_value(self, name: str, value: Any) -> None:
        """Set a field's value, mark it touched and clear its error."""
        state = self._field(name)
        if state is None:
            return
        state.value = value
        state.touched = True
        state.error = ""
        self._notify()

    def set_field_error(self, name: str, message: str) -> None:
        """Manually set the error shown for a field."""
        state = self._field(name)
        if state is None:
            return
        state.error = message
        self._notify()

    def set_form_error(self, message: str) -> None:
        """Set the general error not tied to any field."""
        self.form_error = message
        self._notify()

    def mark_touched_on_input(self, name: str) -> None:
        """Mark a field as being edited: touched, with its stale error cleared."""
        state = self._field(name)
        if state is None:
            return
        state.touched = True
        state.error = ""
        self._notify()

    def on_blur(self, name: str) -> None:
        """Mark a field touched and validate it."""
        state = self._field(name)
        if state is None:
            return
        state.touched = True
        self._validate_field(name)
        self._notify()

    def validate_field(self, name: str) -> bool:
        """
        Validate one field against its compiled validator.

        Returns:
            True if the field passes. False if it fails (its error is set)
            or if the field is unknown (nothing changes).
        """
        if name not in self.fields or name not in self.schema:
            return False
        is_valid = self._validate_field(name)
        self._notify()
        return is_valid

    def _validate_field(self, name: str) -> bool:
        result = self.schema.check_field(name, self.fields[name].value)
        state = self.fields[name]
        if not result.is_valid:
            state.error = result.first_message or get_config().validation_failed_message
            return False
        state.error = ""
        return True

    def validate_form(self) -> bool:
        """
        Validate every field, making all errors visible.

        Every field is marked touched and each failing field gets the first
        message reported for it. Fields that pass keep whatever error they
        already held.

        Returns:
            True if the whole record passes.
        """
        self.form_error = ""
        for state in self.fields.values():
            state.touched = True

        result = self.schema.check(self.collect_data())
        if not result.is_valid:
            fallback = get_config().validation_failed_message
            for name, message in result.first_errors().items():
                if name in self.fields:
                    self.fields[name].error = message or fallback
            logger.info(f"Form validation failed for fields: {list(result.first_errors())}")
        else:
            logger.debug("Form validation passed")

        self._notify()
        return result.is_valid

    def reset(self) -> None:
        """Restore every field to its initial value and clear all state."""
        for name, state in self.fields.items():
            state.value = copy.deepcopy(self._initial_values[name])
            state.error = ""
            state.touched = False
        self.form_error = ""
        self._notify()

    # Derived queries

    def has_changes(self) -> bool:
        """True if any field is touched or differs from its initial value."""
        for name, state in self.fields.items():
            if state.touched or state.value != self._initial_values[name]:
                return True
        return False

    def has_explicit_errors(self) -> bool:
        """True if any field currently shows an error. Runs no validation."""
        return any(state.error for state in self.fields.values())

    def has_errors(self) -> bool:
        """
        True if any field shows an error or the current values would fail.

        The trial validation does not change any field.
        """
        if self.has_explicit_errors():
            return True
        return not self.schema.check(self.collect_data()).is_valid

    def collect_data(self) -> dict[str, Any]:
        """Snapshot of every field's current value."""
        return {name: copy.deepcopy(state.value) for name, state in self.fields.items()}

    def collect_errors(self) -> dict[str, str]:
        """
        Current errors without running validation.

        The general form error, if any, is reported under
        ``config.form_error_key`` ("_form" by default).
        """
        errors = {name: state.error for name, state in self.fields.items() if state.error}
        if self.form_error:
            errors[get_config().form_error_key] = self.form_error
        return errors

    def collect_errors_after_validating(self) -> dict[str, str]:
        """Run validate_form, then return collect_errors."""
        self.validate_form()
        return self.collect_errors()


def use_form(
    schema: FormSchema,
    initial_values: Mapping[str, Any] | None = None,
) -> FormController:
    """
    Convenience function to create a form controller.

    Args:
        schema: Compiled form schema from create_schema.
        initial_values: Optional initial values; defaults to the schema's own.

    Returns:
        FormController

    Example:
        >>> schema, initial_values = create_schema({"name": {"type": "string"}})
        >>> form = use_form(schema, initial_values)
        >>> form.collect_data()
        {'name': ''}
    """
    return FormController(schema, initial_values)
