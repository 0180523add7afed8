#!/usr/bin/env python3
"""
Simple usage example.

Declares a signup form, drives it the way a UI would (input, blur,
submit) and prints the resulting field state.

Usage:
    python examples/simple_usage.py
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from form_schema import configure_logging, create_schema, use_form


SIGNUP_FORM = {
    "name": {
        "type": "string",
        "required": "Name is required",
        "min": 2,
        "minError": "Name must be at least 2 characters",
    },
    "email": {
        "type": "email",
        "required": "Email is required",
        "emailError": "Please enter a valid email",
    },
    "age": {
        "type": "number",
        "required": "Age is required",
        "initialValue": 18,
    },
}


def print_form(form) -> None:
    for name, state in form.fields.items():
        error = f"  <- {state.error}" if state.error else ""
        print(f"  {name:<6} = {state.value!r:<22} touched={state.touched}{error}")


def main():
    """Run the example."""
    configure_logging("INFO")

    schema, initial_values = create_schema(SIGNUP_FORM)
    form = use_form(schema, initial_values)
    form.subscribe(lambda f: None if f.has_changes() else print("  (form is pristine)"))

    print("Initial state:")
    print_form(form)

    # User types one letter into "name" and leaves the input
    form.set_value("name", "J")
    form.on_blur("name")
    print("\nAfter blurring a short name:")
    print_form(form)

    # User submits without fixing anything else
    print("\nSubmit:", "ok" if form.validate_form() else "rejected")
    print("Errors:", form.collect_errors())

    # User fixes the fields
    form.set_value("name", "John")
    form.set_value("email", "john@mail.com")
    if form.validate_form():
        print("\nSubmitted data:", form.collect_data())

    print("\nReset:")
    form.reset()
    print_form(form)


if __name__ == "__main__":
    main()
