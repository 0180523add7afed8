"""Tests for the field compiler."""

import math

import pytest
from form_schema.compiler.field_compiler import (
    CompiledField,
    build_validator,
    compile_field,
    get_initial_value,
)
from form_schema.errors import (
    FormSchemaError,
    InvalidDescriptorError,
    UnsupportedKindError,
)
from form_schema.models.field_definitions import FieldDescriptor, FieldKind


class TestStringField:
    """Tests for string fields."""

    def test_length_rules(self):
        """Test min/max length with custom messages."""
        field = build_validator({
            "type": "string",
            "required": "Required",
            "min": 3,
            "minError": "Too short",
            "max": 10,
            "maxError": "Too long",
        })

        assert field.is_valid("hello")

        short = field.check("hi")
        assert not short.is_valid
        assert short.first_message == "Too short"

        long = field.check("verylongstring")
        assert not long.is_valid
        assert long.first_message == "Too long"

    def test_type_failure_uses_required_message(self):
        """Test non-text values report the required message."""
        field = build_validator({"type": "string", "required": "Name is required"})
        assert field.check(42).first_message == "Name is required"
        assert field.check(None).first_message == "Name is required"

    def test_generic_length_message(self):
        """Test pydantic's message is used when no custom one is set."""
        field = build_validator({"type": "string", "min": 2})
        result = field.check("J")
        assert not result.is_valid
        assert result.first_message
        assert result.errors[0].error_type == "string_too_short"

    def test_unbounded(self):
        """Test a plain string accepts empty and long text."""
        field = build_validator({"type": "string"})
        assert field.is_valid("")
        assert field.is_valid("x" * 500)

    def test_zero_min_is_honoured(self):
        """Test a minimum of zero accepts the empty string."""
        field = build_validator(FieldDescriptor(kind="string", min=0))
        assert field.is_valid("")


class TestEmailField:
    """Tests for email fields."""

    def test_format(self):
        """Test email syntax check with its own message."""
        field = build_validator({
            "type": "email",
            "required": "Email required",
            "emailError": "Invalid email",
        })
        assert field.is_valid("john@x.com")
        assert field.check("invalid-email").first_message == "Invalid email"

    def test_type_and_format_messages_differ(self):
        """Test the two failure causes report distinct messages."""
        field = build_validator({
            "type": "email",
            "required": "Email required",
            "emailError": "Invalid email",
        })
        assert field.check(42).first_message == "Email required"
        assert field.check("").first_message == "Invalid email"

    def test_display_name_form_rejected(self):
        """Test a "Name <address>" value is not accepted as an address."""
        field = build_validator({"type": "email", "emailError": "bad email"})
        result = field.check("John Doe <john@x.com>")
        assert not result.is_valid
        assert result.first_message == "bad email"
        assert not field.is_valid("<john@x.com>")


class TestNumberField:
    """Tests for number fields."""

    def test_numbers(self):
        """Test ints and floats pass."""
        field = build_validator({"type": "number", "required": "Number required"})
        assert field.is_valid(42)
        assert field.is_valid(3.14)
        assert field.is_valid(0)

    def test_non_numbers(self):
        """Test strings, NaN and infinity fail."""
        field = build_validator({"type": "number", "required": "Number required"})
        assert field.check("not-a-number").first_message == "Number required"
        assert field.check("42").first_message == "Number required"
        assert field.check(math.nan).first_message == "Number required"
        assert not field.is_valid(math.inf)

    def test_default_message(self):
        """Test the configured fallback message."""
        field = build_validator({"type": "number"})
        assert field.check("abc").first_message == "Please enter a valid number"


class TestBooleanField:
    """Tests for boolean fields."""

    def test_exact_booleans(self):
        """Test only True and False pass."""
        field = build_validator({"type": "boolean"})
        assert field.is_valid(True)
        assert field.is_valid(False)

    @pytest.mark.parametrize("value", ["true", "not-boolean", 1, 0, None])
    def test_coercions_rejected(self, value):
        """Test truthy/falsy look-alikes are rejected."""
        field = build_validator({"type": "boolean"})
        assert not field.is_valid(value)


class TestArrayField:
    """Tests for array fields."""

    def test_any_elements(self):
        """Test arrays without an element descriptor."""
        field = build_validator({"type": "array", "required": "Array required"})
        assert field.is_valid([])
        assert field.is_valid(["item1", 2, {"x": 1}])
        assert field.check("not-an-array").first_message == "Array required"

    def test_nested_elements(self):
        """Test every element is checked against the element descriptor."""
        field = build_validator({
            "type": "array",
            "schema": {"type": "string", "min": 2, "minError": "Tag too short"},
        })
        assert field.is_valid(["tag1", "tag2", "tag3"])

        result = field.check(["ok", "x", "y"])
        assert not result.is_valid
        assert result.first_message == "Tag too short"
        assert result.errors[0].loc == [1]

    def test_nested_array_of_arrays(self):
        """Test recursive compilation through two array levels."""
        field = build_validator({
            "type": "array",
            "schema": {"type": "array", "schema": {"type": "number"}},
        })
        assert field.is_valid([[1, 2], [3.5]])
        assert not field.is_valid([[1, "two"]])


class TestObjectField:
    """Tests for object fields."""

    def test_any_record(self):
        """Test objects without member descriptors."""
        field = build_validator({"type": "object", "required": "Object required"})
        assert field.is_valid({})
        assert field.is_valid({"key": "value"})
        assert field.check("not-an-object").first_message == "Object required"
        assert not field.is_valid(["a", "b"])

    def test_members(self):
        """Test every member must pass its own validator."""
        field = build_validator({
            "type": "object",
            "schema": {
                "name": {"type": "string"},
                "email": {"type": "email", "emailError": "Bad email"},
            },
        })
        assert field.is_valid({"name": "John", "email": "john@x.com"})

        result = field.check({"name": "John", "email": "nope"})
        assert not result.is_valid
        assert result.first_message == "Bad email"
        assert result.errors[0].loc == ["email"]

    def test_missing_member(self):
        """Test a missing member fails at that member."""
        field = build_validator({
            "type": "object",
            "schema": {
                "name": {"type": "string"},
                "email": {"type": "email"},
            },
        })
        result = field.check({"name": "John"})
        assert not result.is_valid
        assert result.errors[0].loc == ["email"]
        assert result.errors[0].error_type == "missing"

    def test_missing_member_uses_required_message(self):
        """Test a missing member reports its own required message."""
        field = build_validator({
            "type": "object",
            "schema": {
                "name": {"type": "string", "required": "Name required"},
                "email": {"type": "email", "required": "Email required"},
            },
        })
        result = field.check({"name": "John"})
        assert result.first_message == "Email required"
        assert result.errors[0].loc == ["email"]

    def test_extra_keys_ignored(self):
        """Test unknown member keys do not fail validation."""
        field = build_validator({
            "type": "object",
            "schema": {"name": {"type": "string"}},
        })
        assert field.is_valid({"name": "John", "nickname": "JJ"})


class TestDateField:
    """Tests for date fields."""

    @pytest.mark.parametrize("value", ["2024-01-15", "2024-01-15T10:30:00"])
    def test_valid_dates(self, value):
        """Test ISO dates and date-times pass."""
        field = build_validator({"type": "date"})
        assert field.is_valid(value)

    def test_empty_and_unparseable(self):
        """Test both failure causes fail."""
        field = build_validator({"type": "date"})
        assert field.check("").first_message == "Please enter a valid date"
        assert field.check("not-a-date").first_message == "Please enter a valid date"
        assert not field.is_valid("2024-13-45")
        assert not field.is_valid(20240115)

    def test_required_message_for_empty(self):
        """Test the required message covers the empty case."""
        field = build_validator({"type": "date", "required": "Date is required"})
        assert field.check("").first_message == "Date is required"


class TestUrlField:
    """Tests for url fields."""

    def test_urls(self):
        """Test URL syntax check."""
        field = build_validator({"type": "url", "urlError": "Bad URL"})
        assert field.is_valid("https://www.python.org/downloads/")
        assert field.check("not-a-url").first_message == "Bad URL"

    def test_default_message(self):
        """Test the configured fallback message."""
        field = build_validator({"type": "url"})
        assert field.check("not-a-url").first_message == "Invalid URL"


class TestEnumField:
    """Tests for enum fields."""

    def test_membership(self):
        """Test value must be one of the enum values."""
        field = build_validator({"type": "enum", "values": ["a", "b"]})
        assert field.is_valid("a")
        assert field.is_valid("b")
        assert not field.is_valid("c")

    def test_required_message(self):
        """Test the required message on a non-member."""
        field = build_validator({
            "type": "enum",
            "values": ["admin", "user"],
            "required": "Role required",
        })
        assert field.check("invalid").first_message == "Role required"
        assert field.check("").first_message == "Role required"

    def test_empty_values_rejected_at_compile_time(self):
        """Test enum without values fails while compiling."""
        with pytest.raises(InvalidDescriptorError, match="Enum type requires values array"):
            build_validator({"type": "enum", "values": [], "required": "Selection required"})

    def test_missing_values_rejected_at_compile_time(self):
        """Test enum with no values key fails while compiling."""
        with pytest.raises(InvalidDescriptorError):
            build_validator(FieldDescriptor(kind="enum"))


class TestBuildValidator:
    """Tests for dispatch and compile-time errors."""

    def test_unsupported_kind(self):
        """Test unknown kinds fail with UnsupportedKindError."""
        with pytest.raises(UnsupportedKindError, match="Unsupported field type: unsupported"):
            build_validator({"type": "unsupported"})

    def test_errors_are_value_errors(self):
        """Test build-time errors share a ValueError base."""
        assert issubclass(UnsupportedKindError, FormSchemaError)
        assert issubclass(InvalidDescriptorError, FormSchemaError)
        assert issubclass(FormSchemaError, ValueError)

    def test_unsupported_nested_kind(self):
        """Test unknown kinds inside composite descriptors also fail."""
        with pytest.raises(UnsupportedKindError):
            build_validator({"type": "array", "schema": {"type": "bogus"}})

    def test_malformed_descriptor(self):
        """Test a mapping without a kind is rejected."""
        with pytest.raises(InvalidDescriptorError):
            build_validator({"min": 2})

    def test_compiled_field(self):
        """Test the compiled field records its kind."""
        field = build_validator(FieldDescriptor(kind="email", required_message="Required"))
        assert isinstance(field, CompiledField)
        assert field.kind is FieldKind.EMAIL
        assert field.required_message == "Required"

    def test_check_result(self):
        """Test a passing check carries the value."""
        result = build_validator({"type": "string"}).check("hello")
        assert result.is_valid
        assert result.errors == []
        assert result.validated_data == "hello"


class TestGetInitialValue:
    """Tests for initial value derivation."""

    def test_custom_initial_value(self):
        """Test explicit initial value wins."""
        assert get_initial_value({"type": "string", "initialValue": "custom value"}) == "custom value"

    @pytest.mark.parametrize(
        "kind, expected",
        [
            ("string", ""),
            ("email", ""),
            ("number", 0),
            ("boolean", False),
            ("array", []),
            ("object", {}),
            ("date", ""),
            ("url", ""),
            ("enum", ""),
        ],
    )
    def test_canonical_defaults(self, kind, expected):
        """Test default values for different kinds."""
        value = get_initial_value({"type": kind})
        assert value == expected
        assert type(value) is type(expected)

    def test_unknown_kind(self):
        """Test unknown kinds yield None."""
        assert get_initial_value({"type": "unknown"}) is None

    def test_explicit_value_over_default(self):
        """Test initial value takes priority over the kind default."""
        assert get_initial_value({"type": "boolean", "initialValue": True}) is True

    def test_explicit_none(self):
        """Test an explicit None is returned verbatim."""
        assert get_initial_value({"type": "string", "initialValue": None}) is None
        assert get_initial_value({"type": "string"}) == ""

    def test_fresh_containers(self):
        """Test list/dict defaults are never shared between calls."""
        first = get_initial_value({"type": "array"})
        first.append("x")
        assert get_initial_value({"type": "array"}) == []


class TestCompileField:
    """Tests for compile_field."""

    def test_returns_validator_and_initial_value(self):
        """Test compile_field returns both artifacts."""
        validator, initial = compile_field({"type": "number", "initialValue": 18})
        assert validator.kind is FieldKind.NUMBER
        assert initial == 18
        assert validator.is_valid(initial)

    def test_enum_safe_check(self):
        """Test enum(values=['a','b']) accepts 'a' and rejects 'c'."""
        validator, initial = compile_field({"type": "enum", "values": ["a", "b"]})
        assert validator.check("a").is_valid
        assert not validator.check("c").is_valid
        assert initial == ""
