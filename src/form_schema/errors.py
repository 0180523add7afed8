"""Build-time errors raised while compiling field descriptors."""


class FormSchemaError(ValueError):
    """Base class for descriptor problems detected before any validation runs."""


class UnsupportedKindError(FormSchemaError):
    """Raised when a descriptor names a field kind the compiler does not know."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported field type: {kind}")


class InvalidDescriptorError(FormSchemaError):
    """Raised when a descriptor is malformed for its kind (e.g. enum without values)."""
