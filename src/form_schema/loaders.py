"""
Descriptor loading.

Reads a named set of field descriptors from a JSON file, JSON text or a
plain mapping, validating every entry into a FieldDescriptor.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from form_schema.config import LOGGER_NAME
from form_schema.errors import InvalidDescriptorError
from form_schema.models.field_definitions import FieldDescriptor, FieldDescriptors

logger = logging.getLogger(LOGGER_NAME)

_DESCRIPTORS_ADAPTER = TypeAdapter(dict[str, FieldDescriptor])


def parse_descriptors(data: Mapping[str, Any]) -> FieldDescriptors:
    """Validate a mapping of field name -> descriptor mapping."""
    try:
        return _DESCRIPTORS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise InvalidDescriptorError(f"Invalid field descriptors: {e}") from e


def load_descriptors(source: str | Path | Mapping[str, Any]) -> FieldDescriptors:
    """
    Load field descriptors.

    Args:
        source: A mapping, a path to a JSON file, or JSON text.
            Example JSON: {"email": {"type": "email", "required": "Email is required"}}

    Returns:
        Field name -> FieldDescriptor, in source order.

    Raises:
        InvalidDescriptorError: If the JSON is malformed or an entry is not a
            valid descriptor.
    """
    if isinstance(source, Mapping):
        return parse_descriptors(source)

    if isinstance(source, Path) or not source.lstrip().startswith(("{", "[")):
        path = Path(source)
        logger.debug(f"Loading descriptors from {path}")
        text = path.read_text(encoding="utf-8")
    else:
        text = source

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDescriptorError(f"Invalid JSON: {str(e)}") from e

    if not isinstance(data, dict):
        raise InvalidDescriptorError("Descriptor source must be a JSON object")
    return parse_descriptors(data)
