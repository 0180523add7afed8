"""Live per-field state kept by the form controller."""

from dataclasses import dataclass
from typing import Any


@dataclass
class FieldState:
    """Current value, visible error and touch marker of one field."""

    value: Any = ""
    error: str = ""
    touched: bool = False


# Field name -> live state, in schema order
FormFields = dict[str, FieldState]
