"""
Value-level validation rules.

Provides the character length validator used by the rule engine.
"""

from .base_validator import BaseValidator, ValidationError
from .char_length_validator import (
    CharLengthValidator,
    format_message,
    has_single_placeholder,
    is_checkable,
    measure_length,
)

__all__ = [
    "BaseValidator",
    "ValidationError",
    "CharLengthValidator",
    "is_checkable",
    "measure_length",
    "format_message",
    "has_single_placeholder",
]
