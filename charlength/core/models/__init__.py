"""
Core data models for the character length rule engine.

All models use Pydantic for runtime validation and type safety.
"""

from .evaluation_outcome import EvaluationOutcome
from .field_id import FieldId, format_number, split_field_id
from .form import FieldInput, Form, FormField
from .rule_config import UNLIMITED, RuleConfig
from .rule_options import DEFAULT_MAX_MESSAGE, DEFAULT_MIN_MESSAGE, RuleOptions

__all__ = [
    "FieldId",
    "split_field_id",
    "format_number",
    "RuleOptions",
    "RuleConfig",
    "UNLIMITED",
    "DEFAULT_MIN_MESSAGE",
    "DEFAULT_MAX_MESSAGE",
    "EvaluationOutcome",
    "Form",
    "FormField",
    "FieldInput",
]
