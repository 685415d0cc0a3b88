"""
CharLengthValidator - checks the character count of a value against min/max bounds.
"""

from typing import Any

from charlength.core.models.field_id import format_number
from charlength.core.models.rule_config import UNLIMITED
from .base_validator import BaseValidator, ValidationError


def is_checkable(value: Any) -> bool:
    """Whether a value is a scalar whose length can be measured (no booleans)."""
    if isinstance(value, bool) or not isinstance(value, str | int | float):
        return False

    # Ints past the interpreter's digit limit have no text form
    if isinstance(value, int):
        try:
            str(value)
        except ValueError:
            return False
    return True


def measure_length(value: str | int | float, count_mode: str = "characters") -> int:
    """
    Length of a value as the user typed it.

    Args:
        value: str, int or float
        count_mode: "characters" counts code points, "bytes" counts UTF-8 bytes

    Returns:
        The length of the value's text form
    """
    if isinstance(value, float):
        text = format_number(value)
    else:
        text = str(value)

    if count_mode == "bytes":
        return len(text.encode("utf-8"))
    return len(text)


def has_single_placeholder(template: str) -> bool:
    """Whether a message template holds exactly one %d or %s (literal %% allowed)."""
    conversions = template.replace("%%", "")
    return conversions.count("%") == 1 and ("%d" in conversions or "%s" in conversions)


def format_message(template: str, bound: int) -> str:
    """
    Substitute the bound into a message template.

    Templates with one %d or %s take the bound; templates without any
    conversion are used as written; anything else is returned untouched.
    """
    if has_single_placeholder(template):
        return template % bound
    if "%" not in template.replace("%%", ""):
        return template.replace("%%", "%")
    return template


class CharLengthValidator(BaseValidator):
    """
    Validates that a value's length is within [min_chars, max_chars].

    Parameters:
    - min_chars: Minimum length (inclusive), 0 for none
    - max_chars: Maximum length (inclusive), -1 for unlimited
    - min_message: Template used when the value is too short
    - max_message: Template used when the value is too long
    - count_mode: "characters" or "bytes"

    Values that are not strings or numbers are not checked.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_chars = self.parameters.get("min_chars", 0)
        self.max_chars = self.parameters.get("max_chars", UNLIMITED)
        self.min_message = self.parameters.get("min_message", "")
        self.max_message = self.parameters.get("max_message", "")
        self.count_mode = self.parameters.get("count_mode", "characters")

    def validate(self, value: Any) -> None:
        """
        Validate the length of the value.

        Args:
            value: The resolved field value

        Raises:
            ValidationError: If the value is too short or too long
        """
        if not is_checkable(value):
            return

        length = measure_length(value, self.count_mode)

        min_reached = length >= self.min_chars
        max_exceeded = self.max_chars != UNLIMITED and length > self.max_chars

        # Too short wins over too long
        if not min_reached:
            raise ValidationError(
                rule_name=self.rule_type,
                field_name=self.field_name,
                message=format_message(self.min_message, self.min_chars),
            )

        if max_exceeded:
            raise ValidationError(
                rule_name=self.rule_type,
                field_name=self.field_name,
                message=format_message(self.max_message, self.max_chars),
            )

    @property
    def rule_type(self) -> str:
        return "char_length"
