"""
FieldId model representing a composite form field identifier (e.g. 7.2).
"""

import math
import re
from typing import Any

from pydantic import BaseModel

_NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def format_number(number: float) -> str:
    """
    Render a number the way it appears as a field key.

    Integral floats lose their ".0" (7.0 -> "7"); everything else uses the
    shortest round-trip representation (1.3 -> "1.3").
    """
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return repr(number) if isinstance(number, float) else str(number)


def split_field_id(value: Any) -> tuple[int, int | None] | None:
    """
    Split a composite field id into its major and minor components.

    Args:
        value: int, float or numeric string

    Returns:
        (major, minor) where minor is None for whole fields, or None when
        the value is not a usable field id

    Examples:
        >>> split_field_id("7.2")
        (7, 2)
        >>> split_field_id(7)
        (7, None)
        >>> split_field_id(".5")
        (0, 5)
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        text = str(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        text = format_number(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_PATTERN.match(text) or not math.isfinite(float(text)):
            return None
        if "e" in text.lower():
            text = format_number(float(text))
    else:
        return None

    # Exponent forms such as "1.5e-07" carry no sub-field component
    if "e" in text.lower():
        return int(float(text)), None

    if text.count(".") > 1:
        return None

    if "." not in text:
        text = f"{text}.0"
    if text.startswith("."):
        text = f"0{text}"
    elif text.startswith(("-.", "+.")):
        text = f"{text[0]}0{text[1:]}"

    before, after = text.split(".")
    major = int(before)
    minor = int(after) if after.strip("0") else None
    return major, minor


class FieldId(BaseModel):
    """
    A composite field identifier.

    Attributes:
        value: Numeric value of the id (7.2)
        key: Canonical string form, used to look up sub-field values ("7.2")
        major: Integer part, identifies the top-level form field (7)
        minor: Sub-field component (2), None for whole fields
    """

    value: float
    key: str
    major: int
    minor: int | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "value": 7.2,
                "key": "7.2",
                "major": 7,
                "minor": 2,
            }
        }

    @property
    def is_subfield(self) -> bool:
        return self.minor is not None

    @classmethod
    def parse(cls, value: Any) -> "FieldId | None":
        """
        Build a FieldId from a loosely-typed value.

        Returns None for anything that is not a single finite number.
        """
        if split_field_id(value) is None:
            return None

        # Split the canonical form so "7.20" and 7.2 yield the same minor
        number = float(value)
        major, minor = split_field_id(number)
        return cls(value=number, key=format_number(number), major=major, minor=minor)

    def __str__(self) -> str:
        return self.key
