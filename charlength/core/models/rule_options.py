"""
RuleOptions model representing the loosely-typed options for a length rule.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

DEFAULT_MIN_MESSAGE = "Please enter at least %d characters."
DEFAULT_MAX_MESSAGE = "You may only enter %d characters."

CountMode = Literal["characters", "bytes"]


class RuleOptions(BaseModel):
    """
    Caller-supplied options for a character length rule, before normalization.

    Values are accepted as given (numbers, numeric strings, lists) and only
    coerced by the normalizer, so malformed input makes the rule inert
    instead of failing at construction.

    Attributes:
        form_id: Owning form; must end up > 0
        field_id: One field id or a list of them (7, 7.2, [1.3, 1.6])
        min_chars: Lower bound, 0 for none
        max_chars: Upper bound, -1 for unlimited
        min_validation_message: Template with one %d for the lower bound
        max_validation_message: Template with one %d for the upper bound
        count_mode: "characters" (code points) or "bytes" (UTF-8 length)
    """

    form_id: Any = Field(0, alias="formId")
    field_id: Any = Field("", alias="fieldId")
    min_chars: Any = Field(0, alias="minChars")
    max_chars: Any = Field(-1, alias="maxChars")
    min_validation_message: Any = Field(DEFAULT_MIN_MESSAGE, alias="minMessage")
    max_validation_message: Any = Field(DEFAULT_MAX_MESSAGE, alias="maxMessage")
    count_mode: Any = Field("characters", alias="countMode")

    class Config:
        populate_by_name = True
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "form_id": 746,
                "field_id": [1.3, 1.6],
                "min_chars": 2,
                "max_chars": 40,
            }
        }
