"""
RuleConfig model representing a normalized character length rule.
"""

from pydantic import BaseModel, Field

from .field_id import FieldId
from .rule_options import DEFAULT_MAX_MESSAGE, DEFAULT_MIN_MESSAGE, CountMode

UNLIMITED = -1


class RuleConfig(BaseModel):
    """
    Normalized configuration for one length rule (immutable).

    A RuleConfig can hold values that break the rule invariants; use
    args_are_valid() before registering it.

    Attributes:
        form_id: Owning form id
        field_ids: Distinct field ids in first-seen order
        min_chars: Lower bound (0 = none)
        max_chars: Upper bound (-1 = unlimited)
        min_message: Template substituted with min_chars
        max_message: Template substituted with max_chars
        count_mode: How the length of a value is measured
    """

    form_id: int = 0
    field_ids: tuple[FieldId, ...] = ()
    min_chars: int = 0
    max_chars: int = UNLIMITED
    min_message: str = DEFAULT_MIN_MESSAGE
    max_message: str = DEFAULT_MAX_MESSAGE
    count_mode: CountMode = "characters"

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "form_id": 322,
                "field_ids": [{"value": 7.1, "key": "7.1", "major": 7, "minor": 1}],
                "min_chars": 5,
                "max_chars": 30,
                "min_message": "Oops! Address Line 1 must be at least %d characters.",
                "max_message": "Oops! Address Line 1 must be %d or fewer characters.",
                "count_mode": "characters",
            }
        }

    @property
    def has_max(self) -> bool:
        return self.max_chars != UNLIMITED

    @property
    def major_ids(self) -> list[int]:
        """Distinct non-zero major ids, in the order their field ids appear."""
        majors: list[int] = []
        for field_id in self.field_ids:
            if field_id.major and field_id.major not in majors:
                majors.append(field_id.major)
        return majors

    def field_ids_for(self, major_id: int) -> list[FieldId]:
        """Field ids whose major component matches a host field id."""
        return [f for f in self.field_ids if f.major and f.major == major_id]
