"""
Configuration normalizer.

Turns loosely-typed rule options into a RuleConfig. Nothing here raises for
malformed values: bad input coerces to values that args_are_valid() rejects.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from charlength.core.models import FieldId, RuleConfig, RuleOptions

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

COUNT_MODES = ("characters", "bytes")


def to_int(value: Any) -> int:
    """
    Integer value of anything, 0 when it has none.

    Floats are truncated and strings use their leading numeric part
    ("12abc" -> 12, "3.9" -> 3, "abc" -> 0).

    Examples:
        >>> to_int("-1")
        -1
        >>> to_int(5.9)
        5
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if match and math.isfinite(float(match.group(0))):
            return int(float(match.group(0)))
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def absint(value: Any) -> int:
    """Non-negative integer value of anything; negatives clamp to 0."""
    return max(0, to_int(value))


def to_float(value: Any) -> float:
    """Float value of a field id candidate, 0.0 when it is not numeric."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else 0.0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    return 0.0


def normalize_field_ids(raw: Any) -> tuple[FieldId, ...]:
    """
    Normalize one field id or a collection of them.

    Non-numeric, zero and negative entries are dropped; duplicates are
    removed keeping the first occurrence.
    """
    if raw is None:
        candidates: list[Any] = []
    elif isinstance(raw, list | tuple | set | frozenset):
        candidates = list(raw)
    else:
        candidates = [raw]

    field_ids: list[FieldId] = []
    seen: set[str] = set()

    for candidate in candidates:
        number = to_float(candidate)
        if number <= 0:
            continue

        field_id = FieldId.parse(number)
        if field_id is None or field_id.key in seen:
            continue

        seen.add(field_id.key)
        field_ids.append(field_id)

    return tuple(field_ids)


def normalize_options(options: RuleOptions | Mapping[str, Any] | None = None) -> RuleConfig:
    """
    Merge options with the defaults and coerce them into a RuleConfig.

    Args:
        options: RuleOptions, a plain mapping (snake_case or camelCase keys)
                 or None for all defaults

    Returns:
        The normalized RuleConfig (not yet validated)
    """
    if options is None:
        options = RuleOptions()
    elif not isinstance(options, RuleOptions):
        options = RuleOptions.model_validate(dict(options))

    count_mode = options.count_mode if options.count_mode in COUNT_MODES else "characters"

    return RuleConfig(
        form_id=absint(options.form_id),
        field_ids=normalize_field_ids(options.field_id),
        min_chars=absint(options.min_chars),
        max_chars=to_int(options.max_chars),
        min_message=str(options.min_validation_message),
        max_message=str(options.max_validation_message),
        count_mode=count_mode,
    )
