"""
Host registry binding rule callbacks to (form id, field id) pairs.

The host runs every callback registered for a field during its validation
pass, threading one EvaluationOutcome through them in registration order.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from charlength.core.models import EvaluationOutcome, Form, FormField
from charlength.observability.logger import get_logger

logger = get_logger(__name__)

HOST_VERSION = "2.5"
MIN_HOST_VERSION = "2.3"

FieldCallback = Callable[[EvaluationOutcome, Any, Form, FormField], EvaluationOutcome]


def parse_version(version: str) -> tuple[int, ...]:
    """
    Parse a dotted version string into a tuple of integers.

    Examples:
        >>> parse_version("2.3.6")
        (2, 3, 6)
        >>> parse_version("2.4-beta")
        (2, 4)
    """
    parts = []
    for piece in str(version).split("."):
        match = re.match(r"\d+", piece)
        if not match:
            break
        parts.append(int(match.group(0)))
    return tuple(parts)


class RuleRegistry:
    """
    Explicit registry of field validation callbacks.

    Keys are (form_id, field_id) where field_id is the major id of a host
    field. Several rules may register against the same key.
    """

    def __init__(self, host_version: str = HOST_VERSION):
        """
        Initialize an empty registry.

        Args:
            host_version: Version of the host form framework
        """
        self.host_version = host_version
        self._callbacks: dict[tuple[int, int], list[FieldCallback]] = {}

    def supports(self, min_version: str = MIN_HOST_VERSION) -> bool:
        """Whether the host version is at least min_version."""
        current = parse_version(self.host_version)
        required = parse_version(min_version)
        if not current:
            return False

        width = max(len(current), len(required))
        current += (0,) * (width - len(current))
        required += (0,) * (width - len(required))
        return current >= required

    def register(self, form_id: int, field_id: int, callback: FieldCallback) -> None:
        """Bind a callback to a form field."""
        self._callbacks.setdefault((form_id, field_id), []).append(callback)
        logger.debug(
            "Registered field validation callback",
            extra={"form_id": form_id, "field_id": field_id},
        )

    def callbacks(self, form_id: int, field_id: int) -> list[FieldCallback]:
        return list(self._callbacks.get((form_id, field_id), []))

    def unregister_all(self, form_id: int | None = None) -> None:
        """Drop every callback, or only those of one form."""
        if form_id is None:
            self._callbacks.clear()
            return

        for key in [k for k in self._callbacks if k[0] == form_id]:
            del self._callbacks[key]

    def validate_field(
        self,
        form: Form,
        field: FormField,
        value: Any,
        result: EvaluationOutcome | None = None,
    ) -> EvaluationOutcome:
        """
        Run every callback registered for a field.

        Args:
            form: The form being submitted
            field: The field being validated
            value: Submitted value (scalar, or mapping of sub-field id to value)
            result: Outcome of earlier validation stages (default: valid)

        Returns:
            The outcome after all callbacks ran
        """
        if result is None:
            result = EvaluationOutcome()
        for callback in self._callbacks.get((form.id, field.id), []):
            result = callback(result, value, form, field)
        return result

    def validate_submission(
        self, form: Form, values: Mapping[Any, Any]
    ) -> dict[int, EvaluationOutcome]:
        """
        Validate every field of a submitted form.

        Args:
            form: The form being submitted
            values: Submitted values keyed by field id (int or str)

        Returns:
            Outcome per field id
        """
        outcomes: dict[int, EvaluationOutcome] = {}
        for field in form.fields:
            value = values.get(field.id, values.get(str(field.id)))
            outcomes[field.id] = self.validate_field(form, field, value)

        failed = [field_id for field_id, outcome in outcomes.items() if not outcome.is_valid]
        logger.info(
            "Validated submission",
            extra={"form_id": form.id, "fields": len(outcomes), "failed_fields": failed},
        )
        return outcomes

    def __len__(self) -> int:
        return sum(len(callbacks) for callbacks in self._callbacks.values())

    def __contains__(self, key: tuple[int, int]) -> bool:
        return bool(self._callbacks.get(key))
