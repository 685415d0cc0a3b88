"""
Character length rule engine.

Evaluates a submitted field value against a normalized RuleConfig and binds
valid rules to the host registry.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from charlength.core.models import (
    EvaluationOutcome,
    FieldId,
    Form,
    FormField,
    RuleConfig,
    RuleOptions,
)
from charlength.core.rules.args_validator import args_are_valid
from charlength.core.rules.normalizer import normalize_options
from charlength.core.rules.registry import MIN_HOST_VERSION, RuleRegistry
from charlength.core.validators import (
    CharLengthValidator,
    ValidationError,
    is_checkable,
    measure_length,
)

MESSAGE_SEPARATOR = "\n"

LabelLookup = Callable[[FormField | None, str], str | None]

_MISSING = object()


def default_label_lookup(field: FormField | None, input_id: str) -> str | None:
    """Look a sub-field label up in the field's inputs."""
    if field is None:
        return None
    return field.input_label(input_id)


def _resolve_value(raw_value: Any, field_id: FieldId) -> Any:
    """Value to check for a field id, or _MISSING when a composite value lacks it."""
    if not isinstance(raw_value, Mapping):
        return raw_value

    if field_id.key in raw_value:
        return raw_value[field_id.key]
    if field_id.value in raw_value:
        return raw_value[field_id.value]
    return _MISSING


def evaluate(
    config: RuleConfig,
    host_field_major_id: int,
    raw_value: Any,
    is_field_required: bool,
    result: EvaluationOutcome | None = None,
    label_lookup: LabelLookup | None = None,
    field: FormField | None = None,
) -> EvaluationOutcome:
    """
    Check a submitted value against a rule's length bounds.

    Every configured field id whose major component matches the host field
    is checked; messages of all failing entries are joined into one.

    Args:
        config: Normalized rule configuration
        host_field_major_id: Id of the host field being validated
        raw_value: Scalar, or mapping of composite id ("7.2") to scalar
        is_field_required: Whether the host field is mandatory
        result: Running outcome from earlier stages (default: valid)
        label_lookup: Resolves sub-field labels used to prefix messages
        field: Host field descriptor handed to label_lookup

    Returns:
        The running outcome, failed if any entry violated the bounds. A
        failed incoming outcome is never turned valid.
    """
    if result is None:
        result = EvaluationOutcome()
    label_lookup = label_lookup or default_label_lookup

    parameters = {
        "min_chars": config.min_chars,
        "max_chars": config.max_chars,
        "min_message": config.min_message,
        "max_message": config.max_message,
        "count_mode": config.count_mode,
    }

    messages: list[str] = []

    for field_id in config.field_ids_for(host_field_major_id):
        value = _resolve_value(raw_value, field_id)
        if value is _MISSING or not is_checkable(value):
            continue

        # Optional fields may be left empty
        if not is_field_required and measure_length(value, config.count_mode) == 0:
            continue

        validator = CharLengthValidator(field_id.key, parameters)
        try:
            validator.validate(value)
        except ValidationError as e:
            message = e.message
            if field_id.is_subfield:
                label = label_lookup(field, field_id.key)
                if label:
                    message = f"{label}: {message}"
            messages.append(message)

    if not messages:
        return result
    return result.fail(MESSAGE_SEPARATOR.join(messages), separator=MESSAGE_SEPARATOR)


class CharLengthRule:
    """
    A minimum and/or maximum character length rule for one or more fields.

    The options are normalized and validated on construction. A valid rule
    registers itself with the registry once per distinct major field id; an
    invalid one stays inert without raising.
    """

    def __init__(
        self,
        options: RuleOptions | Mapping[str, Any] | None = None,
        registry: RuleRegistry | None = None,
        label_lookup: LabelLookup | None = None,
    ):
        """
        Initialize the rule.

        Args:
            options: Rule options (see RuleOptions for keys and defaults)
            registry: Host registry to bind to; None leaves the rule unbound
            label_lookup: Sub-field label resolver (default: field inputs)
        """
        self.config = normalize_options(options)
        self.is_valid = args_are_valid(self.config)
        self.label_lookup = label_lookup or default_label_lookup
        self.registered_keys: list[tuple[int, int]] = []

        if registry is None or not registry.supports(MIN_HOST_VERSION):
            return

        if self.is_valid:
            self._register(registry)

    def _register(self, registry: RuleRegistry) -> None:
        for major_id in self.config.major_ids:
            registry.register(self.config.form_id, major_id, self.evaluate)
            self.registered_keys.append((self.config.form_id, major_id))

    @property
    def is_registered(self) -> bool:
        return bool(self.registered_keys)

    def evaluate(
        self,
        result: EvaluationOutcome | None,
        value: Any,
        form: Form | None,
        field: FormField,
    ) -> EvaluationOutcome:
        """
        Registry callback: validate the value submitted for a host field.

        Args:
            result: Running outcome for the field
            value: Submitted value
            form: The form being submitted
            field: The field being validated

        Returns:
            Updated outcome
        """
        return evaluate(
            self.config,
            field.id,
            value,
            field.is_required,
            result=result,
            label_lookup=self.label_lookup,
            field=field,
        )

    def __repr__(self) -> str:
        fields = ", ".join(str(f) for f in self.config.field_ids)
        return (
            f"CharLengthRule(form={self.config.form_id}, fields=[{fields}], "
            f"min={self.config.min_chars}, max={self.config.max_chars}, valid={self.is_valid})"
        )


def register_rules(
    rules: Iterable[RuleOptions | Mapping[str, Any]],
    registry: RuleRegistry,
    label_lookup: LabelLookup | None = None,
) -> list[CharLengthRule]:
    """
    Build a rule for each options entry and bind the valid ones.

    Returns:
        All rules, inert ones included
    """
    return [CharLengthRule(options, registry, label_lookup) for options in rules]
