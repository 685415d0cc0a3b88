"""
Unit tests for the rule engine: evaluate(), CharLengthRule and the registry.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from charlength.core.models import EvaluationOutcome, Form, FormField
from charlength.core.rules import (
    CharLengthRule,
    RuleConfigBuilder,
    RuleRegistry,
    evaluate,
    normalize_options,
    register_rules,
)
from charlength.core.rules.registry import parse_version

MIN_4 = "Please enter at least 4 characters."
MAX_5 = "You may only enter 5 characters."
MIN_2 = "Please enter at least 2 characters."


@pytest.fixture
def four_to_five():
    return normalize_options({"form_id": 524, "field_id": 1, "min_chars": 4, "max_chars": 5})


@pytest.fixture
def name_config():
    return normalize_options(
        {"form_id": 746, "field_id": [1.3, 1.6], "min_chars": 2, "max_chars": 40}
    )


class TestEvaluate:
    """Tests for evaluate() on single-value fields"""

    def test_too_short(self, four_to_five):
        outcome = evaluate(four_to_five, 1, "abc", True)
        assert outcome.is_valid is False
        assert outcome.message == MIN_4

    def test_too_long(self, four_to_five):
        outcome = evaluate(four_to_five, 1, "abcdef", True)
        assert outcome.is_valid is False
        assert outcome.message == MAX_5

    def test_within_bounds(self, four_to_five):
        outcome = evaluate(four_to_five, 1, "abcd", True)
        assert outcome.is_valid is True
        assert outcome.message is None

    def test_empty_optional_field_exempt(self):
        config = normalize_options({"form_id": 1, "field_id": 1, "min_chars": 2, "max_chars": 40})
        outcome = evaluate(config, 1, "", False)
        assert outcome.is_valid is True
        assert outcome.message is None

    def test_empty_required_field_checked(self):
        config = normalize_options({"form_id": 1, "field_id": 1, "min_chars": 2, "max_chars": 40})
        outcome = evaluate(config, 1, "", True)
        assert outcome.is_valid is False
        assert outcome.message == MIN_2

    def test_other_host_field_untouched(self, four_to_five):
        outcome = evaluate(four_to_five, 2, "abc", True)
        assert outcome == EvaluationOutcome()

    @pytest.mark.parametrize("value", [None, True, False, ["abc"], object()])
    def test_unsupported_value_passes(self, four_to_five, value):
        assert evaluate(four_to_five, 1, value, True).is_valid is True

    def test_int_beyond_digit_limit_passes(self, four_to_five):
        outcome = evaluate(four_to_five, 1, 10 ** 5000, True)
        assert outcome == EvaluationOutcome()

    def test_string_placeholder_message(self):
        config = normalize_options(
            {
                "form_id": 1,
                "field_id": 1,
                "min_chars": 4,
                "max_chars": 5,
                "min_validation_message": "At least %s characters, please.",
            }
        )
        assert evaluate(config, 1, "abc", True).message == "At least 4 characters, please."

    def test_numeric_value(self, four_to_five):
        assert evaluate(four_to_five, 1, 12345, True).is_valid is True
        assert evaluate(four_to_five, 1, 123456, True).message == MAX_5

    def test_custom_messages(self):
        config = normalize_options(
            {
                "form_id": 524,
                "field_id": 1,
                "min_chars": 4,
                "max_chars": 5,
                "min_validation_message": "Oops! You need to enter at least %d characters.",
                "max_validation_message": "Oops! You can only enter %d characters.",
            }
        )
        assert evaluate(config, 1, "ab", True).message == "Oops! You need to enter at least 4 characters."
        assert evaluate(config, 1, "abcdefg", True).message == "Oops! You can only enter 5 characters."

    def test_bytes_count_mode(self):
        config = normalize_options(
            {"form_id": 1, "field_id": 1, "max_chars": 4, "count_mode": "bytes"}
        )
        assert evaluate(config, 1, "café", True).message == "You may only enter 4 characters."
        assert evaluate(config, 1, "cafe", True).is_valid is True

    def test_characters_count_mode(self):
        config = normalize_options({"form_id": 1, "field_id": 1, "max_chars": 4})
        assert evaluate(config, 1, "café", True).is_valid is True


class TestEvaluateComposite:
    """Tests for evaluate() on composite (mapping) values"""

    def test_short_and_empty_optional(self, name_config, name_field):
        outcome = evaluate(
            name_config, 1, {"1.3": "Jo", "1.6": ""}, False, field=name_field
        )
        assert outcome.is_valid is True
        assert outcome.message is None

    def test_violation_prefixed_with_label(self, name_config, name_field):
        outcome = evaluate(
            name_config, 1, {"1.3": "J", "1.6": "Smith"}, False, field=name_field
        )
        assert outcome.is_valid is False
        assert outcome.message == f"First: {MIN_2}"

    def test_all_violations_accumulate(self, name_config, name_field):
        outcome = evaluate(
            name_config, 1, {"1.3": "J", "1.6": "S"}, True, field=name_field
        )
        assert outcome.is_valid is False
        assert outcome.message == f"First: {MIN_2}\nLast: {MIN_2}"

    def test_messages_follow_configured_order(self, name_field):
        config = normalize_options(
            {"form_id": 746, "field_id": [1.6, 1.3], "min_chars": 2, "max_chars": 3}
        )
        outcome = evaluate(config, 1, {"1.3": "Jonathan", "1.6": "S"}, True, field=name_field)
        assert outcome.message == f"Last: {MIN_2}\nFirst: You may only enter 3 characters."

    def test_missing_subfield_skipped(self, name_config, name_field):
        outcome = evaluate(name_config, 1, {"1.3": "Jo"}, True, field=name_field)
        assert outcome.is_valid is True

    def test_numeric_mapping_keys(self, name_config, name_field):
        outcome = evaluate(name_config, 1, {1.3: "J", 1.6: "Smith"}, True, field=name_field)
        assert outcome.message == f"First: {MIN_2}"

    def test_no_label_means_no_prefix(self, name_config):
        outcome = evaluate(name_config, 1, {"1.3": "J", "1.6": "Smith"}, True)
        assert outcome.message == MIN_2

    def test_custom_label_lookup(self, name_config, name_field):
        outcome = evaluate(
            name_config,
            1,
            {"1.3": "J", "1.6": "Smith"},
            True,
            label_lookup=lambda field, key: f"Input {key}",
            field=name_field,
        )
        assert outcome.message == f"Input 1.3: {MIN_2}"

    def test_scalar_value_checked_for_every_entry(self, name_config, name_field):
        outcome = evaluate(name_config, 1, "J", True, field=name_field)
        assert outcome.message == f"First: {MIN_2}\nLast: {MIN_2}"

    def test_whole_field_id_has_no_prefix(self, text_field):
        config = normalize_options({"form_id": 1, "field_id": 1, "min_chars": 4})
        outcome = evaluate(config, 1, "abc", True, field=text_field)
        assert outcome.message == MIN_4


class TestRunningResult:
    """Tests for threading the host's running result"""

    def test_prior_failure_never_flipped(self, four_to_five):
        prior = EvaluationOutcome(is_valid=False, message="This field is required.")
        outcome = evaluate(four_to_five, 1, "abcd", True, result=prior)
        assert outcome == prior

    def test_prior_failure_message_appended(self, four_to_five):
        prior = EvaluationOutcome(is_valid=False, message="This field is required.")
        outcome = evaluate(four_to_five, 1, "abc", True, result=prior)
        assert outcome.is_valid is False
        assert outcome.message == f"This field is required.\n{MIN_4}"

    def test_prior_success_message_replaced(self, four_to_five):
        prior = EvaluationOutcome(is_valid=True, message="")
        outcome = evaluate(four_to_five, 1, "abc", True, result=prior)
        assert outcome.message == MIN_4

    def test_idempotent(self, name_config, name_field):
        value = {"1.3": "J", "1.6": ""}
        first = evaluate(name_config, 1, value, True, field=name_field)
        second = evaluate(name_config, 1, value, True, field=name_field)
        assert first == second

    @given(st.text(max_size=50))
    def test_property_failed_result_stays_failed(self, value):
        """Property test: a failed running result is never turned valid"""
        config = normalize_options({"form_id": 1, "field_id": 1, "min_chars": 3, "max_chars": 10})
        prior = EvaluationOutcome(is_valid=False, message="Earlier failure")
        outcome = evaluate(config, 1, value, False, result=prior)
        assert outcome.is_valid is False
        assert outcome.message.startswith("Earlier failure")


class TestCharLengthRule:
    """Tests for CharLengthRule construction and registration"""

    def test_valid_rule_registers_per_major_id(self, registry):
        rule = CharLengthRule(
            {"form_id": 9, "field_id": [7.1, 7.3, 8], "min_chars": 1, "max_chars": 10},
            registry,
        )
        assert rule.is_valid is True
        assert rule.registered_keys == [(9, 7), (9, 8)]
        assert (9, 7) in registry
        assert (9, 8) in registry
        assert len(registry) == 2

    def test_composite_rule_registers_once(self, registry):
        rule = CharLengthRule(
            {"form_id": 746, "field_id": [1.3, 1.6], "min_chars": 2, "max_chars": 40},
            registry,
        )
        assert rule.registered_keys == [(746, 1)]
        assert len(registry.callbacks(746, 1)) == 1

    @pytest.mark.parametrize(
        "options",
        [
            {"form_id": 0, "field_id": 1, "min_chars": 4},
            {"form_id": 1, "field_id": 1, "max_chars": -2},
            {"form_id": 1, "field_id": 1, "max_chars": 0},
            {"form_id": 1, "field_id": 1},
            {"form_id": 1, "field_id": 1, "min_chars": 5, "max_chars": 3},
            {"form_id": 1, "field_id": "", "min_chars": 5},
        ],
    )
    def test_invalid_rule_is_inert(self, registry, options):
        rule = CharLengthRule(options, registry)
        assert rule.is_valid is False
        assert rule.is_registered is False
        assert len(registry) == 0

    def test_outdated_host_is_ignored(self):
        registry = RuleRegistry(host_version="2.2.5")
        rule = CharLengthRule({"form_id": 1, "field_id": 1, "min_chars": 4}, registry)
        assert rule.is_valid is True
        assert rule.is_registered is False
        assert len(registry) == 0

    def test_without_registry(self, text_field):
        rule = CharLengthRule({"form_id": 1, "field_id": 1, "min_chars": 4})
        assert rule.is_registered is False
        assert rule.evaluate(None, "abc", None, text_field).message == MIN_4

    def test_evaluate_uses_field_descriptor(self, name_form, name_field):
        rule = CharLengthRule({"form_id": 746, "field_id": [1.3, 1.6], "min_chars": 2})
        outcome = rule.evaluate(EvaluationOutcome(), {"1.3": "", "1.6": "S"}, name_form, name_field)
        assert outcome.message == f"Last: {MIN_2}"

    def test_repr(self):
        rule = CharLengthRule({"form_id": 746, "field_id": [1.3, 1.6], "min_chars": 2})
        assert repr(rule) == "CharLengthRule(form=746, fields=[1.3, 1.6], min=2, max=-1, valid=True)"


class TestRuleRegistry:
    """Tests for RuleRegistry"""

    def test_callbacks_thread_result(self, registry, text_field):
        form = Form(id=5, fields=[text_field])
        rules = (
            RuleConfigBuilder()
            .add_length_rule(5, 1, min_chars=2, min_message="At least %d.")
            .add_length_rule(5, 1, max_chars=3, max_message="At most %d.")
            .build()
        )
        register_rules(rules, registry)

        assert registry.validate_field(form, text_field, "abcd").message == "At most 3."
        assert registry.validate_field(form, text_field, "a").message == "At least 2."
        assert registry.validate_field(form, text_field, "abc").is_valid is True

    def test_both_rules_fail_messages_appended(self, registry, text_field):
        form = Form(id=5, fields=[text_field])
        register_rules(
            [
                {"form_id": 5, "field_id": 1, "min_chars": 10, "min_validation_message": "Min %d."},
                {"form_id": 5, "field_id": 1, "min_chars": 8, "min_validation_message": "Also %d."},
            ],
            registry,
        )
        outcome = registry.validate_field(form, text_field, "abc")
        assert outcome.message == "Min 10.\nAlso 8."

    def test_unregistered_field_passes(self, registry, text_field):
        form = Form(id=5, fields=[text_field])
        assert registry.validate_field(form, text_field, "x").is_valid is True

    def test_validate_submission(self, registry):
        form = Form(
            id=3,
            fields=[
                FormField(id=1, is_required=True),
                FormField(id=2, is_required=True),
                FormField(id=3),
            ],
        )
        register_rules(
            RuleConfigBuilder().add_min_length(3, 1, 3).add_max_length(3, 2, 2).build(),
            registry,
        )

        outcomes = registry.validate_submission(form, {1: "ab", "2": "ok", 3: "anything"})

        assert outcomes[1].is_valid is False
        assert outcomes[2].is_valid is True
        assert outcomes[3].is_valid is True

    def test_unregister_all(self, registry):
        register_rules(
            [
                {"form_id": 1, "field_id": 1, "min_chars": 1},
                {"form_id": 2, "field_id": 1, "min_chars": 1},
            ],
            registry,
        )
        registry.unregister_all(form_id=1)
        assert (1, 1) not in registry
        assert (2, 1) in registry

        registry.unregister_all()
        assert len(registry) == 0

    @pytest.mark.parametrize(
        "host_version,expected",
        [("2.3", True), ("2.3.6", True), ("2.10", True), ("3.0", True), ("2.2.9", False), ("", False)],
    )
    def test_supports(self, host_version, expected):
        assert RuleRegistry(host_version=host_version).supports("2.3") is expected

    def test_parse_version(self):
        assert parse_version("2.3.6") == (2, 3, 6)
        assert parse_version("2.4-beta") == (2, 4)
        assert parse_version("beta") == ()
