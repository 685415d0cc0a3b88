"""
CLI for checking and exercising character length rule files.

Usage:
    python -m charlength.cli.rule_cli check --rule-file <path> [--strict]
    python -m charlength.cli.rule_cli validate --rule-file <path> --form-id <id> --field-id <id>
        (--value <text> | --input <key>=<text> ...) [--required] [--label <key>=<label> ...]
"""

import argparse
import json
import sys

from dotenv import load_dotenv

from charlength.core.models import FieldInput, Form, FormField
from charlength.core.rules import RuleConfigLoader, RuleRegistry, register_rules
from charlength.observability.logger import get_logger, log_operation

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def parse_pairs(pairs: list[str] | None, option: str) -> dict[str, str]:
    """
    Parse KEY=VALUE arguments into a dict.

    Raises:
        ValueError: If an argument has no '='
    """
    parsed: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"{option} expects KEY=VALUE, got '{pair}'")
        parsed[key.strip()] = value
    return parsed


def load_registry(rule_file: str) -> tuple[RuleRegistry, list]:
    """Load a rule file and bind its valid rules to a fresh registry."""
    with log_operation("Loading rules", logger=logger, rule_file=rule_file):
        rule_options = RuleConfigLoader(rule_file).load_rules()
        registry = RuleRegistry()
        rules = register_rules(rule_options, registry)

    for idx, rule in enumerate(rules):
        if not rule.is_registered:
            logger.warning("Rule is inert and was not registered", extra={"rule_index": idx})

    return registry, rules


def check_command(args) -> int:
    """
    List every rule in a file with its normalized settings.

    Args:
        args: Command line arguments

    Returns:
        Exit code
    """
    _, rules = load_registry(args.rule_file)

    print(f"\n{'=' * 80}")
    print(f"LENGTH RULES IN: {args.rule_file}")
    print(f"{'=' * 80}\n")

    for idx, rule in enumerate(rules):
        config = rule.config
        status = "active" if rule.is_registered else "inert"
        fields = ", ".join(str(f) for f in config.field_ids) or "-"
        max_chars = "unlimited" if not config.has_max else config.max_chars
        print(
            f"#{idx:<3} [{status:>6}] form={config.form_id} fields=[{fields}] "
            f"min={config.min_chars} max={max_chars} count={config.count_mode}"
        )

    inert = sum(1 for rule in rules if not rule.is_registered)
    print(f"\n{len(rules) - inert} active, {inert} inert")

    if args.strict and inert:
        return EXIT_INVALID
    return EXIT_OK


def validate_command(args) -> int:
    """
    Validate one submitted value against the rules of a file.

    Args:
        args: Command line arguments

    Returns:
        Exit code (1 when the value fails)
    """
    inputs = parse_pairs(args.input, "--input")
    labels = parse_pairs(args.label, "--label")

    registry, _ = load_registry(args.rule_file)

    field_inputs = [FieldInput(id=key, label=label) for key, label in labels.items()]
    field = FormField(id=args.field_id, is_required=args.required, inputs=field_inputs or None)
    form = Form(id=args.form_id, fields=[field])

    value = inputs if inputs else args.value
    outcome = registry.validate_field(form, field, value)

    print(json.dumps(outcome.model_dump(), indent=2))
    return EXIT_OK if outcome.is_valid else EXIT_INVALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Character length rules for form fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show which rules in a file are active
  python -m charlength.cli.rule_cli check --rule-file config/rules.yaml

  # Check a single-value field
  python -m charlength.cli.rule_cli validate --rule-file config/rules.yaml \\
      --form-id 524 --field-id 1 --value abc --required

  # Check a composite (Name) field
  python -m charlength.cli.rule_cli validate --rule-file config/rules.yaml \\
      --form-id 746 --field-id 1 --input 1.3=Jo --input 1.6=X --label 1.6=Last
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="List rules and whether they are active")
    check_parser.add_argument("--rule-file", required=True, help="Path to rules YAML file")
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any rule is inert"
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a submitted value")
    validate_parser.add_argument("--rule-file", required=True, help="Path to rules YAML file")
    validate_parser.add_argument("--form-id", type=int, required=True, help="Form ID")
    validate_parser.add_argument("--field-id", type=int, required=True, help="Field ID (major)")
    value_group = validate_parser.add_mutually_exclusive_group(required=True)
    value_group.add_argument("--value", help="Submitted value of a single-value field")
    value_group.add_argument(
        "--input",
        action="append",
        metavar="KEY=VALUE",
        help="Sub-field value of a composite field (repeatable)"
    )
    validate_parser.add_argument(
        "--label",
        action="append",
        metavar="KEY=LABEL",
        help="Sub-field label used to prefix messages (repeatable)"
    )
    validate_parser.add_argument(
        "--required",
        action="store_true",
        help="Treat the field as mandatory"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_USAGE)

    try:
        if args.command == "check":
            code = check_command(args)
        elif args.command == "validate":
            code = validate_command(args)
        else:
            parser.print_help()
            code = EXIT_USAGE

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)

    sys.exit(code)


if __name__ == "__main__":
    main()
