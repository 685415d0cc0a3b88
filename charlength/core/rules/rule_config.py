"""
Rule configuration management.

Loads length rules from YAML files and provides a builder for
assembling them in code.
"""

from pathlib import Path
from typing import Any

import yaml

from charlength.core.models import RuleOptions
from charlength.observability.logger import get_logger

logger = get_logger(__name__)


class RuleConfigLoader:
    """
    Loads length rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      - form_id: 524
        field_id: 1
        min_chars: 4
        max_chars: 5
        min_validation_message: "Oops! You need to enter at least %d characters."
        max_validation_message: "Oops! You can only enter %d characters."

      - form_id: 746
        field_id: [1.3, 1.6]
        min_chars: 2
        max_chars: 40
    ```

    Option values are passed through as written; a rule with bad values is
    loaded and stays inert once constructed.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[RuleOptions]:
        """
        Load and parse length rules from the YAML file.

        Returns:
            One RuleOptions per rule entry

        Raises:
            ValueError: If the YAML lacks a 'rules' list or an entry is not a mapping
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict) or "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        rule_defs = config["rules"]
        if not isinstance(rule_defs, list):
            raise ValueError("'rules' section must be a list")

        rules = [self._parse_rule(rule_def, idx) for idx, rule_def in enumerate(rule_defs)]

        logger.info(
            "Loaded length rules",
            extra={"config_path": str(self.config_path), "rule_count": len(rules)},
        )
        return rules

    def _parse_rule(self, rule_def: Any, idx: int) -> RuleOptions:
        """
        Parse a single rule definition.

        Args:
            rule_def: The rule definition from YAML
            idx: Position of the rule in the file (for error messages)

        Raises:
            ValueError: If the definition is not a mapping
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Rule #{idx} must be a mapping of options")

        return RuleOptions.model_validate(rule_def)


class RuleConfigBuilder:
    """
    Programmatically build rule configurations (for testing or dynamic rules).
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[RuleOptions] = []

    def add_length_rule(
        self,
        form_id: int,
        field_id: Any,
        min_chars: int = 0,
        max_chars: int = -1,
        min_message: str | None = None,
        max_message: str | None = None,
        count_mode: str = "characters",
    ) -> "RuleConfigBuilder":
        """Add a character length rule; None messages keep the defaults."""
        options: dict[str, Any] = {
            "form_id": form_id,
            "field_id": field_id,
            "min_chars": min_chars,
            "max_chars": max_chars,
            "count_mode": count_mode,
        }
        if min_message is not None:
            options["min_validation_message"] = min_message
        if max_message is not None:
            options["max_validation_message"] = max_message

        self.rules.append(RuleOptions.model_validate(options))
        return self

    def add_min_length(self, form_id: int, field_id: Any, min_chars: int) -> "RuleConfigBuilder":
        """Add a rule with only a lower bound."""
        return self.add_length_rule(form_id, field_id, min_chars=min_chars)

    def add_max_length(self, form_id: int, field_id: Any, max_chars: int) -> "RuleConfigBuilder":
        """Add a rule with only an upper bound."""
        return self.add_length_rule(form_id, field_id, max_chars=max_chars)

    def build(self) -> list[RuleOptions]:
        """Build and return the rule configuration."""
        return list(self.rules)
