"""
Base validator interface for value-level validation rules.

All validators must inherit from BaseValidator and implement the validate() method.
"""

from abc import ABC, abstractmethod
from typing import Any


class ValidationError(Exception):
    """Raised when a validation rule fails."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_name}] {field_name}: {message}")


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    A validator checks one resolved value for one field id and raises
    ValidationError with the user-facing message when it fails.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Field id the validator checks ("7.2")
            parameters: Rule-specific parameters (e.g., min_chars/max_chars)
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: Any) -> None:
        """
        Validate a value against this rule.

        Args:
            value: The resolved field value

        Raises:
            ValidationError: If validation fails
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
