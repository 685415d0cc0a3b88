"""
Character length rule engine and configuration management.
"""

from .args_validator import args_are_valid
from .normalizer import absint, normalize_options, to_int
from .registry import HOST_VERSION, MIN_HOST_VERSION, RuleRegistry
from .rule_config import RuleConfigBuilder, RuleConfigLoader
from .rule_engine import CharLengthRule, default_label_lookup, evaluate, register_rules

__all__ = [
    "normalize_options",
    "to_int",
    "absint",
    "args_are_valid",
    "evaluate",
    "CharLengthRule",
    "register_rules",
    "default_label_lookup",
    "RuleRegistry",
    "HOST_VERSION",
    "MIN_HOST_VERSION",
    "RuleConfigLoader",
    "RuleConfigBuilder",
]
