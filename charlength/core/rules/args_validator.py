"""
Configuration validator.

A pure predicate over a normalized RuleConfig: a rule is only registered
when every check here passes.
"""

from charlength.core.models import UNLIMITED, RuleConfig


def args_are_valid(config: RuleConfig) -> bool:
    """
    Check if a normalized configuration is safe and meaningful to register.

    Args:
        config: Normalized rule configuration

    Returns:
        True only if every invariant holds
    """
    # Major fails
    if config.form_id <= 0 or config.max_chars < UNLIMITED:
        return False

    # No field id with a usable major component
    if not config.field_ids or not config.major_ids:
        return False

    # Maximum of zero is pointless, -1 means unlimited
    if config.max_chars == 0:
        return False

    # No minimum and unlimited maximum never fails
    if config.min_chars == 0 and config.max_chars == UNLIMITED:
        return False

    # Contradictory bounds
    if config.max_chars != UNLIMITED and config.min_chars > config.max_chars:
        return False

    return True
