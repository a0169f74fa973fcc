"""
Validation Engine - Evaluate Rule Sets Against Field Values

Pure, single-pass evaluation. Failures are returned as data: a mapping of
field name to a single error message. Fields without errors are absent.

Check order per field (first failure wins):
    required -> integer -> min -> max / max_items -> min_length -> max_length -> pattern
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any, Mapping, Optional

from core.validation.rules import (
    DEFAULT_MESSAGES,
    Bound,
    NumericBound,
    Rules,
    ValidationMessages,
    ValidationRule,
)


# =============================================================================
# Value Helpers
# =============================================================================


def is_empty(value: Any) -> bool:
    """None, a blank string, or an empty sequence."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _resolve(bound: NumericBound, today: date) -> float:
    if bound is Bound.CURRENT_YEAR:
        return today.year
    return bound


def is_required(rule: ValidationRule, values: Mapping[str, Any]) -> bool:
    """Resolve ``required`` plus any matching ``required_when`` dependency."""
    if rule.required:
        return True
    for dep_field, allowed in rule.required_when.items():
        if values.get(dep_field) in allowed:
            return True
    return False


# =============================================================================
# Engine
# =============================================================================


def check_field(
    value: Any,
    rule: ValidationRule,
    values: Mapping[str, Any],
    messages: ValidationMessages,
    today: date,
) -> Optional[str]:
    """
    Check one field value against its rule.

    Returns:
        The first violated constraint's message, or None
    """
    empty = is_empty(value)
    if empty:
        if is_required(rule, values):
            return messages.required
        return None

    if rule.integer and _is_number(value) and not float(value).is_integer():
        return messages.integer

    if rule.min is not None and _is_number(value):
        if value < _resolve(rule.min, today):
            return messages.min

    if rule.max is not None and _is_number(value):
        if value > _resolve(rule.max, today):
            return messages.max

    if rule.max_items is not None and _is_sequence(value):
        if len(value) > rule.max_items:
            return messages.max_items

    if isinstance(value, str):
        if rule.min_length is not None and len(value) < rule.min_length:
            return messages.min_length
        if rule.max_length is not None and len(value) > rule.max_length:
            return messages.max_length
        if rule.regex is not None and rule.regex.fullmatch(value) is None:
            return messages.pattern

    return None


def validate_values(
    values: Mapping[str, Any],
    rules: Rules,
    messages: Optional[ValidationMessages] = None,
    today: Optional[date] = None,
) -> dict[str, str]:
    """
    Validate a bag of field values against a rule set.

    Args:
        values: Field values; missing keys count as empty
        rules: Field name -> rule; only these fields are checked
        messages: Message strings (defaults to English)
        today: Date used to resolve CURRENT_YEAR bounds

    Returns:
        Field name -> error message for every failing field
    """
    messages = messages or DEFAULT_MESSAGES
    today = today or date.today()

    errors: dict[str, str] = {}
    for name, rule in rules.items():
        error = check_field(values.get(name), rule, values, messages, today)
        if error is not None:
            errors[name] = error
    return errors
