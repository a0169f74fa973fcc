"""
PropGo - Form Validation

Declarative field rules and the engine that evaluates them.
"""

from core.validation.rules import (
    Bound,
    CURRENT_YEAR,
    DEFAULT_MESSAGES,
    RuleDefinitionError,
    Rules,
    ValidationMessages,
    ValidationRule,
    check_dependencies,
    rules_from_dict,
    rules_to_dict,
)
from core.validation.engine import (
    check_field,
    is_empty,
    is_required,
    validate_values,
)

__all__ = [
    # Rules
    "Bound",
    "CURRENT_YEAR",
    "DEFAULT_MESSAGES",
    "RuleDefinitionError",
    "Rules",
    "ValidationMessages",
    "ValidationRule",
    "check_dependencies",
    "rules_from_dict",
    "rules_to_dict",
    # Engine
    "check_field",
    "is_empty",
    "is_required",
    "validate_values",
]
