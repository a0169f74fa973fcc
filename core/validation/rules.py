"""
Validation Rules - Declarative Field Constraints

Defines the immutable rule records consumed by the validation engine.
Rules are plain data: they can be serialised, compared and unit tested
independently of any form that uses them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Final, Mapping, Optional, Union


# =============================================================================
# Errors
# =============================================================================


class RuleDefinitionError(ValueError):
    """Raised when a rule or rule set is malformed."""


# =============================================================================
# Sentinels
# =============================================================================


class Bound(Enum):
    """Bounds resolved at validation time rather than at definition time."""

    CURRENT_YEAR = "currentYear"


CURRENT_YEAR: Final = Bound.CURRENT_YEAR

NumericBound = Union[int, float, Bound]


def _parse_bound(value: Any) -> Optional[NumericBound]:
    if value is None or isinstance(value, Bound):
        return value
    if isinstance(value, str):
        try:
            return Bound(value)
        except ValueError:
            raise RuleDefinitionError(f"Unknown bound sentinel: {value!r}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RuleDefinitionError(f"Bound must be a number or sentinel: {value!r}")
    return value


def _dump_bound(value: Optional[NumericBound]) -> Any:
    if isinstance(value, Bound):
        return value.value
    return value


# =============================================================================
# Messages
# =============================================================================


@dataclass(frozen=True)
class ValidationMessages:
    """Error message per constraint kind."""

    required: str = "This field is required."
    integer: str = "Must be a whole number."
    min: str = "Value too low."
    max: str = "Value too high."
    max_items: str = "Too many items."
    min_length: str = "Too short."
    max_length: str = "Too long."
    pattern: str = "Invalid format."


DEFAULT_MESSAGES: Final = ValidationMessages()


# =============================================================================
# Rule
# =============================================================================


@dataclass(frozen=True)
class ValidationRule:
    """
    Constraints attached to a single field.

    A rule with no constraints set is a no-op. ``required_when`` maps another
    field name to the values that make this field required; any match is
    enough.

    Invalid ``pattern`` strings raise RuleDefinitionError on construction.
    """

    required: bool = False
    required_when: Mapping[str, tuple] = field(default_factory=dict)
    min: Optional[NumericBound] = None
    max: Optional[NumericBound] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    max_items: Optional[int] = None
    pattern: Optional[str] = None
    integer: bool = False

    _compiled: Optional[re.Pattern] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        frozen = {}
        for dep_field, allowed in dict(self.required_when).items():
            if isinstance(allowed, (str, bytes)) or not hasattr(allowed, "__iter__"):
                raise RuleDefinitionError(
                    f"required_when[{dep_field!r}] must be a collection of values"
                )
            frozen[dep_field] = tuple(allowed)
        object.__setattr__(self, "required_when", MappingProxyType(frozen))

        object.__setattr__(self, "min", _parse_bound(self.min))
        object.__setattr__(self, "max", _parse_bound(self.max))

        for name in ("min_length", "max_length", "max_items"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise RuleDefinitionError(f"{name} must be a non-negative integer: {value!r}")

        if self.pattern is not None:
            try:
                compiled = re.compile(self.pattern)
            except re.error as e:
                raise RuleDefinitionError(f"Invalid pattern {self.pattern!r}: {e}") from e
            object.__setattr__(self, "_compiled", compiled)

    @property
    def regex(self) -> Optional[re.Pattern]:
        """Compiled pattern, if any."""
        return self._compiled

    @property
    def is_noop(self) -> bool:
        return not (
            self.required
            or self.required_when
            or self.min is not None
            or self.max is not None
            or self.min_length is not None
            or self.max_length is not None
            or self.max_items is not None
            or self.pattern is not None
            or self.integer
        )

    def to_dict(self) -> dict:
        """Convert rule to dictionary, omitting unset constraints."""
        data: dict[str, Any] = {}
        if self.required:
            data["required"] = True
        if self.required_when:
            data["required_when"] = {k: list(v) for k, v in self.required_when.items()}
        if self.min is not None:
            data["min"] = _dump_bound(self.min)
        if self.max is not None:
            data["max"] = _dump_bound(self.max)
        for name in ("min_length", "max_length", "max_items", "pattern"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.integer:
            data["integer"] = True
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationRule":
        """Create rule from dictionary."""
        known = {
            "required", "required_when", "min", "max", "min_length",
            "max_length", "max_items", "pattern", "integer",
        }
        unknown = set(data) - known
        if unknown:
            raise RuleDefinitionError(f"Unknown rule keys: {sorted(unknown)}")
        return cls(
            required=bool(data.get("required", False)),
            required_when=data.get("required_when") or {},
            min=data.get("min"),
            max=data.get("max"),
            min_length=data.get("min_length"),
            max_length=data.get("max_length"),
            max_items=data.get("max_items"),
            pattern=data.get("pattern"),
            integer=bool(data.get("integer", False)),
        )


Rules = Mapping[str, ValidationRule]


def rules_to_dict(rules: Rules) -> dict[str, dict]:
    """Serialise a rule set."""
    return {name: rule.to_dict() for name, rule in rules.items()}


def rules_from_dict(data: Mapping[str, Mapping[str, Any]]) -> dict[str, ValidationRule]:
    """Deserialise a rule set."""
    return {name: ValidationRule.from_dict(rule) for name, rule in data.items()}


def check_dependencies(rules: Rules, known_fields: Optional[set[str]] = None) -> None:
    """
    Ensure every required_when dependency names a known field.

    Args:
        rules: Rule set to check
        known_fields: Field universe; defaults to the rule set's own keys

    Raises:
        RuleDefinitionError: If a dependency references an unknown field
    """
    universe = set(rules) if known_fields is None else set(known_fields)
    for name, rule in rules.items():
        for dep_field in rule.required_when:
            if dep_field not in universe:
                raise RuleDefinitionError(
                    f"Rule for {name!r} depends on unknown field {dep_field!r}"
                )
