"""Rule engine base: protocol, registry, and decorators."""

from __future__ import annotations

import datetime
from typing import Any, Protocol

from yaga.models import AwardEvent, Comparison, CriteriaForm, Period


class Rule(Protocol):
    """Protocol for badge rules."""

    def name(self) -> str: ...

    def description(self) -> str: ...

    def interacts(self) -> bool: ...

    def form(self) -> CriteriaForm: ...

    def award(self, event: AwardEvent, criteria: dict[str, Any]) -> bool: ...

    def hooks(self) -> list[str]: ...


_RULE_METHODS = ("name", "description", "interacts", "form", "award", "hooks")

# Global rule registry, identity -> class
_RULE_REGISTRY: dict[str, type] = {}


def rule_identity(cls: type) -> str:
    return cls.__name__


def register_rule(cls: type) -> type:
    """Decorator to register a rule class under its class name."""
    identity = rule_identity(cls)
    existing = _RULE_REGISTRY.get(identity)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Rule {identity!r} is already registered by {existing.__module__}"
        )
    _RULE_REGISTRY[identity] = cls
    return cls


def get_registered_rules() -> dict[str, type]:
    """Return all registered rule classes keyed by identity."""
    return dict(_RULE_REGISTRY)


def implements_rule(cls: object) -> bool:
    """Whether ``cls`` is a class providing every Rule method."""
    if not isinstance(cls, type):
        return False
    return all(callable(getattr(cls, attr, None)) for attr in _RULE_METHODS)


# --- Criteria helpers shared by the built-in rules ---


def compare(value: int, comparison: str, target: int) -> bool:
    """Apply a gt/lt/gte comparison from saved criteria."""
    op = Comparison(comparison)
    if op == Comparison.GT:
        return value > target
    if op == Comparison.LT:
        return value < target
    return value >= target


_PERIOD_DAYS = {
    Period.DAY: 1,
    Period.WEEK: 7,
    Period.MONTH: 30,
    Period.YEAR: 365,
}


def duration(amount: int, period: str) -> datetime.timedelta:
    """Convert a Duration/Period criteria pair into a timedelta."""
    return datetime.timedelta(days=amount * _PERIOD_DAYS[Period(period)])


COMPARISON_OPTIONS = {
    Comparison.GT.value: "More than:",
    Comparison.LT.value: "Less than:",
    Comparison.GTE.value: "More than or equal to:",
}

PERIOD_OPTIONS = {
    Period.DAY.value: "Days",
    Period.WEEK.value: "Weeks",
    Period.MONTH.value: "Months",
    Period.YEAR.value: "Years",
}
