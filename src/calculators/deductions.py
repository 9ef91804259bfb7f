"""Deduction capping rules and the registry that maps deduction types to them."""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any

from src.calculators.tax_data import DEFAULT_DEDUCTION_CAPS

logger = logging.getLogger(__name__)


class DeductionRule(ABC):
    """Bounds a claimed deduction. The allowed amount never exceeds the claim."""

    @abstractmethod
    def cap(self, claimed: Decimal, gross_income: Decimal) -> Decimal:
        """Return the allowed part of ``claimed`` given total gross income."""


class PercentageCap(DeductionRule):
    """Allow the claim up to a fraction of gross income."""

    def __init__(self, rate: Decimal) -> None:
        if rate < 0:
            raise ValueError(f"Cap rate must be non-negative, got {rate}")
        self.rate = rate

    def cap(self, claimed: Decimal, gross_income: Decimal) -> Decimal:
        return min(claimed, self.rate * gross_income)

    def __repr__(self) -> str:
        return f"PercentageCap({self.rate})"


class Uncapped(DeductionRule):
    """Allow the full claim."""

    def cap(self, claimed: Decimal, gross_income: Decimal) -> Decimal:
        return claimed

    def __repr__(self) -> str:
        return "Uncapped()"


class DeductionRegistry:
    """Open mapping from deduction type label to its capping rule.

    Lookups read an immutable snapshot. ``register`` builds a new snapshot and
    swaps it in under a lock, so rules can be added while requests are served.
    """

    def __init__(self, rules: Mapping[str, DeductionRule] | None = None) -> None:
        self._lock = threading.Lock()
        self._rules: Mapping[str, DeductionRule] = MappingProxyType(dict(rules or {}))

    @classmethod
    def with_defaults(cls) -> "DeductionRegistry":
        """Registry holding the statutory Pension, NHF and NHIS caps."""
        return cls({name: PercentageCap(rate) for name, rate in DEFAULT_DEDUCTION_CAPS.items()})

    def resolve(self, deduction_type: str) -> DeductionRule | None:
        """Return the rule for a type, or None when nothing is registered."""
        return self._rules.get(deduction_type)

    def register(self, deduction_type: str, rule: DeductionRule) -> None:
        """Add or replace the rule for a deduction type."""
        with self._lock:
            updated = dict(self._rules)
            updated[deduction_type] = rule
            self._rules = MappingProxyType(updated)
        logger.info("Registered deduction rule %s -> %r", deduction_type, rule)

    def types(self) -> list[str]:
        """Registered type labels, sorted."""
        return sorted(self._rules)

    def __contains__(self, deduction_type: object) -> bool:
        return deduction_type in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def load_rules(self, config: Mapping[str, Any] | None) -> int:
        """Register rules from a parsed YAML config.

        Expected shape::

            deductions:
              - type: LifeInsurance          # no cap_rate -> uncapped
              - type: Gratuity
                cap_rate: 0.1

        Args:
            config: Parsed config mapping (None or empty registers nothing).

        Returns:
            Number of rules registered.

        Raises:
            ValueError: If an entry is missing its type or has an invalid cap_rate.
        """
        if not config:
            return 0
        entries: Iterable[Any] = config.get("deductions") or []
        count = 0
        for entry in entries:
            deduction_type, rule = _rule_from_entry(entry)
            self.register(deduction_type, rule)
            count += 1
        return count


def _rule_from_entry(entry: Any) -> tuple[str, DeductionRule]:
    if not isinstance(entry, Mapping) or not entry.get("type"):
        raise ValueError(f"Deduction rule entry needs a 'type': {entry!r}")

    deduction_type = str(entry["type"])
    raw_rate = entry.get("cap_rate")
    if raw_rate is None:
        return deduction_type, Uncapped()

    try:
        rate = Decimal(str(raw_rate))
    except InvalidOperation as e:
        raise ValueError(f"Invalid cap_rate for {deduction_type}: {raw_rate!r}") from e
    if not rate.is_finite():
        raise ValueError(f"Invalid cap_rate for {deduction_type}: {raw_rate!r}")
    return deduction_type, PercentageCap(rate)
