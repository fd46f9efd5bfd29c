"""
ruler/rule.py — a single predicate bound to a path in the record.

new_rule(path, rule_type, expected)                  built-in strategies
new_rule_with_strategies(path, expected, cmp, pluck) custom strategies
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .comparators import Comparator
from .decoders import Decoder
from .pluck import Pluck
from .registry import lookup
from .types import Outcome, RuleError, TypeNotSupportedError

CUSTOM_RULE_TYPE = "CUSTOM"


@dataclass(frozen=True, slots=True)
class Rule:
    """
    Path, expected value and the strategies that evaluate them.

    - path:       dotted path or JSONPath, depending on `pluck`
    - rule_type:  registry name the strategies came from ("CUSTOM" otherwise)
    - expected:   value handed to the comparator as its second argument
    - comparator: (actual, expected) -> (matched, error)
    - pluck:      (record, path, decoder) -> actual
    """

    path:       str
    rule_type:  str
    expected:   Any
    comparator: Comparator
    pluck:      Pluck

    def pluck_value(self, record: Mapping[str, Any], decoder: Decoder) -> Any:
        """Extract this rule's actual value; every failure surfaces as RuleError."""
        try:
            return self.pluck(record, self.path, decoder)
        except RuleError:
            raise
        except Exception as exc:
            raise TypeNotSupportedError(f"pluck failed for {self.path!r}: {exc}") from exc

    def compare_with_error(self, actual: Any) -> Outcome:
        """Comparator outcome, error included."""
        try:
            return self.comparator(actual, self.expected)
        except Exception as exc:
            return False, TypeNotSupportedError(f"comparator failed for {self.path!r}: {exc}")

    def compare(self, actual: Any) -> bool:
        """Quiet comparison: an error counts as no match."""
        matched, err = self.compare_with_error(actual)
        return matched and err is None


def new_rule(path: str, rule_type: str, expected: Any) -> Rule:
    """Build a rule from a registered (case-insensitive) rule-type name."""
    strategy = lookup(rule_type)
    return Rule(
        path=path,
        rule_type=strategy.name,
        expected=expected,
        comparator=strategy.comparator,
        pluck=strategy.pluck,
    )


def new_rule_with_strategies(
    path: str,
    expected: Any,
    comparator: Comparator,
    pluck: Pluck,
    rule_type: str = CUSTOM_RULE_TYPE,
) -> Rule:
    return Rule(
        path=path,
        rule_type=rule_type,
        expected=expected,
        comparator=comparator,
        pluck=pluck,
    )
