"""
ruler/engine.py — AND / OR rulers over an ordered list of rules.

Two evaluation modes:
  validate(record)              quiet; short-circuits, returns bool
  validate_with_result(record)  diagnostic; evaluates every rule and returns
                                ({path: Result}, verdict)

The modes are kept as separate code paths: the laziness of validate() is
part of its contract (rules after the deciding one are never plucked).

Mutation (add_rule) concurrent with evaluation of the same ruler is not
supported; build the ruler before sharing it.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any, Self

from .decoders import Decoder, json_decoder
from .result import Result
from .rule import Rule
from .types import RuleError, RulerTypeMismatchError

logger = logging.getLogger(__name__)

type Report = dict[str, Result]


class Combinator(StrEnum):
    AND = "AND"
    OR  = "OR"


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class Ruler(ABC):
    """Ordered rules plus the decoder used for embedded sub-documents."""

    combinator: Combinator

    def __init__(self, rules: Iterable[Rule] = (), decoder: Decoder = json_decoder) -> None:
        self._rules: list[Rule] = list(rules)
        self._decoder = decoder

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def decoder(self) -> Decoder:
        return self._decoder

    def add_rule(self, rule: Rule) -> Self:
        """Append a rule; returns the ruler for chaining."""
        self._rules.append(rule)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rules={len(self._rules)})"

    # ------------------------------------------------------------------
    # Evaluation helpers
    # ------------------------------------------------------------------

    def _satisfies(self, rule: Rule, record: Mapping[str, Any]) -> bool:
        """Quiet evaluation of one rule: any error is a non-match."""
        try:
            actual = rule.pluck_value(record, self._decoder)
        except RuleError as exc:
            logger.debug("Pluck failed for %r: %s", rule.path, exc)
            return False
        return rule.compare(actual)

    def _evaluate(self, rule: Rule, record: Mapping[str, Any]) -> Result:
        """
        Diagnostic evaluation of one rule; errors go into the Result.
        The Result holds its own copy of `expected`, detached from the rule.
        """
        try:
            actual = rule.pluck_value(record, self._decoder)
        except RuleError as exc:
            logger.debug("Pluck failed for %r: %s", rule.path, exc)
            return Result(expected=copy.deepcopy(rule.expected), actual=None, matched=False, error=exc)

        matched, err = rule.compare_with_error(actual)
        if err is not None:
            logger.debug("Compare error for %r: %s", rule.path, err)
        return Result(
            expected=copy.deepcopy(rule.expected), actual=actual, matched=matched, error=err
        )

    def _report(self, record: Mapping[str, Any]) -> tuple[Report, list[Result]]:
        """Evaluate every rule. The verdict uses `results`: paths may repeat."""
        report: Report = {}
        results: list[Result] = []
        for rule in list(self._rules):
            result = self._evaluate(rule, record)
            report[rule.path] = result
            results.append(result)
        return report, results

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @abstractmethod
    def validate(self, record: Mapping[str, Any]) -> bool:
        ...

    @abstractmethod
    def validate_with_result(self, record: Mapping[str, Any]) -> tuple[Report, bool]:
        ...


# ---------------------------------------------------------------------------
# AND / OR
# ---------------------------------------------------------------------------

class AndRuler(Ruler):
    """Satisfied when every rule is satisfied. An empty AndRuler is satisfied."""

    combinator = Combinator.AND

    def validate(self, record: Mapping[str, Any]) -> bool:
        for index, rule in enumerate(list(self._rules)):
            if not self._satisfies(rule, record):
                logger.debug("AND short-circuit at rule %d (%r)", index, rule.path)
                return False
        return True

    def validate_with_result(self, record: Mapping[str, Any]) -> tuple[Report, bool]:
        report, results = self._report(record)
        return report, all(result.ok for result in results)


class OrRuler(Ruler):
    """Satisfied when any rule is satisfied. An empty OrRuler is not."""

    combinator = Combinator.OR

    def validate(self, record: Mapping[str, Any]) -> bool:
        for index, rule in enumerate(list(self._rules)):
            if self._satisfies(rule, record):
                logger.debug("OR short-circuit at rule %d (%r)", index, rule.path)
                return True
        return False

    def validate_with_result(self, record: Mapping[str, Any]) -> tuple[Report, bool]:
        report, results = self._report(record)
        return report, any(result.ok for result in results)


_RULERS: dict[Combinator, type[Ruler]] = {
    Combinator.AND: AndRuler,
    Combinator.OR:  OrRuler,
}


def new_ruler(
    rules: Iterable[Rule],
    combinator: str,
    decoder: Decoder = json_decoder,
) -> Ruler:
    """
    Build an AndRuler or OrRuler.

    Raises:
        RulerTypeMismatchError: `combinator` is neither "AND" nor "OR"
            (compared case-insensitively).
    """
    token = str(combinator).strip().upper()
    try:
        cls = _RULERS[Combinator(token)]
    except ValueError:
        raise RulerTypeMismatchError(
            f"unknown ruler type {combinator!r}; expected AND or OR"
        ) from None
    return cls(rules, decoder)
