"""
ruler/result.py — per-rule diagnostic snapshot produced in report mode.

Result        expected / actual / matched / error for one rule
report_to_json(report)  renders {path: Result} as JSON text
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .types import RuleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Result:
    """
    Outcome of one rule in one validate_with_result() call.

    - expected: the rule's expected value
    - actual:   the plucked value (None when the pluck failed)
    - matched:  comparator verdict as returned (False when the pluck failed)
    - error:    pluck or compare error, if any; a rule with an error never
                counts as satisfied, see `ok`
    """

    expected: Any
    actual:   Any
    matched:  bool
    error:    RuleError | None = None

    @property
    def ok(self) -> bool:
        return self.matched and self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected": self.expected,
            "actual":   self.actual,
            "matched":  self.matched,
            "error":    self.error.to_dict() if self.error is not None else None,
        }

    def to_json(self) -> str:
        """JSON text of to_dict(); "" when a value cannot be serialized."""
        try:
            return json.dumps(self.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.warning("Result could not be serialized: %s", exc)
            return ""


def report_to_dict(report: Mapping[str, Result]) -> dict[str, dict[str, Any]]:
    return {path: result.to_dict() for path, result in report.items()}


def report_to_json(report: Mapping[str, Result], indent: int | None = None) -> str:
    """JSON text of a whole report; "" when any value cannot be serialized."""
    try:
        return json.dumps(report_to_dict(report), ensure_ascii=False, indent=indent)
    except (TypeError, ValueError) as exc:
        logger.warning("Report could not be serialized: %s", exc)
        return ""
