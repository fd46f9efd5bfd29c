"""
ruler/comparators.py — predicate functions for every built-in rule type.

Each comparator has the signature::

    comparator(actual, expected) -> (matched, error)

and never raises. `error` is a RuleError instance or None; callers decide
whether an error collapses the rule to a non-match (quiet mode) or is kept
for the report (diagnostic mode).

Type dispatch goes through kind_of(); see ruler/types.py.
"""

from __future__ import annotations

from collections.abc import Callable, Set
from typing import Any

import re2

from .types import (
    InvalidPatternError,
    Outcome,
    TypeMismatchError,
    TypeNotSupportedError,
    ValueKind,
    kind_of,
    values_equal,
)

type Comparator = Callable[[Any, Any], Outcome]


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------

def eq(actual: Any, expected: Any) -> Outcome:
    """actual == expected; values of different kinds never match."""
    return values_equal(actual, expected), None


def neq(actual: Any, expected: Any) -> Outcome:
    matched, err = eq(actual, expected)
    return not matched, err


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def _ordered(actual: Any, expected: Any, op: Callable[[Any, Any], bool]) -> Outcome:
    """
    Shared type dispatch for GT/GTE/LT/LTE.

    STRING compares lexicographically with STRING, NUMBER numerically with
    NUMBER. Any other kind of `actual` is not supported.
    """
    match kind_of(actual):
        case ValueKind.STRING | ValueKind.NUMBER as kind:
            if kind_of(expected) != kind:
                return False, TypeMismatchError()
            return op(actual, expected), None
        case _:
            return False, TypeNotSupportedError()


def gt(actual: Any, expected: Any) -> Outcome:
    return _ordered(actual, expected, lambda a, b: a > b)


def gte(actual: Any, expected: Any) -> Outcome:
    return _ordered(actual, expected, lambda a, b: a >= b)


def lt(actual: Any, expected: Any) -> Outcome:
    return _ordered(actual, expected, lambda a, b: a < b)


def lte(actual: Any, expected: Any) -> Outcome:
    return _ordered(actual, expected, lambda a, b: a <= b)


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------

def exists(actual: Any, expected: Any) -> Outcome:
    return actual is not None, None


def nexists(actual: Any, expected: Any) -> Outcome:
    return actual is None, None


# ---------------------------------------------------------------------------
# Regular expressions
# ---------------------------------------------------------------------------

def _regex_search(actual: Any, expected: Any) -> Outcome:
    if kind_of(actual) != ValueKind.STRING:
        return False, TypeNotSupportedError()
    if kind_of(expected) != ValueKind.STRING:
        return False, TypeMismatchError()
    try:
        pattern = re2.compile(expected)
    except re2.error as exc:
        return False, InvalidPatternError(f"invalid regular expression {expected!r}: {exc}")
    return pattern.search(actual) is not None, None


def regex(actual: Any, expected: Any) -> Outcome:
    """
    `expected` is searched (not anchored) in `actual` with RE2 syntax:
    `$` is end of text only and `\\d` is ASCII digits only.
    """
    return _regex_search(actual, expected)


def nregex(actual: Any, expected: Any) -> Outcome:
    # the error travels with the flipped flag; both evaluation modes treat
    # an outcome with an error as a failure
    matched, err = _regex_search(actual, expected)
    return not matched, err


# ---------------------------------------------------------------------------
# Containment
# ---------------------------------------------------------------------------

def _scan(items: list | tuple, needle: Any, kind: ValueKind) -> tuple[bool, bool]:
    """Returns (found, saw_wrong_kind) for `needle` among `items` of `kind`."""
    wrong_kind = False
    for item in items:
        if kind_of(item) != kind:
            wrong_kind = True
        elif item == needle:
            return True, wrong_kind
    return False, wrong_kind


def contains(actual: Any, expected: Any) -> Outcome:
    """
    STRING expected: substring of a STRING actual, or an equal STRING
    element of a LIST actual. NUMBER expected: an equal NUMBER element of a
    LIST actual. A wrong-kind element is reported only when nothing matched.
    """
    expected_kind = kind_of(expected)
    actual_kind   = kind_of(actual)

    match expected_kind, actual_kind:
        case ValueKind.STRING, ValueKind.STRING:
            return expected in actual, None
        case (ValueKind.STRING | ValueKind.NUMBER), ValueKind.LIST:
            found, wrong_kind = _scan(actual, expected, expected_kind)
            if found:
                return True, None
            return False, TypeMismatchError() if wrong_kind else None
        case _:
            return False, TypeNotSupportedError()


def ncontains(actual: Any, expected: Any) -> Outcome:
    """
    Independent counterpart of contains(): True when `expected` is absent.

    An unsupported combination yields (False, TypeNotSupportedError), not
    the negation of contains().
    """
    expected_kind = kind_of(expected)
    actual_kind   = kind_of(actual)

    match expected_kind, actual_kind:
        case ValueKind.STRING, ValueKind.STRING:
            return expected not in actual, None
        case (ValueKind.STRING | ValueKind.NUMBER), ValueKind.LIST:
            found, wrong_kind = _scan(actual, expected, expected_kind)
            if found:
                return False, None
            return True, TypeMismatchError() if wrong_kind else None
        case _:
            return False, TypeNotSupportedError()


# ---------------------------------------------------------------------------
# Set membership
# ---------------------------------------------------------------------------

def _member(actual: Any, expected: Any) -> Outcome:
    if isinstance(expected, Set):
        # no hash lookup: 1 and True hash alike but are different kinds
        return any(values_equal(actual, item) for item in expected), None
    match kind_of(expected):
        case ValueKind.LIST:
            return any(values_equal(actual, item) for item in expected), None
        case ValueKind.MAP:
            return False, TypeMismatchError()
        case _:
            return False, TypeNotSupportedError()


def oneof(actual: Any, expected: Any) -> Outcome:
    """`actual` is an element of the list (or set) `expected`."""
    return _member(actual, expected)


def noneof(actual: Any, expected: Any) -> Outcome:
    matched, err = _member(actual, expected)
    if err is not None:
        return False, err
    return not matched, None


# ---------------------------------------------------------------------------
# Prefix / suffix
# ---------------------------------------------------------------------------

def _affix(actual: Any, expected: Any, test: Callable[[str, str], bool]) -> Outcome:
    if kind_of(actual) != ValueKind.STRING or kind_of(expected) != ValueKind.STRING:
        return False, TypeMismatchError()
    return test(actual, expected), None


def startwith(actual: Any, expected: Any) -> Outcome:
    return _affix(actual, expected, str.startswith)


def nstartwith(actual: Any, expected: Any) -> Outcome:
    return _affix(actual, expected, lambda a, b: not a.startswith(b))


def endwith(actual: Any, expected: Any) -> Outcome:
    return _affix(actual, expected, str.endswith)


def nendwith(actual: Any, expected: Any) -> Outcome:
    return _affix(actual, expected, lambda a, b: not a.endswith(b))
