"""
ruler/types.py — value kinds and the error taxonomy.

ValueKind    — closed classification of dynamic record values
kind_of()    — maps a Python value onto a ValueKind
ErrorKind    — stable identifiers for every failure the engine can report
RuleError    — base exception; every subclass carries its ErrorKind
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any


# ---------------------------------------------------------------------------
# Value kinds
# ---------------------------------------------------------------------------

class ValueKind(StrEnum):
    """Kinds of values a decoded record can hold."""

    STRING = "string"
    NUMBER = "number"
    BOOL   = "bool"
    NULL   = "null"
    LIST   = "list"
    MAP    = "map"
    OTHER  = "other"


def kind_of(value: Any) -> ValueKind:
    """
    Classify a value.

    bool is checked before int because bool subclasses int in Python;
    True is never a NUMBER. int and float are both NUMBER.
    """
    match value:
        case None:
            return ValueKind.NULL
        case bool():
            return ValueKind.BOOL
        case int() | float():
            return ValueKind.NUMBER
        case str():
            return ValueKind.STRING
        case list() | tuple():
            return ValueKind.LIST
        case Mapping():
            return ValueKind.MAP
        case _:
            return ValueKind.OTHER


def values_equal(a: Any, b: Any) -> bool:
    """
    Kind-aware equality.

    Values of different kinds never match (1 != True, "1" != 1).
    Lists and maps compare element-wise with the same rule.
    """
    kind = kind_of(a)
    if kind != kind_of(b):
        return False
    match kind:
        case ValueKind.LIST:
            return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
        case ValueKind.MAP:
            if a.keys() != b.keys():
                return False
            return all(values_equal(a[k], b[k]) for k in a)
        case _:
            return a == b


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorKind(StrEnum):
    """Stable error identifiers attached to every RuleError."""

    TYPE_MISMATCH         = "E_TYPE_MISMATCH"
    TYPE_NOT_SUPPORTED    = "E_TYPE_NOT_SUPPORTED"
    DECODE_FAILURE        = "E_DECODE_FAILURE"
    PATH_SYNTAX           = "E_PATH_SYNTAX"
    SERIALIZATION_FAILURE = "E_SERIALIZATION_FAILURE"
    INVALID_PATTERN       = "E_INVALID_PATTERN"
    RULER_TYPE_MISMATCH   = "E_RULER_TYPE_MISMATCH"
    RULESET_INVALID       = "E_RULESET_INVALID"


class RuleError(Exception):
    """Base class for engine errors. `kind` identifies the failure class."""

    kind: ErrorKind = ErrorKind.TYPE_NOT_SUPPORTED
    default_message = "rule error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict[str, str]:
        return {"kind": str(self.kind), "message": self.message}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))


class TypeMismatchError(RuleError):
    kind = ErrorKind.TYPE_MISMATCH
    default_message = "type mismatch error"


class TypeNotSupportedError(RuleError):
    kind = ErrorKind.TYPE_NOT_SUPPORTED
    default_message = "type not support error"


class DecodeError(RuleError):
    kind = ErrorKind.DECODE_FAILURE
    default_message = "failed to decode embedded document"


class PathSyntaxError(RuleError):
    kind = ErrorKind.PATH_SYNTAX
    default_message = "invalid JSONPath expression"


class SerializationError(RuleError):
    kind = ErrorKind.SERIALIZATION_FAILURE
    default_message = "record is not JSON serializable"


class InvalidPatternError(RuleError):
    kind = ErrorKind.INVALID_PATTERN
    default_message = "invalid regular expression"


class RulerTypeMismatchError(RuleError):
    kind = ErrorKind.RULER_TYPE_MISMATCH
    default_message = "ruler type mismatch"


class RuleSetError(RuleError):
    """Rule-set document failed to load or validate. `errors` lists every problem."""

    kind = ErrorKind.RULESET_INVALID
    default_message = "invalid rule set"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors or [])


# Outcome of a single comparison: matched flag plus an optional error value.
type Outcome = tuple[bool, RuleError | None]
