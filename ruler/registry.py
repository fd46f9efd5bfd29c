"""
ruler/registry.py — rule-type registry: name -> (comparator, pluck).

Names are matched case-insensitively. An unknown name falls back to EQ with
the dotted-path pluck; this is the documented default, not an error.

Public API:
  RuleStrategy                                   comparator + pluck pair
  register_rule_type(name, comparator, pluck)    add a custom rule type
  lookup(rule_type)                              -> RuleStrategy
  registered_types()                             -> list[str]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import comparators as cmp
from .comparators import Comparator
from .pluck import Pluck, jsonpath_pluck, path_pluck

logger = logging.getLogger(__name__)

DEFAULT_RULE_TYPE = "EQ"


@dataclass(frozen=True, slots=True)
class RuleStrategy:
    """Comparator and pluck bound to one rule-type name."""

    name:       str
    comparator: Comparator
    pluck:      Pluck


_REGISTRY: dict[str, RuleStrategy] = {}


def _normalize(name: str) -> str:
    return name.strip().upper()


def register_rule_type(
    name: str,
    comparator: Comparator,
    pluck: Pluck = path_pluck,
    *,
    replace: bool = False,
) -> RuleStrategy:
    """
    Register a rule type.

    Raises:
        ValueError: empty name, or the name is taken and replace is False.
    """
    key = _normalize(name)
    if not key:
        raise ValueError("rule type name must not be empty")
    if key in _REGISTRY and not replace:
        raise ValueError(f"rule type {key!r} is already registered")
    strategy = RuleStrategy(name=key, comparator=comparator, pluck=pluck)
    _REGISTRY[key] = strategy
    return strategy


def lookup(rule_type: str) -> RuleStrategy:
    """Strategy pair for `rule_type`; unknown names resolve to EQ."""
    key = _normalize(rule_type)
    strategy = _REGISTRY.get(key)
    if strategy is None:
        logger.debug("Unknown rule type %r, falling back to %s", rule_type, DEFAULT_RULE_TYPE)
        return _REGISTRY[DEFAULT_RULE_TYPE]
    return strategy


def is_registered(rule_type: str) -> bool:
    return _normalize(rule_type) in _REGISTRY


def registered_types() -> list[str]:
    return list(_REGISTRY)


# ---------------------------------------------------------------------------
# Built-in rule types
# ---------------------------------------------------------------------------

_BUILTINS: list[tuple[str, Comparator, Pluck]] = [
    ("EQ",         cmp.eq,         path_pluck),
    ("JEQ",        cmp.eq,         jsonpath_pluck),
    ("NEQ",        cmp.neq,        path_pluck),
    ("JNEQ",       cmp.neq,        jsonpath_pluck),
    ("GT",         cmp.gt,         path_pluck),
    ("GTE",        cmp.gte,        path_pluck),
    ("LT",         cmp.lt,         path_pluck),
    ("LTE",        cmp.lte,        path_pluck),
    ("EXISTS",     cmp.exists,     path_pluck),
    ("NEXISTS",    cmp.nexists,    path_pluck),
    ("REGEX",      cmp.regex,      path_pluck),
    ("NREGEX",     cmp.nregex,     path_pluck),
    ("CONTAINS",   cmp.contains,   path_pluck),
    ("NCONTAINS",  cmp.ncontains,  path_pluck),
    ("ONEOF",      cmp.oneof,      path_pluck),
    ("NONEOF",     cmp.noneof,     path_pluck),
    ("STARTWITH",  cmp.startwith,  path_pluck),
    ("NSTARTWITH", cmp.nstartwith, path_pluck),
    ("ENDWITH",    cmp.endwith,    path_pluck),
    ("NENDWITH",   cmp.nendwith,   path_pluck),
]

for _name, _comparator, _pluck in _BUILTINS:
    register_rule_type(_name, _comparator, _pluck)
