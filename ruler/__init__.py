"""
ruler — evaluate a decoded record against AND / OR groups of predicate rules.

Public API:
  new_rule(path, rule_type, expected)                   -> Rule
  new_rule_with_strategies(path, expected, cmp, pluck)  -> Rule
  new_ruler(rules, "AND" | "OR", decoder)               -> AndRuler | OrRuler
  ruler.validate(record)                                -> bool
  ruler.validate_with_result(record)                    -> ({path: Result}, bool)
  register_rule_type(name, comparator, pluck)           custom rule types
  json_decoder, xml_decoder, yaml_decoder               standard decoders
  load_ruleset(path), ruleset_from_dict(data)           rule-set documents

Typical use:
    from ruler import new_rule, new_ruler, json_decoder

    ruler = new_ruler(
        [
            new_rule("order.status", "EQ", "paid"),
            new_rule("order.phone", "REGEX", r"^1[34578]\\d{9}$"),
        ],
        "AND",
        json_decoder,
    )
    report, ok = ruler.validate_with_result(record)
    if not ok:
        for path, result in report.items():
            print(path, result.to_json())
"""

from .comparators import Comparator
from .decoders import Decoder, decoder_names, get_decoder, json_decoder, xml_decoder, yaml_decoder
from .engine import AndRuler, Combinator, OrRuler, Report, Ruler, new_ruler
from .loader import (
    RULESET_SCHEMA,
    load_record,
    load_ruleset,
    record_format,
    ruleset_from_dict,
    validate_ruleset,
)
from .pluck import Pluck, jsonpath_pluck, path_pluck
from .registry import RuleStrategy, lookup, register_rule_type, registered_types
from .result import Result, report_to_dict, report_to_json
from .rule import Rule, new_rule, new_rule_with_strategies
from .types import (
    DecodeError,
    ErrorKind,
    InvalidPatternError,
    PathSyntaxError,
    RuleError,
    RulerTypeMismatchError,
    RuleSetError,
    SerializationError,
    TypeMismatchError,
    TypeNotSupportedError,
    ValueKind,
    kind_of,
)

__version__ = "0.1.0"

__all__ = [
    # rules and rulers
    "Rule",
    "new_rule",
    "new_rule_with_strategies",
    "Ruler",
    "AndRuler",
    "OrRuler",
    "Combinator",
    "Report",
    "new_ruler",
    "Result",
    "report_to_dict",
    "report_to_json",
    # strategies
    "Comparator",
    "Pluck",
    "path_pluck",
    "jsonpath_pluck",
    "RuleStrategy",
    "lookup",
    "register_rule_type",
    "registered_types",
    # decoders
    "Decoder",
    "json_decoder",
    "xml_decoder",
    "yaml_decoder",
    "get_decoder",
    "decoder_names",
    # rule sets
    "RULESET_SCHEMA",
    "validate_ruleset",
    "ruleset_from_dict",
    "load_ruleset",
    "load_record",
    "record_format",
    # types and errors
    "ValueKind",
    "kind_of",
    "ErrorKind",
    "RuleError",
    "TypeMismatchError",
    "TypeNotSupportedError",
    "DecodeError",
    "PathSyntaxError",
    "SerializationError",
    "InvalidPatternError",
    "RulerTypeMismatchError",
    "RuleSetError",
]
