"""
ruler/loader.py — building rulers from rule-set documents, reading records.

Rule-set document (JSON or YAML)::

    {
        "name":       "order-checks",
        "combinator": "AND",
        "decoder":    "json",
        "rules": [
            {"path": "order.status", "type": "EQ",    "value": "paid"},
            {"path": "order.id",     "type": "EXISTS"}
        ]
    }

"name" and "decoder" are optional; "value" may be omitted for rule types
that ignore it (EXISTS / NEXISTS).

Public API:
  RULESET_SCHEMA                 JSON Schema of the document
  validate_ruleset(data)         -> list[str] of problems
  ruleset_from_dict(data)        -> Ruler
  load_ruleset(path)             -> Ruler
  load_record(path, fmt=None)    -> dict
"""

from __future__ import annotations

import logging
import pathlib
from typing import Any

import jsonschema

from .decoders import decoder_names, get_decoder, json_decoder, yaml_decoder
from .engine import Ruler, new_ruler
from .rule import new_rule
from .types import DecodeError, RuleSetError

logger = logging.getLogger(__name__)

RULESET_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["combinator", "rules"],
    "additionalProperties": False,
    "properties": {
        "name":       {"type": "string"},
        "combinator": {"type": "string", "pattern": "^(?i:and|or)$"},
        "decoder":    {"type": "string"},
        "rules": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["path", "type"],
                "additionalProperties": False,
                "properties": {
                    "path":  {"type": "string", "minLength": 1},
                    "type":  {"type": "string", "minLength": 1},
                    "value": {},
                },
            },
        },
    },
}

_SUFFIX_FORMATS: dict[str, str] = {
    ".json": "json",
    ".xml":  "xml",
    ".yaml": "yaml",
    ".yml":  "yaml",
}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_ruleset(data: Any) -> list[str]:
    """Every schema violation as "<json pointer>: <message>"."""
    validator = jsonschema.Draft202012Validator(RULESET_SCHEMA)
    problems: list[str] = []
    for e in validator.iter_errors(data):
        path = (
            "/" + "/".join(str(p) for p in e.absolute_path)
            if e.absolute_path
            else "/"
        )
        problems.append(f"{path}: {e.message}")

    if isinstance(data, dict) and isinstance(data.get("decoder"), str):
        if data["decoder"].strip().lower() not in decoder_names():
            problems.append(
                f"/decoder: unknown decoder {data['decoder']!r} "
                f"(expected one of {', '.join(decoder_names())})"
            )
    return problems


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------

def ruleset_from_dict(data: Any) -> Ruler:
    """
    Build a ruler from a decoded rule-set document.

    Raises:
        RuleSetError: the document violates RULESET_SCHEMA; `errors` holds
            every violation.
    """
    problems = validate_ruleset(data)
    if problems:
        raise RuleSetError(
            f"rule set is invalid ({len(problems)} problem(s))", errors=problems
        )

    decoder = get_decoder(data.get("decoder", "json"))
    rules = [
        new_rule(item["path"], item["type"], item.get("value"))
        for item in data["rules"]
    ]
    ruler = new_ruler(rules, data["combinator"], decoder)
    logger.debug(
        "Loaded rule set %r: %s with %d rule(s)",
        data.get("name", ""), ruler.combinator, len(rules),
    )
    return ruler


def load_ruleset(path: pathlib.Path | str) -> Ruler:
    """Read a .json / .yaml / .yml rule-set file and build its ruler."""
    path = pathlib.Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        decode = json_decoder
    elif suffix in (".yaml", ".yml"):
        decode = yaml_decoder
    else:
        raise RuleSetError(f"unsupported rule-set file type {suffix or '(none)'!r}")

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise RuleSetError(f"cannot read rule set {path}: {exc}") from exc

    try:
        data = decode(raw)
    except DecodeError as exc:
        raise RuleSetError(f"cannot parse rule set {path}: {exc.message}") from exc

    return ruleset_from_dict(data)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def record_format(path: pathlib.Path | str, default: str = "json") -> str:
    """Record format implied by the file suffix, else `default`."""
    return _SUFFIX_FORMATS.get(pathlib.Path(path).suffix.lower(), default)


def load_record(path: pathlib.Path | str, fmt: str | None = None) -> dict[str, Any]:
    """
    Read and decode a record file.

    Raises:
        OSError:     the file cannot be read
        DecodeError: the content does not decode to a mapping
        ValueError:  unknown `fmt`
    """
    path = pathlib.Path(path)
    decoder = get_decoder(fmt or record_format(path))
    return decoder(path.read_bytes())
