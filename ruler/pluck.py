"""
ruler/pluck.py — strategies that extract the value a rule compares.

Pluck contract::

    pluck(record, path, decoder) -> value       raises RuleError

path_pluck      dotted path; string values at intermediate segments are
                treated as embedded documents and run through `decoder`
jsonpath_pluck  JSONPath over a JSON re-serialization of the record;
                first match wins
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from jsonpath_ng.ext import parse as _parse_jsonpath

from .decoders import Decoder
from .types import (
    DecodeError,
    PathSyntaxError,
    SerializationError,
    TypeNotSupportedError,
    ValueKind,
    kind_of,
)

logger = logging.getLogger(__name__)

type Pluck = Callable[[Mapping[str, Any], str, Decoder], Any]


# ---------------------------------------------------------------------------
# Dotted path
# ---------------------------------------------------------------------------

def path_pluck(record: Mapping[str, Any], path: str, decoder: Decoder) -> Any:
    """
    Walk `record` along "a.b.c".

    Intermediate segments must hold a mapping or a string (decoded with
    `decoder`); anything else, including a missing key, raises
    TypeNotSupportedError. The last segment is returned as-is and is None
    when absent.
    """
    *parents, leaf = path.split(".")
    current: Mapping[str, Any] = record

    for segment in parents:
        value = current.get(segment)
        match kind_of(value):
            case ValueKind.STRING:
                current = _decode_embedded(value, segment, decoder)
            case ValueKind.MAP:
                current = value
            case kind:
                raise TypeNotSupportedError(
                    f"cannot descend into {segment!r} of kind {kind} in path {path!r}"
                )

    return current.get(leaf)


def _decode_embedded(value: str, segment: str, decoder: Decoder) -> Mapping[str, Any]:
    logger.debug("Decoding embedded document at segment %r", segment)
    try:
        decoded = decoder(value.encode("utf-8"))
    except DecodeError:
        raise
    except Exception as exc:
        # custom decoders may raise anything; normalise to the engine's error
        raise DecodeError(f"decoder failed on {segment!r}: {exc}") from exc
    if not isinstance(decoded, Mapping):
        raise DecodeError(f"embedded document at {segment!r} is not a mapping")
    return decoded


# ---------------------------------------------------------------------------
# JSONPath
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=256)
def compile_jsonpath(path: str):
    """Parse (and cache) a JSONPath expression; raises PathSyntaxError."""
    try:
        return _parse_jsonpath(path)
    except Exception as exc:
        # the lexer of some jsonpath-ng releases raises bare Exception
        raise PathSyntaxError(f"invalid JSONPath {path!r}: {exc}") from exc


def _to_json_tree(record: Mapping[str, Any]) -> Any:
    try:
        return json.loads(json.dumps(record))
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"record is not JSON serializable: {exc}") from exc


def jsonpath_pluck(record: Mapping[str, Any], path: str, decoder: Decoder) -> Any:
    """
    First value matched by the JSONPath `path`, or None.

    `decoder` is accepted for signature compatibility and not used: the
    record is re-serialized as JSON and embedded documents stay strings.
    """
    expr = compile_jsonpath(path)
    tree = _to_json_tree(record)
    try:
        matches = expr.find(tree)
    except Exception as exc:
        raise PathSyntaxError(f"JSONPath {path!r} failed to evaluate: {exc}") from exc
    if not matches:
        return None
    return matches[0].value
