"""
ruler/decoders.py — decoders that turn raw bytes into a record.

Decoder contract::

    decoder(data: bytes) -> dict[str, Any]      raises DecodeError

The dotted-path pluck uses the injected decoder to inflate embedded
serialized sub-documents; the CLI uses the same functions for record files.

Public API:
  json_decoder(data)   JSON object  -> dict
  xml_decoder(data)    XML document -> {root_tag: {...}}
  yaml_decoder(data)   YAML mapping -> dict
  get_decoder(name)    decoder by name ("json", "xml", "yaml"/"yml")
  decoder_names()      registered names
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import yaml
from defusedxml import ElementTree as SafeET
from defusedxml.common import DTDForbidden, EntitiesForbidden, ExternalReferenceForbidden

from .types import DecodeError

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

type Decoder = Callable[[bytes], dict[str, Any]]


def _as_record(value: Any, fmt: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(
            f"{fmt} document must decode to a mapping, got {type(value).__name__}"
        )
    return value


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def json_decoder(data: bytes) -> dict[str, Any]:
    try:
        value = json.loads(_as_bytes(data))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    return _as_record(value, "JSON")


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------

def yaml_decoder(data: bytes) -> dict[str, Any]:
    """Safe YAML load; an empty document decodes to {}."""
    try:
        value = yaml.safe_load(_as_bytes(data))
    except yaml.YAMLError as exc:
        raise DecodeError(f"invalid YAML: {exc}") from exc
    if value is None:
        return {}
    return _as_record(value, "YAML")


# ---------------------------------------------------------------------------
# XML
# ---------------------------------------------------------------------------

def xml_decoder(data: bytes) -> dict[str, Any]:
    """
    Parse XML into a nested dict.

    Conversion rules:
      - leaf element with text only  -> "text"
      - element with children        -> {"child": ..., ...}
      - repeated siblings            -> {"child": [first, second, ...]}
      - attributes                   -> {"@name": "value", ...}
      - text next to children/attrs  -> {"#text": "..."}; text pieces
                                        around children are joined by spaces
      - namespace URIs are stripped from tags and attribute names

    DTDs, entity declarations and external references are refused.
    """
    raw = _as_bytes(data)
    if not raw.strip():
        raise DecodeError("empty XML document")

    try:
        root = SafeET.fromstring(raw, forbid_dtd=True)
    except (EntitiesForbidden, ExternalReferenceForbidden, DTDForbidden) as exc:
        logger.warning("Blocked dangerous XML content: %s", exc)
        raise DecodeError(
            "XML contains forbidden constructs (entities, external references or DTD)"
        ) from exc
    except SafeET.ParseError as exc:
        raise DecodeError(f"invalid XML: {exc}") from exc

    return {_strip_ns(root.tag): _element_to_value(root)}


def _strip_ns(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_to_value(element: Element) -> Any:
    result: dict[str, Any] = {}

    for name, value in element.attrib.items():
        result[f"@{_strip_ns(name)}"] = value

    for child in element:
        tag   = _strip_ns(child.tag)
        value = _element_to_value(child)
        if tag not in result:
            result[tag] = value
        elif isinstance(result[tag], list):
            result[tag].append(value)
        else:
            result[tag] = [result[tag], value]

    pieces = [element.text, *(child.tail for child in element)]
    text = " ".join(p.strip() for p in pieces if p and p.strip())
    if text:
        if not result:
            return text
        result["#text"] = text

    return result if result else ""


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

_DECODERS: dict[str, Decoder] = {
    "json": json_decoder,
    "xml":  xml_decoder,
    "yaml": yaml_decoder,
    "yml":  yaml_decoder,
}


def get_decoder(name: str) -> Decoder:
    try:
        return _DECODERS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"unknown decoder {name!r}; expected one of {', '.join(decoder_names())}"
        ) from None


def decoder_names() -> list[str]:
    return sorted(_DECODERS)
