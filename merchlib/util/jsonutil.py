"""JSON encoding and decoding helpers."""

from __future__ import annotations

import base64
import dataclasses
import json
from decimal import Decimal
from typing import Any

__all__ = ["to_json", "json_to_map", "read_json"]

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


def to_json(obj: Any) -> str:
    """Serialise ``obj`` compactly with sorted keys; returns ``""`` if it cannot be encoded."""
    try:
        text = json.dumps(
            obj,
            separators=(",", ":"),
            ensure_ascii=False,
            sort_keys=True,
            allow_nan=False,
            default=_default,
        )
    except (TypeError, ValueError):
        return ""
    for raw, escaped in _HTML_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text


def read_json(body: bytes | str) -> Any:
    """Decode the first JSON value in ``body``, keeping fractional numbers as ``Decimal``.

    Anything after the first value is ignored.
    """
    text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
    decoder = json.JSONDecoder(parse_float=Decimal)
    stripped = text.lstrip(" \t\r\n")
    value, _ = decoder.raw_decode(stripped)
    return value


def json_to_map(text: str) -> dict[str, Any]:
    """Decode a JSON object; ``null`` gives an empty dict."""
    value = read_json(text)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value