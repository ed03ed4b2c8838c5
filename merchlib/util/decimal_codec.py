"""Serialisation, database scanning and aggregation helpers for fixed-point decimals."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any

from merchlib.util.fixeddecimal import Decimal

__all__ = [
    "NullDecimal",
    "to_json",
    "from_json",
    "to_binary",
    "from_binary",
    "scan",
    "min_decimal",
    "max_decimal",
    "sum_decimal",
    "avg_decimal",
    "yuan_to_cent",
    "cent_to_yuan",
]

_GOB_INT_VERSION = 1
_NULL = b"null"


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _unquote_if_quoted(value: Any) -> str:
    """Return ``value`` as text with one pair of surrounding double quotes removed."""
    if isinstance(value, str):
        raw = value.encode("utf-8")
    elif isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raise TypeError(
            f"Could not convert value '{value!r}' to byte array of type '{type(value).__name__}'"
        )
    if len(raw) > 2 and raw[:1] == b'"' and raw[-1:] == b'"':
        raw = raw[1:-1]
    return raw.decode("utf-8")


def to_json(value: Decimal, without_quotes: bool = False) -> bytes:
    """Encode ``value`` as a JSON string, or as a bare JSON number if ``without_quotes``."""
    text = str(value)
    return (text if without_quotes else f'"{text}"').encode("utf-8")


def from_json(data: bytes | str) -> Decimal:
    """Decode a JSON string or number into a decimal; ``null`` gives zero."""
    raw = _as_bytes(data)
    if raw == _NULL:
        return Decimal(0, 0)
    text = _unquote_if_quoted(raw)
    try:
        return Decimal.from_string(text)
    except ValueError as exc:
        raise ValueError(f"Error decoding string '{text}': {exc}") from exc


def to_binary(value: Decimal) -> bytes:
    """Encode as a 4-byte big-endian exponent followed by the signed coefficient bytes."""
    header = struct.pack(">I", value.exponent & 0xFFFFFFFF)
    coefficient = value.coefficient
    flag = (_GOB_INT_VERSION << 1) | (1 if coefficient < 0 else 0)
    magnitude = abs(coefficient)
    body = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big") if magnitude else b""
    return header + bytes([flag]) + body


def from_binary(data: bytes) -> Decimal:
    """Decode the layout written by :func:`to_binary`."""
    raw = bytes(data)
    if len(raw) < 4:
        raise ValueError(f"binary decimal needs at least 4 bytes, got {len(raw)}")
    (exp,) = struct.unpack(">i", raw[:4])
    payload = raw[4:]
    if not payload:
        return Decimal(0, exp)
    flag = payload[0]
    if flag >> 1 != _GOB_INT_VERSION:
        raise ValueError(f"Int.GobDecode: encoding version {flag >> 1} not supported")
    magnitude = int.from_bytes(payload[1:], "big")
    return Decimal(-magnitude if flag & 1 else magnitude, exp)


def scan(value: Any) -> Decimal:
    """Convert a database column value (float, int, text or bytes) to a decimal."""
    if isinstance(value, bool):
        raise TypeError(
            f"Could not convert value '{value!r}' to byte array of type '{type(value).__name__}'"
        )
    if isinstance(value, float):
        return Decimal.from_float(value)
    if isinstance(value, int):
        return Decimal(value, 0)
    return Decimal.from_string(_unquote_if_quoted(value))


@dataclass
class NullDecimal:
    """A decimal that may be absent, as a nullable database column."""

    decimal: Decimal = field(default_factory=Decimal)
    valid: bool = False

    @classmethod
    def scan(cls, value: Any) -> "NullDecimal":
        """Convert a column value; ``None`` gives an invalid (null) result."""
        if value is None:
            return cls(Decimal(0, 0), False)
        return cls(scan(value), True)

    def to_json(self) -> bytes:
        """Encode as a quoted decimal, or ``null`` when not valid."""
        if not self.valid:
            return _NULL
        return to_json(self.decimal)

    @classmethod
    def from_json(cls, data: bytes | str) -> "NullDecimal":
        """Decode JSON; ``null`` gives an invalid result."""
        if _as_bytes(data) == _NULL:
            return cls(Decimal(0, 0), False)
        return cls(from_json(data), True)


def min_decimal(first: Decimal, *args: Decimal) -> Decimal:
    """Return the smallest argument; the earliest wins among equals."""
    best = first
    for item in args:
        if item.cmp(best) < 0:
            best = item
    return best


def max_decimal(first: Decimal, *args: Decimal) -> Decimal:
    """Return the largest argument; the earliest wins among equals."""
    best = first
    for item in args:
        if item.cmp(best) > 0:
            best = item
    return best


def sum_decimal(first: Decimal, *args: Decimal) -> Decimal:
    """Return the sum of all arguments."""
    total = first
    for item in args:
        total = total.add(item)
    return total


def avg_decimal(first: Decimal, *args: Decimal) -> Decimal:
    """Return the mean of all arguments, rounded to the division precision."""
    count = Decimal(len(args) + 1, 0)
    return sum_decimal(first, *args).div(count)


def yuan_to_cent(yuan: float) -> int:
    """Convert an amount in yuan, rounded to two places, to whole cents."""
    amount = Decimal.from_string(f"{yuan:.2f}")
    return amount.mul(Decimal.from_string("100")).int_part()


def cent_to_yuan(cent: int) -> float:
    """Convert whole cents to yuan rounded to two places."""
    amount = Decimal.from_string(str(int(cent)))
    return amount.div(Decimal.from_string("100")).round(2).to_float()