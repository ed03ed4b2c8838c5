"""Database timestamps rendered as ``YYYY-MM-DD HH:MM:SS``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

__all__ = ["BaseModel", "DB_TIME_FORMAT", "format_db_time", "db_time_to_json", "db_time_from_json"]

DB_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_JSON_TIME = re.compile(r'"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(?:\.(\d+))?"')


@dataclass
class BaseModel:
    """Columns shared by every table."""

    id: int = 0
    created_at: datetime = datetime.min
    updated_at: datetime = datetime.min


def format_db_time(tm: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM:SS``."""
    return tm.strftime(DB_TIME_FORMAT)


def db_time_to_json(tm: datetime) -> bytes:
    """Encode as a quoted JSON string."""
    return f'"{format_db_time(tm)}"'.encode("utf-8")


def db_time_from_json(data: bytes | str) -> datetime:
    """Decode a quoted ``YYYY-MM-DD HH:MM:SS`` string as naive local time.

    A fractional-seconds suffix is accepted; anything else raises ValueError.
    """
    text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    match = _JSON_TIME.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as a database time")
    parsed = datetime.strptime(match.group(1), DB_TIME_FORMAT)
    fraction = match.group(2)
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    return parsed