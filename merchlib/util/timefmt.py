"""Fixed date and time layouts used across the services."""

from __future__ import annotations

import re
from datetime import datetime, timezone

__all__ = [
    "format_minute",
    "format_second",
    "format_year_month_compact",
    "format_date_compact",
    "parse_date_compact",
    "format_date",
    "format_year_month",
    "parse_date",
]

_COMPACT_DATE = re.compile(r"\d{8}")
_DASHED_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def format_minute(tm: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM``."""
    return tm.strftime("%Y-%m-%d %H:%M")


def format_second(tm: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM:SS``."""
    return tm.strftime("%Y-%m-%d %H:%M:%S")


def format_year_month_compact(tm: datetime) -> str:
    """Format as ``YYYYMM``."""
    return tm.strftime("%Y%m")


def format_date_compact(tm: datetime) -> str:
    """Format as ``YYYYMMDD``."""
    return tm.strftime("%Y%m%d")


def parse_date_compact(text: str) -> datetime:
    """Parse ``YYYYMMDD`` into a UTC midnight datetime."""
    if not _COMPACT_DATE.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as YYYYMMDD")
    return datetime.strptime(text, "%Y%m%d").replace(tzinfo=timezone.utc)


def format_date(tm: datetime) -> str:
    """Format as ``YYYY-MM-DD``."""
    return tm.strftime("%Y-%m-%d")


def format_year_month(tm: datetime) -> str:
    """Format as ``YYYY-MM``."""
    return tm.strftime("%Y-%m")


def parse_date(text: str) -> datetime:
    """Parse ``YYYY-MM-DD`` into a UTC midnight datetime."""
    if not _DASHED_DATE.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as YYYY-MM-DD")
    return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)