"""Paging result container and query-parameter parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["Page", "to_page_num_or_default"]

_UINT64_MAX = 2**64 - 1
DEFAULT_PAGE_INDEX = 1
DEFAULT_PAGE_SIZE = 10


@dataclass
class Page:
    """One page of results with its position and the overall total."""

    page_index: int
    page_size: int
    total: int
    data: Any = None


def _parse_uint(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        return 0
    return min(int(text), _UINT64_MAX)


def to_page_num_or_default(page_index: str, page_size: str) -> tuple[int, int]:
    """Parse page index and size; empty strings give 1 and 10, invalid text gives 0."""
    index = DEFAULT_PAGE_INDEX if page_index == "" else _parse_uint(page_index)
    size = DEFAULT_PAGE_SIZE if page_size == "" else _parse_uint(page_size)
    return index, size