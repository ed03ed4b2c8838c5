import dataclasses

import pytest

from merchlib.util.paging import Page, to_page_num_or_default


def test_defaults_for_empty_strings():
    assert to_page_num_or_default("", "") == (1, 10)


def test_parses_numbers():
    assert to_page_num_or_default("3", "20") == (3, 20)
    assert to_page_num_or_default("", "50") == (1, 50)


@pytest.mark.parametrize("text", ["abc", "-5", " 3", "+3", "1.5", "３"])
def test_invalid_text_gives_zero(text):
    assert to_page_num_or_default(text, text) == (0, 0)


def test_overflow_clamps_to_uint64_max():
    index, size = to_page_num_or_default("99999999999999999999", "7")
    assert index == 2**64 - 1
    assert size == 7


def test_page_fields():
    page = Page(page_index=2, page_size=10, total=30, data=[1, 2])
    assert dataclasses.asdict(page) == {
        "page_index": 2,
        "page_size": 10,
        "total": 30,
        "data": [1, 2],
    }


def test_page_positional_order():
    page = Page(4, 25, 100, "rows")
    assert (page.page_index, page.page_size, page.total, page.data) == (4, 25, 100, "rows")