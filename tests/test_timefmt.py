from datetime import datetime, timezone

import pytest

from merchlib.util.timefmt import (
    format_date,
    format_date_compact,
    format_minute,
    format_second,
    format_year_month,
    format_year_month_compact,
    parse_date,
    parse_date_compact,
)

MOMENT = datetime(2023, 7, 5, 9, 3, 7)


def test_format_second_layout():
    assert format_second(MOMENT) == "2023-07-05 09:03:07"


def test_format_minute_is_prefix_of_second():
    minute = format_minute(MOMENT)
    assert len(minute) == 16
    assert format_second(MOMENT).startswith(minute)


def test_year_month_compact():
    assert format_year_month_compact(MOMENT) == "202307"


def test_compact_forms_are_dashless_versions():
    assert format_date_compact(MOMENT) == format_date(MOMENT).replace("-", "")
    assert format_year_month_compact(MOMENT) == format_year_month(MOMENT).replace("-", "")
    assert format_date(MOMENT).startswith(format_year_month(MOMENT))


def test_parse_compact_round_trip():
    parsed = parse_date_compact("20230705")
    assert parsed.tzinfo == timezone.utc
    assert (parsed.hour, parsed.minute, parsed.second) == (0, 0, 0)
    assert format_date_compact(parsed) == "20230705"


def test_parse_dashed_round_trip():
    parsed = parse_date(format_date(MOMENT))
    assert parsed == datetime(2023, 7, 5, tzinfo=timezone.utc)
    assert parse_date_compact(format_date_compact(MOMENT)) == parsed


@pytest.mark.parametrize("text", ["2023-7-5", "2023-13-01", "", "2023-07-05 ", "abcd-ef-gh"])
def test_parse_date_rejects(text):
    with pytest.raises(ValueError):
        parse_date(text)


@pytest.mark.parametrize("text", ["2023075", "20231301", "20230230", "2023-07-05"])
def test_parse_date_compact_rejects(text):
    with pytest.raises(ValueError):
        parse_date_compact(text)