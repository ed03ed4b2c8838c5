from datetime import datetime

import pytest

from merchlib.dbtime import BaseModel, db_time_from_json, db_time_to_json, format_db_time


def test_format_layout():
    assert format_db_time(datetime(2006, 1, 2, 15, 4, 5)) == "2006-01-02 15:04:05"


def test_to_json_is_quoted():
    assert db_time_to_json(datetime(2006, 1, 2, 15, 4, 5)) == b'"2006-01-02 15:04:05"'


def test_round_trip():
    moment = datetime(2023, 7, 16, 12, 7, 25)
    assert db_time_from_json(db_time_to_json(moment)) == moment
    assert db_time_from_json(db_time_to_json(moment).decode()) == moment


def test_fractional_seconds_accepted():
    parsed = db_time_from_json('"2006-01-02 15:04:05.5"')
    assert parsed.replace(microsecond=0) == datetime(2006, 1, 2, 15, 4, 5)
    assert parsed.microsecond == 500000


@pytest.mark.parametrize(
    "bad",
    ["2006-01-02 15:04:05", "null", '"2006-1-02 15:04:05"', '"2006-13-02 15:04:05"', '""'],
)
def test_invalid_input_raises(bad):
    with pytest.raises(ValueError):
        db_time_from_json(bad)


def test_base_model_defaults():
    model = BaseModel()
    assert model.id == 0
    assert model.created_at == datetime.min
    assert model.updated_at == datetime.min