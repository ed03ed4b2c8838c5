import dataclasses
import string

import pytest

from merchlib.util.hashing import md5_hex
from merchlib.util.text import (
    StringBuffer,
    attrs_to_underscore,
    camel_name,
    generate_uuid,
    get_sign_str,
    map_to_query_param_sort,
    obj_to_str,
    random_name,
    random_salt,
    random_string,
    remove_repeated,
    sign,
    substr,
    ten_to_base62,
    underscore_name,
)


@dataclasses.dataclass
class _Inner:
    Value: int = 0


@dataclasses.dataclass
class _Record:
    MessageID: int = 0
    Name: str = ""
    UserAge: int = 0


@dataclasses.dataclass
class _WithNested:
    OrderNo: str = ""
    Detail: _Inner = dataclasses.field(default_factory=_Inner)
    TotalAmount: int = 0


def test_struct_attr_to_underscore():
    names = attrs_to_underscore(_Record())
    assert names[0] == "message_id"
    assert names[1] == "name"
    assert names[2] == "user_age"


def test_attrs_to_underscore_skips_nested_dataclass():
    assert attrs_to_underscore(_WithNested) == ["order_no", "total_amount"]


def test_attrs_to_underscore_rejects_plain_objects():
    with pytest.raises(TypeError):
        attrs_to_underscore(object())


@pytest.mark.parametrize(
    "name, expected",
    [
        ("MessageID", "message_id"),
        ("UserAge", "user_age"),
        ("HTTPServer", "http_server"),
        ("name", "name"),
        ("Page2Size", "page2_size"),
    ],
)
def test_underscore_name(name, expected):
    assert underscore_name(name) == expected


def test_camel_name():
    assert camel_name("user_name_id") == "UserNameId"
    assert camel_name("page") == "Page"


def test_camel_underscore_round_trip():
    assert underscore_name(camel_name("order_total_amount")) == "order_total_amount"


def test_generate_uuid_shape():
    value = generate_uuid()
    assert len(value) == 32
    assert set(value) <= set(string.hexdigits.lower())
    assert value[12] == "4"


def test_remove_repeated_keeps_last_occurrence():
    assert remove_repeated(["a", "b", "a", "c", "b"]) == ["a", "c", "b"]
    assert remove_repeated([]) == []


def test_random_string_and_salt():
    alphabet = set(string.digits + string.ascii_letters)
    value = random_string(20)
    assert len(value) == 20
    assert set(value) <= alphabet
    assert len(random_salt()) == 8
    assert random_string(0) == ""


def test_random_name_is_nonempty_text():
    for _ in range(50):
        name = random_name()
        assert isinstance(name, str) and len(name) >= 1


@pytest.mark.parametrize(
    "value, expected",
    [(0, ""), (9, "9"), (10, "a"), (33, "s"), (35, "z"), (36, "A"), (59, "S"), (61, "Z")],
)
def test_ten_to_base62_single_digits(value, expected):
    assert ten_to_base62(value) == expected


def test_ten_to_base62_two_digits():
    assert ten_to_base62(9 * 62 + 10) == "9a"
    assert ten_to_base62(-5) == ""


def test_substr_cases():
    assert substr("你好世界", 1, 2) == "好世"
    assert substr("hello", -3, 2) == "ll"
    assert substr("hello", 1, -1) == "ell"
    assert substr("hello", 0, 0) == ""
    assert substr("hello", 3, 100) == "lo"
    assert substr("hello", 10, 2) == ""


def test_substr_out_of_range():
    with pytest.raises(IndexError):
        substr("hi", -5, 1)


def test_obj_to_str():
    assert obj_to_str(42) == "42"
    assert obj_to_str("abc") == "abc"
    assert obj_to_str(1.5) == "%!s(float64=1.5)"
    assert obj_to_str(True) == "%!s(bool=true)"


def test_map_to_query_param_sort():
    params = {"b": 2, "a": "x", "c": ""}
    assert map_to_query_param_sort(params) == "a=x&b=2"
    assert map_to_query_param_sort({}) == ""


def test_sign_uses_sorted_params():
    params = {"b": 2, "a": "x"}
    assert sign(params, "placeholder") == md5_hex("a=x&b=2&key=placeholder")


def test_get_sign_str_keeps_last_pair():
    assert get_sign_str({"a": "1", "b": "2"}) == "b=2"
    assert get_sign_str({"a": "1", "b": "2", "c": ""}) == "b=2&"
    assert get_sign_str({}) == ""


def test_string_buffer_chaining():
    buf = StringBuffer()
    result = buf.append(1).append("x").append(b"yz").append(True).append(3.5)
    assert result is buf
    assert buf.getvalue() == "1xyz"
    assert bytes(buf) == b"1xyz"
    assert len(buf) == 4