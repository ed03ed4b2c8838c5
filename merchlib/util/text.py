"""String helpers: case conversion, random strings, signing strings and a byte buffer."""

from __future__ import annotations

import dataclasses
import math
import random
import uuid
from decimal import Decimal
from typing import Any, Iterable, Mapping

from merchlib.util.hashing import md5_hex

__all__ = [
    "StringBuffer",
    "generate_uuid",
    "underscore_name",
    "camel_name",
    "remove_repeated",
    "random_salt",
    "random_string",
    "random_name",
    "ten_to_base62",
    "substr",
    "obj_to_str",
    "map_to_query_param_sort",
    "sign",
    "get_sign_str",
    "attrs_to_underscore",
]

_RANDOM_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Digit table of the base-62 encoder. Values 0-8 have no symbol and 33/59 reuse
# "s"/"S"; ids produced elsewhere depend on this exact table.
_BASE62_DIGITS = (
    ("",) * 9
    + ("9",)
    + tuple("abcdefghijklmnopqrstuvwsyz")
    + tuple("ABCDEFGHIJKLMNOPQRSTUVWSYZ")
)

_NAMES = (
    "独角王", "老鼋", "灵感大王", "如意真仙", "蝎女妖", "六耳猕猴", "罗刹女", "牛魔王",
    "羊力大仙", "鹿力大仙", "虎力大仙", "鳖龙", "红孩儿", "青狮道人", "熊山君", "特处士", "玉面公主",
    "九头虫", "黄眉老祖", "大蟒精", "赛太岁", "蜘蛛精", "多目怪", "青狮魔王", "白象魔王", "大鹏魔王", "虎威魔王",
    "狮吼魔王", "狮毛怪", "美后", "国丈", "地涌夫人", "金钱豹王", "黄狮精", "九灵元圣", "辟寒大王", "辟暑大王",
    "辟尘大王", "玄鹤老", "玉兔精", "蠹妖", "蛙怪", "麋妖", "古柏老", "灵龟老", "峰五老", "赤蛇精", "虺妖", "蚖妖",
    "蝮子怪", "蝎小妖", "狐妖", "凤管娘子", "鸾萧夫人", "七情大王", "六欲大王", "三尸魔王", "阴沉魔王", "独角魔王",
    "啸风魔王", "兴云魔王", "六耳魔王", "迷识魔王", "消阳魔王", "铄阴魔王", "耗气魔王", "黑鱼精", "蜂妖", "灵鹊",
    "玄武灵", "美蔚君", "福缘君", "善庆君", "孟浪魔王", "慌张魔王", "司视魔", "司听魔", "逐香魔", "具体魔", "驰神魔",
    "逐味魔", "千里眼", "顺风耳", "金童", "玉女", "雷公", "电母", "风伯", "雨师", "游奕灵官", "翊圣真君", "大力鬼王",
    "七仙女", "太白金星", "赤脚大仙", "嫦娥", "玉兔", "吴刚", "猪八戒", "孙悟空", "唐僧", "沙悟净", "白龙马", "九天玄女",
    "九曜星", "日游神", "夜游神", "太阴星君", "太阳星君", "武德星君", "佑圣真君", "李靖", "金吒", "木吒", "哪吒",
    "巨灵神", "月老", "左辅右弼", "二郎神杨戬", "萨真人", "文昌帝君", "增长天王", "持国天王", "多闻天王", "广目天王",
    "张道陵", "许逊", "邱弘济", "葛洪", "渔人", "林黛玉", "薛宝钗", "贾宝玉", "秦可卿", "贾巧姐", "王熙凤", "史湘云",
    "妙玉", "李纨", "贾惜春", "贾探春", "贾迎春", "贾元春", "王妈妈", "西门庆", "武松", "武大郎", "宋江", "鲁智深",
    "高俅", "闻太师", "卢俊义", "吴用", "公孙胜", "关胜", "林冲", "秦明", "呼延灼", "花荣", "阮小七", "燕青",
    "皇甫端", "扈三娘", "王英", "安道全", "金大坚", "萧峰", "段誉", "童猛", "陶宗旺", "郑天寿", "王定六", "段景住",
    "寅将军", "黑熊精", "白衣秀士", "凌虚子", "黄风怪", "白骨精", "奎木狼", "金角大王", "银角大王",
)


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def generate_uuid() -> str:
    """Return a random version-4 UUID as 32 hex characters without dashes."""
    return uuid.uuid4().hex


def underscore_name(name: str) -> str:
    """Convert a CamelCase name to snake_case (``MessageID`` -> ``message_id``)."""
    out: list[str] = []
    for pos, ch in enumerate(name):
        out.append(ch.lower() if _is_upper(ch) else ch)
        nxt = name[pos + 1 : pos + 2]
        after = name[pos + 2 : pos + 3]
        if nxt and _is_upper(nxt) and (
            _is_lower(ch) or _is_digit(ch) or (after and _is_lower(after))
        ):
            out.append("_")
    return "".join(out)


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    if ch.isalpha() or ch.isdigit():
        return False
    return ch.isspace()


def camel_name(name: str) -> str:
    """Convert a snake_case name to CamelCase (``user_name`` -> ``UserName``)."""
    spaced = name.replace("_", " ")
    out: list[str] = []
    prev = " "
    for ch in spaced:
        out.append(ch.upper() if _is_separator(prev) else ch)
        prev = ch
    return "".join(out).replace(" ", "")


def remove_repeated(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping the last occurrence of each item in order."""
    seen: set[str] = set()
    kept: list[str] = []
    for item in reversed(list(items)):
        if item not in seen:
            seen.add(item)
            kept.append(item)
    kept.reverse()
    return kept


def random_salt() -> str:
    """Return a random 8-character alphanumeric salt."""
    return random_string(8)


def random_string(num: int) -> str:
    """Return ``num`` random characters drawn from digits and ASCII letters."""
    return "".join(random.choices(_RANDOM_ALPHABET, k=max(num, 0)))


def random_name() -> str:
    """Return a random display name for a newly registered user."""
    return random.choice(_NAMES[:-1])


def _base62_digit(value: int) -> str:
    return _BASE62_DIGITS[value] if 0 <= value < len(_BASE62_DIGITS) else ""


def ten_to_base62(ten: int) -> str:
    """Encode a non-negative integer with the base-62 digit table."""
    encoded = ""
    while ten >= 62:
        ten, rest = divmod(ten, 62)
        encoded = _base62_digit(rest) + encoded
    if ten != 0:
        encoded = _base62_digit(ten) + encoded
    return encoded


def substr(text: str, start: int, length: int) -> str:
    """Return a character slice; negative ``start`` counts from the end and
    negative ``length`` leaves that many characters off the end.

    Raises IndexError when the resulting range falls before the string.
    """
    if length == 0:
        return ""
    size = len(text)
    if start < 0:
        start += size
    if start > size:
        start = size
    end = min(start + length, size)
    if length < 0:
        end = size + length
    if start > end:
        start, end = end, start
    if start < 0:
        raise IndexError(f"substring range [{start}:{end}] out of bounds for length {size}")
    return text[start:end]


def _go_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign_bit, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    text_digits = "".join(map(str, digits))
    exp10 = len(text_digits) + exponent - 1
    prefix = "-" if sign_bit else ""
    if -4 <= exp10 < 21:
        return prefix + format(abs(Decimal(repr(value)).normalize()), "f")
    mantissa = text_digits[0] + ("." + text_digits[1:] if len(text_digits) > 1 else "")
    return f"{prefix}{mantissa}e{'+' if exp10 >= 0 else '-'}{abs(exp10):02d}"


def obj_to_str(value: Any) -> str:
    """Render a parameter value the way the signing string expects it.

    Integers and strings render plainly; floats, booleans and None keep the
    ``%!s(type=value)`` form used by existing signatures.
    """
    if isinstance(value, bool):
        return f"%!s(bool={'true' if value else 'false'})"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, float):
        return f"%!s(float64={_go_float(value)})"
    if value is None:
        return "%!s(<nil>)"
    return str(value)


def map_to_query_param_sort(params: Mapping[str, Any]) -> str:
    """Join ``key=value`` pairs sorted by key with ``&``, skipping empty strings."""
    return "&".join(
        f"{key}={obj_to_str(params[key])}"
        for key in sorted(params)
        if params[key] != ""
    )


def sign(params: Mapping[str, Any], app_key: str) -> str:
    """Return the MD5 signature of the sorted parameters followed by ``&key=app_key``."""
    return md5_hex(f"{map_to_query_param_sort(params)}&key={app_key}")


def get_sign_str(params: Mapping[str, Any]) -> str:
    """Return the sign string for ``params``.

    Only the last non-empty pair survives, followed by ``&`` unless its key
    is the last key in sort order.
    """
    keys = sorted(params)
    result = ""
    for pos, key in enumerate(keys):
        value = params[key]
        if value == "":
            continue
        result = f"{key}={obj_to_str(value)}"
        if pos != len(keys) - 1:
            result += "&"
    return result


def attrs_to_underscore(obj: Any) -> list[str]:
    """Return the snake_case names of a dataclass's fields, skipping nested dataclasses."""
    if not dataclasses.is_dataclass(obj):
        raise TypeError(f"expected a dataclass, got {type(obj).__name__}")
    cls = obj if isinstance(obj, type) else type(obj)
    names: list[str] = []
    for field in dataclasses.fields(cls):
        declared = field.type
        if isinstance(declared, type) and dataclasses.is_dataclass(declared):
            continue
        if field.name:
            names.append(underscore_name(field.name))
    return names


class StringBuffer:
    """Growable UTF-8 buffer whose ``append`` can be chained."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def append(self, value: Any) -> "StringBuffer":
        """Append an int, str or bytes value; other types are ignored."""
        if isinstance(value, bool):
            return self
        if isinstance(value, int):
            self._buf += str(value).encode("ascii")
        elif isinstance(value, str):
            self._buf += value.encode("utf-8")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self._buf += bytes(value)
        return self

    def getvalue(self) -> str:
        """Return the buffer contents as text."""
        return self._buf.decode("utf-8", errors="replace")

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)