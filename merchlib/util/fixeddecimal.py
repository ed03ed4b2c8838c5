"""Arbitrary-precision fixed-point decimal: ``value * 10 ** exp``."""

from __future__ import annotations

import functools
import math
import re
import struct
from fractions import Fraction
from typing import Any

__all__ = ["Decimal", "require_from_string", "DIVISION_PRECISION", "ZERO"]

# Digits after the decimal point when a division does not come out exactly.
DIVISION_PRECISION = 16

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT_TEXT = re.compile(r"[+-]?[0-9]+")

_CASH_FACTORS = {5: 20, 10: 10, 15: 10, 25: 4, 50: 2, 100: 1}


def _quo(a: int, b: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def _parse_int(text: str) -> int | None:
    if not _INT_TEXT.fullmatch(text):
        return None
    return int(text)


@functools.total_ordering
class Decimal:
    """Immutable fixed-point decimal number equal to ``value * 10 ** exp``."""

    __slots__ = ("_value", "_exp")

    def __init__(self, value: int = 0, exp: int = 0) -> None:
        self._value = int(value)
        self._exp = int(exp)

    # -- construction -------------------------------------------------

    @classmethod
    def from_string(cls, value: str) -> "Decimal":
        """Parse a decimal string such as ``"-123.45"``, ``".0001"`` or ``"1.5e3"``."""
        original = value
        exp = 0
        e_index = next((pos for pos, ch in enumerate(value) if ch in "Ee"), -1)
        if e_index != -1:
            exp_text = value[e_index + 1 :]
            parsed = _parse_int(exp_text)
            if parsed is None:
                raise ValueError(f"can't convert {value} to decimal: exponent is not numeric")
            if not _INT32_MIN <= parsed <= _INT32_MAX:
                raise ValueError(f"can't convert {value} to decimal: fractional part too long")
            value = value[:e_index]
            exp = parsed

        parts = value.split(".")
        if len(parts) == 1:
            int_text = value
        elif len(parts) == 2:
            fraction = parts[1].rstrip("0")
            int_text = parts[0] + fraction
            exp -= len(fraction)
        else:
            raise ValueError(f"can't convert {value} to decimal: too many .s")

        coefficient = _parse_int(int_text)
        if coefficient is None:
            raise ValueError(f"can't convert {value} to decimal")
        if not _INT32_MIN <= exp <= _INT32_MAX:
            raise ValueError(f"can't convert {original} to decimal: fractional part too long")
        return cls(coefficient, exp)

    @classmethod
    def from_float(cls, value: float) -> "Decimal":
        """Convert a float exactly to a decimal."""
        return cls.from_float_with_exponent(value, _INT32_MIN)

    @classmethod
    def from_float_with_exponent(cls, value: float, exp: int) -> "Decimal":
        """Convert a float, keeping at most ``-exp`` fractional digits (rounded half up)."""
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"Cannot create a Decimal from {value}")

        (bits,) = struct.unpack(">Q", struct.pack(">d", float(value)))
        mant = bits & ((1 << 52) - 1)
        exp2 = (bits >> 52) & ((1 << 11) - 1)
        negative = bits >> 63 == 1

        if exp2 == 0:
            if mant == 0:
                return cls(0, 0)
            exp2 += 1
        else:
            mant |= 1 << 52
        exp2 -= 1023 + 52

        while mant & 1 == 0:
            mant >>= 1
            exp2 += 1

        if exp < 0 and exp < exp2:
            exp = exp2 if exp2 < 0 else 0

        # 10^M * 2^N represented as 5^M * 2^(M+N)
        exp2 -= exp
        temp = 1
        coefficient = mant
        if exp > 0:
            temp = 5**exp
        elif exp < 0:
            coefficient *= 5 ** (-exp)

        if exp2 > 0:
            coefficient <<= exp2
        elif exp2 < 0:
            temp <<= -exp2

        if exp > 0 or exp2 < 0:
            coefficient = (coefficient + (temp >> 1)) // temp

        if negative:
            coefficient = -coefficient
        return cls(coefficient, exp)

    # -- components ---------------------------------------------------

    @property
    def coefficient(self) -> int:
        return self._value

    @property
    def exponent(self) -> int:
        return self._exp

    def _rescale(self, exp: int) -> "Decimal":
        """Return the same number at exponent ``exp``, truncating if it grows."""
        scale = 10 ** abs(exp - self._exp)
        value = self._value
        if exp > self._exp:
            value = _quo(value, scale)
        elif exp < self._exp:
            value *= scale
        return Decimal(value, exp)

    # -- arithmetic ---------------------------------------------------

    def abs(self) -> "Decimal":
        return Decimal(abs(self._value), self._exp)

    def add(self, other: "Decimal") -> "Decimal":
        base = min(self._exp, other._exp)
        return Decimal(self._rescale(base)._value + other._rescale(base)._value, base)

    def sub(self, other: "Decimal") -> "Decimal":
        base = min(self._exp, other._exp)
        return Decimal(self._rescale(base)._value - other._rescale(base)._value, base)

    def neg(self) -> "Decimal":
        return Decimal(-self._value, self._exp)

    def mul(self, other: "Decimal") -> "Decimal":
        exp = self._exp + other._exp
        if not _INT32_MIN <= exp <= _INT32_MAX:
            raise OverflowError(f"exponent {exp} overflows an int32!")
        return Decimal(self._value * other._value, exp)

    def shift(self, shift: int) -> "Decimal":
        """Shift by powers of ten: ``shift`` is added to the exponent."""
        return Decimal(self._value, self._exp + shift)

    def div(self, other: "Decimal") -> "Decimal":
        """Divide, rounding to ``DIVISION_PRECISION`` fractional digits."""
        return self.div_round(other, DIVISION_PRECISION)

    def quo_rem(self, other: "Decimal", precision: int) -> tuple["Decimal", "Decimal"]:
        """Return ``(q, r)`` with ``self == other * q + r`` and ``q`` a multiple of ``10**-precision``."""
        if other._value == 0:
            raise ZeroDivisionError("decimal division by 0")
        scale = -precision
        e = self._exp - other._exp - scale
        if not _INT32_MIN <= e <= _INT32_MAX:
            raise OverflowError("overflow in decimal QuoRem")
        if e < 0:
            aa = self._value
            bb = other._value * 10 ** (-e)
            scale_rest = self._exp
        else:
            aa = self._value * 10**e
            bb = other._value
            scale_rest = scale + other._exp
        q = _quo(aa, bb)
        r = aa - bb * q
        return Decimal(q, scale), Decimal(r, scale_rest)

    def div_round(self, other: "Decimal", precision: int) -> "Decimal":
        """Divide and round half away from zero to ``precision`` fractional digits."""
        q, r = self.quo_rem(other, precision)
        doubled = Decimal(abs(r._value) * 2, r._exp + precision)
        if doubled.cmp(other.abs()) < 0:
            return q
        step = Decimal(1, -precision)
        if self.sign() * other.sign() < 0:
            return q.sub(step)
        return q.add(step)

    def mod(self, other: "Decimal") -> "Decimal":
        quotient = self.div(other).truncate(0)
        return self.sub(other.mul(quotient))

    def pow(self, other: "Decimal") -> "Decimal":
        """Raise to the integer part of ``other``."""
        power = other.int_part()
        if power == 0:
            return Decimal.from_float(1)
        temp = self.pow(other.div(Decimal.from_float(2)))
        if power % 2 == 0:
            return temp.mul(temp)
        if power > 0:
            return temp.mul(temp).mul(self)
        return temp.mul(temp).div(self)

    # -- comparison ---------------------------------------------------

    def cmp(self, other: "Decimal") -> int:
        """Return -1, 0 or 1 as ``self`` is less than, equal to or greater than ``other``."""
        if self._exp == other._exp:
            a, b = self._value, other._value
        else:
            base = min(self._exp, other._exp)
            a, b = self._rescale(base)._value, other._rescale(base)._value
        return (a > b) - (a < b)

    def sign(self) -> int:
        return (self._value > 0) - (self._value < 0)

    # -- conversion ---------------------------------------------------

    def int_part(self) -> int:
        """Return the integer part, truncated toward zero."""
        return self._rescale(0)._value

    def to_fraction(self) -> Fraction:
        if self._exp <= 0:
            return Fraction(self._value, 10 ** (-self._exp))
        return Fraction(self._value * 10**self._exp)

    def to_float(self) -> float:
        """Return the nearest float."""
        return float(self.to_fraction())

    # -- rounding -----------------------------------------------------

    def round(self, places: int) -> "Decimal":
        """Round half away from zero to ``places`` fractional digits (negative rounds tens)."""
        truncated = self._rescale(-places - 1)
        value = truncated._value
        value = value - 5 if value < 0 else value + 5
        quotient, remainder = divmod(value, 10)
        if quotient < 0 and remainder != 0:
            quotient += 1
        return Decimal(quotient, truncated._exp + 1)

    def round_bank(self, places: int) -> "Decimal":
        """Round half to even to ``places`` fractional digits."""
        rounded = self.round(places)
        remainder = self.sub(rounded).abs()
        half = Decimal(5, -places - 1)
        if remainder.cmp(half) == 0 and rounded._value & 1:
            step = 1 if rounded._value < 0 else -1
            return Decimal(rounded._value + step, rounded._exp)
        return rounded

    def round_cash(self, interval: int) -> "Decimal":
        """Cash rounding to an interval of 5, 10, 15, 25, 50 or 100 cents."""
        if interval not in _CASH_FACTORS:
            raise ValueError(
                f"Decimal does not support this Cash rounding interval `{interval}`. "
                "Supported: 5, 10, 15, 25, 50, 100"
            )
        d = self
        if interval == 15 and d._exp < 0:
            org_exp = d._exp
            # The step is 10 XOR -exp, kept as-is for compatibility.
            one = Decimal(10 ^ -org_exp, org_exp)
            if Decimal(d._value, 0).mod(Decimal(5, 0)).cmp(ZERO) == 0:
                d = Decimal(d._value, org_exp).sub(one)
        factor = Decimal(_CASH_FACTORS[interval], 0)
        return d.mul(factor).round(0).div(factor).truncate(2)

    def floor(self) -> "Decimal":
        if self._exp >= 0:
            return self
        return Decimal(self._value // 10 ** (-self._exp), 0)

    def ceil(self) -> "Decimal":
        if self._exp >= 0:
            return self
        return Decimal(-(-self._value // 10 ** (-self._exp)), 0)

    def truncate(self, precision: int) -> "Decimal":
        """Drop digits beyond ``precision`` fractional places without rounding."""
        if precision >= 0 and -precision > self._exp:
            return self._rescale(-precision)
        return self

    # -- text ---------------------------------------------------------

    def _string(self, trim_trailing_zeros: bool) -> str:
        if self._exp >= 0:
            return str(self._rescale(0)._value)
        digits = str(abs(self._value))
        places = -self._exp
        if len(digits) > places:
            int_part = digits[: len(digits) - places]
            fraction = digits[len(digits) - places :]
        else:
            int_part = "0"
            fraction = "0" * (places - len(digits)) + digits
        if trim_trailing_zeros:
            fraction = fraction.rstrip("0")
        number = int_part + ("." + fraction if fraction else "")
        return "-" + number if self._value < 0 else number

    def string_fixed(self, places: int) -> str:
        return self.round(places)._string(False)

    def string_fixed_bank(self, places: int) -> str:
        return self.round_bank(places)._string(False)

    def string_fixed_cash(self, interval: int) -> str:
        return self.round_cash(interval)._string(False)

    def string_scaled(self, exp: int) -> str:
        """Rescale (truncating) to ``exp`` and render."""
        return str(self._rescale(exp))

    def __str__(self) -> str:
        return self._string(True)

    def __repr__(self) -> str:
        return f"Decimal({self._value}, {self._exp})"

    # -- Python protocols ---------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) == 0

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) < 0

    def __hash__(self) -> int:
        return hash(self.to_fraction())

    def __add__(self, other: "Decimal") -> "Decimal":
        return self.add(other)

    def __sub__(self, other: "Decimal") -> "Decimal":
        return self.sub(other)

    def __mul__(self, other: "Decimal") -> "Decimal":
        return self.mul(other)

    def __truediv__(self, other: "Decimal") -> "Decimal":
        return self.div(other)

    def __mod__(self, other: "Decimal") -> "Decimal":
        return self.mod(other)

    def __neg__(self) -> "Decimal":
        return self.neg()

    def __abs__(self) -> "Decimal":
        return self.abs()


ZERO = Decimal(0, 1)


def require_from_string(value: str) -> Decimal:
    """Parse ``value``; raises ValueError when it is not a decimal."""
    return Decimal.from_string(value)