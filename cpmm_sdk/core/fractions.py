"""
Exact rational arithmetic for amounts, prices and percentages.

All value-bearing math runs on Python ints. Fractions are never reduced on
arithmetic; comparisons cross-multiply. `decimal` only appears at the display
boundary (`to_significant`).

Algorithm Design:
- Type: Unreduced rational arithmetic over unbounded integers
- Time Complexity: O(1) big-int operations per arithmetic call
- Invariant: denominator != 0 for every constructed value
"""

from __future__ import annotations

import decimal
import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import ValidationError, require


# Basis-point denominator used for fee-on-transfer taxes.
BPS_DENOM = 10_000


class Rounding(Enum):
    ROUND_DOWN = "ROUND_DOWN"
    ROUND_HALF_UP = "ROUND_HALF_UP"
    ROUND_UP = "ROUND_UP"


_DECIMAL_ROUNDING = {
    Rounding.ROUND_DOWN: decimal.ROUND_DOWN,
    Rounding.ROUND_HALF_UP: decimal.ROUND_HALF_UP,
    Rounding.ROUND_UP: decimal.ROUND_UP,
}


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _group_digits(int_part: str, group_separator: str) -> str:
    if not group_separator or len(int_part) <= 3:
        return int_part
    head = len(int_part) % 3 or 3
    groups = [int_part[:head]]
    groups.extend(int_part[i : i + 3] for i in range(head, len(int_part), 3))
    return group_separator.join(groups)


def _render(negative: bool, digits: str, places: int, group_separator: str) -> str:
    """Render an integer coefficient scaled by 10**-places as plain decimal text."""
    if places > 0:
        digits = digits.rjust(places + 1, "0")
        int_part, frac_part = digits[:-places], digits[-places:]
    else:
        int_part, frac_part = digits, ""
    text = _group_digits(int_part, group_separator)
    if frac_part:
        text = f"{text}.{frac_part}"
    return f"-{text}" if negative else text


def format_significant(
    numerator: int,
    denominator: int,
    significant_digits: int,
    rounding: Rounding = Rounding.ROUND_HALF_UP,
    group_separator: str = "",
) -> str:
    """
    Format numerator/denominator to `significant_digits` significant digits.

    The division is first rounded to one extra digit and then to the requested
    precision, both with `rounding`. Trailing zeros are dropped and exponent
    notation is never used.
    """
    if not _is_int(significant_digits) or significant_digits <= 0:
        raise ValidationError(f"significant_digits must be a positive int: {significant_digits!r}")
    mode = _DECIMAL_ROUNDING[rounding]
    with decimal.localcontext() as ctx:
        ctx.rounding = mode
        ctx.prec = significant_digits + 1
        value = decimal.Decimal(numerator) / decimal.Decimal(denominator)
        ctx.prec = significant_digits
        value = (+value).normalize()
    if value.is_zero():
        return "0"
    sign, coefficient, exponent = value.as_tuple()
    digits = "".join(str(d) for d in coefficient)
    if exponent >= 0:
        return _render(bool(sign), digits + "0" * exponent, 0, group_separator)
    return _render(bool(sign), digits, -exponent, group_separator)


def format_fixed(
    numerator: int,
    denominator: int,
    decimal_places: int,
    rounding: Rounding = Rounding.ROUND_HALF_UP,
    group_separator: str = "",
) -> str:
    """Format numerator/denominator with exactly `decimal_places` decimals."""
    if not _is_int(decimal_places) or decimal_places < 0:
        raise ValidationError(f"decimal_places must be a non-negative int: {decimal_places!r}")
    negative = (numerator < 0) != (denominator < 0)
    den = abs(denominator)
    q, r = divmod(abs(numerator) * 10**decimal_places, den)
    if r:
        if rounding is Rounding.ROUND_UP:
            q += 1
        elif rounding is Rounding.ROUND_HALF_UP and 2 * r >= den:
            q += 1
    return _render(negative and q != 0, str(q), decimal_places, group_separator)


def format_exact(raw: int, decimals: int, group_separator: str = "") -> str:
    """Format an integer raw amount scaled down by 10**decimals with minimal digits."""
    text = _render(raw < 0, str(abs(raw)), decimals, group_separator)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True, eq=False)
class Fraction:
    """
    Unreduced rational number.

    Construct with `Fraction(n, d)`, `Fraction.from_int`, `Fraction.from_string`
    or `Fraction.from_fraction`. Arithmetic accepts ints or any value exposing
    an `as_fraction` property (Percent, CurrencyAmount, Price).
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        if not _is_int(self.numerator):
            raise ValidationError(f"numerator must be an int: {self.numerator!r}")
        if not _is_int(self.denominator):
            raise ValidationError(f"denominator must be an int: {self.denominator!r}")
        require(self.denominator != 0, "ZERO_DENOMINATOR")

    @classmethod
    def from_int(cls, value: int) -> "Fraction":
        return cls(value, 1)

    @classmethod
    def from_string(cls, text: str) -> "Fraction":
        """Parse ``"123"`` or ``"123/456"``."""
        if not isinstance(text, str):
            raise ValidationError(f"expected a string, got {type(text).__name__}")
        num_text, sep, den_text = text.strip().partition("/")
        try:
            numerator = int(num_text.strip())
            denominator = int(den_text.strip()) if sep else 1
        except ValueError as exc:
            raise ValidationError(f"invalid fraction literal: {text!r}") from exc
        return cls(numerator, denominator)

    @classmethod
    def from_fraction(cls, value: "FractionLike") -> "Fraction":
        f = _coerce(value)
        return cls(f.numerator, f.denominator)

    @property
    def as_fraction(self) -> "Fraction":
        return self

    @property
    def quotient(self) -> int:
        """Integer part, truncated toward zero."""
        q = abs(self.numerator) // abs(self.denominator)
        return -q if (self.numerator < 0) != (self.denominator < 0) else q

    @property
    def remainder(self) -> "Fraction":
        return Fraction(self.numerator - self.quotient * self.denominator, self.denominator)

    def reduced(self) -> "Fraction":
        """Lowest terms with a positive denominator (display and hashing only)."""
        n, d = self.numerator, self.denominator
        if d < 0:
            n, d = -n, -d
        g = _gcd(n, d)
        return Fraction(n // g, d // g)

    def invert(self) -> "Fraction":
        return Fraction(self.denominator, self.numerator)

    def add(self, other: "FractionLike") -> "Fraction":
        o = _coerce(other)
        if self.denominator == o.denominator:
            return Fraction(self.numerator + o.numerator, self.denominator)
        return Fraction(
            self.numerator * o.denominator + o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def subtract(self, other: "FractionLike") -> "Fraction":
        o = _coerce(other)
        if self.denominator == o.denominator:
            return Fraction(self.numerator - o.numerator, self.denominator)
        return Fraction(
            self.numerator * o.denominator - o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def multiply(self, other: "FractionLike") -> "Fraction":
        o = _coerce(other)
        return Fraction(self.numerator * o.numerator, self.denominator * o.denominator)

    def divide(self, other: "FractionLike") -> "Fraction":
        o = _coerce(other)
        return Fraction(self.numerator * o.denominator, self.denominator * o.numerator)

    def _compare(self, other: "FractionLike") -> int:
        o = _coerce(other)
        diff = self.numerator * o.denominator - o.numerator * self.denominator
        if self.denominator * o.denominator < 0:
            diff = -diff
        return (diff > 0) - (diff < 0)

    def less_than(self, other: "FractionLike") -> bool:
        return self._compare(other) < 0

    def equal_to(self, other: "FractionLike") -> bool:
        return self._compare(other) == 0

    def greater_than(self, other: "FractionLike") -> bool:
        return self._compare(other) > 0

    def to_significant(
        self,
        significant_digits: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
        group_separator: str = "",
    ) -> str:
        return format_significant(self.numerator, self.denominator, significant_digits, rounding, group_separator)

    def to_fixed(
        self,
        decimal_places: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
        group_separator: str = "",
    ) -> str:
        return format_fixed(self.numerator, self.denominator, decimal_places, rounding, group_separator)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fraction) or _is_int(other):
            return self._compare(other) == 0  # type: ignore[arg-type]
        return NotImplemented

    def __hash__(self) -> int:
        r = self.reduced()
        if r.denominator == 1:
            return hash(r.numerator)
        return hash((r.numerator, r.denominator))

    def __lt__(self, other: "FractionLike") -> bool:
        return self._compare(other) < 0

    def __le__(self, other: "FractionLike") -> bool:
        return self._compare(other) <= 0

    def __gt__(self, other: "FractionLike") -> bool:
        return self._compare(other) > 0

    def __ge__(self, other: "FractionLike") -> bool:
        return self._compare(other) >= 0

    def __add__(self, other: "FractionLike") -> "Fraction":
        return self.add(other)

    def __sub__(self, other: "FractionLike") -> "Fraction":
        return self.subtract(other)

    def __mul__(self, other: "FractionLike") -> "Fraction":
        return self.multiply(other)

    def __truediv__(self, other: "FractionLike") -> "Fraction":
        return self.divide(other)


FractionLike = Union[int, Fraction, "Percent"]


def _gcd(a: int, b: int) -> int:
    g = math.gcd(a, b)
    return g if g else 1


def _coerce(value: object) -> Fraction:
    if _is_int(value):
        return Fraction(value, 1)  # type: ignore[arg-type]
    as_fraction = getattr(value, "as_fraction", None)
    if isinstance(as_fraction, Fraction):
        return as_fraction
    raise TypeError(f"cannot use {type(value).__name__} as a fraction")


class Percent:
    """
    A fraction read as a percentage.

    Arithmetic keeps the Percent type; display multiplies by 100.
    """

    __slots__ = ("_fraction",)

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        self._fraction = Fraction(numerator, denominator)

    @classmethod
    def from_fraction(cls, value: FractionLike) -> "Percent":
        f = _coerce(value)
        return cls(f.numerator, f.denominator)

    @property
    def numerator(self) -> int:
        return self._fraction.numerator

    @property
    def denominator(self) -> int:
        return self._fraction.denominator

    @property
    def as_fraction(self) -> Fraction:
        return self._fraction

    @property
    def quotient(self) -> int:
        return self._fraction.quotient

    def add(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(self._fraction.add(other))

    def subtract(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(self._fraction.subtract(other))

    def multiply(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(self._fraction.multiply(other))

    def divide(self, other: FractionLike) -> "Percent":
        return Percent.from_fraction(self._fraction.divide(other))

    def less_than(self, other: FractionLike) -> bool:
        return self._fraction.less_than(other)

    def equal_to(self, other: FractionLike) -> bool:
        return self._fraction.equal_to(other)

    def greater_than(self, other: FractionLike) -> bool:
        return self._fraction.greater_than(other)

    def to_significant(
        self,
        significant_digits: int = 5,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
        group_separator: str = "",
    ) -> str:
        return self._fraction.multiply(100).to_significant(significant_digits, rounding, group_separator)

    def to_fixed(
        self,
        decimal_places: int = 2,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
        group_separator: str = "",
    ) -> str:
        return self._fraction.multiply(100).to_fixed(decimal_places, rounding, group_separator)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Percent, Fraction)) or _is_int(other):
            return self._fraction.equal_to(other)  # type: ignore[arg-type]
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._fraction)

    def __lt__(self, other: FractionLike) -> bool:
        return self._fraction.less_than(other)

    def __le__(self, other: FractionLike) -> bool:
        return not self._fraction.greater_than(other)

    def __gt__(self, other: FractionLike) -> bool:
        return self._fraction.greater_than(other)

    def __ge__(self, other: FractionLike) -> bool:
        return not self._fraction.less_than(other)

    def __repr__(self) -> str:
        return f"Percent({self.numerator}, {self.denominator})"


ZERO_PERCENT = Percent(0)
ONE_HUNDRED_PERCENT = Percent(1)
