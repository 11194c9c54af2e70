"""
Currency-scoped amounts.

A `CurrencyAmount` is a raw (smallest-unit) rational quantity of one currency.
Arithmetic between two amounts requires the same currency; scaling by a plain
fraction keeps the currency.
"""

from __future__ import annotations

from typing import Optional

from ..state.currency import Currency
from .errors import require
from .fractions import Fraction, FractionLike, Rounding, format_exact


# Largest raw amount a settlement contract can hold.
MAX_UINT256 = (1 << 256) - 1


class CurrencyAmount:
    __slots__ = ("_currency", "_fraction", "_decimal_scale")

    def __init__(self, currency: Currency, numerator: int, denominator: int = 1) -> None:
        fraction = Fraction(numerator, denominator)
        require(fraction.quotient <= MAX_UINT256, "AMOUNT")
        self._currency = currency
        self._fraction = fraction
        self._decimal_scale = 10**currency.decimals

    @classmethod
    def from_raw_amount(cls, currency: Currency, raw_amount: int) -> "CurrencyAmount":
        return cls(currency, raw_amount)

    @classmethod
    def from_fractional_amount(cls, currency: Currency, numerator: int, denominator: int) -> "CurrencyAmount":
        return cls(currency, numerator, denominator)

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def numerator(self) -> int:
        return self._fraction.numerator

    @property
    def denominator(self) -> int:
        return self._fraction.denominator

    @property
    def decimal_scale(self) -> int:
        return self._decimal_scale

    @property
    def as_fraction(self) -> Fraction:
        return self._fraction

    @property
    def quotient(self) -> int:
        return self._fraction.quotient

    @property
    def wrapped(self) -> "CurrencyAmount":
        if not self._currency.is_native:
            return self
        return CurrencyAmount(self._currency.wrapped, self.numerator, self.denominator)

    def _rewrap(self, fraction: Fraction) -> "CurrencyAmount":
        return CurrencyAmount(self._currency, fraction.numerator, fraction.denominator)

    def add(self, other: "CurrencyAmount") -> "CurrencyAmount":
        require(self._currency.equals(other.currency), "CURRENCY")
        return self._rewrap(self._fraction.add(other.as_fraction))

    def subtract(self, other: "CurrencyAmount") -> "CurrencyAmount":
        require(self._currency.equals(other.currency), "CURRENCY")
        return self._rewrap(self._fraction.subtract(other.as_fraction))

    def multiply(self, other: FractionLike) -> "CurrencyAmount":
        return self._rewrap(self._fraction.multiply(other))

    def divide(self, other: FractionLike) -> "CurrencyAmount":
        return self._rewrap(self._fraction.divide(other))

    def less_than(self, other: FractionLike) -> bool:
        return self._fraction.less_than(other)

    def equal_to(self, other: FractionLike) -> bool:
        return self._fraction.equal_to(other)

    def greater_than(self, other: FractionLike) -> bool:
        return self._fraction.greater_than(other)

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_DOWN,
        group_separator: str = "",
    ) -> str:
        return self._fraction.divide(self._decimal_scale).to_significant(
            significant_digits, rounding, group_separator
        )

    def to_fixed(
        self,
        decimal_places: Optional[int] = None,
        rounding: Rounding = Rounding.ROUND_DOWN,
        group_separator: str = "",
    ) -> str:
        places = self._currency.decimals if decimal_places is None else decimal_places
        require(places <= self._currency.decimals, "DECIMALS")
        return self._fraction.divide(self._decimal_scale).to_fixed(places, rounding, group_separator)

    def to_exact(self, group_separator: str = "") -> str:
        """Floor of the raw amount, printed in whole units with no trailing zeros."""
        return format_exact(self.quotient, self._currency.decimals, group_separator)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CurrencyAmount):
            return self._currency.equals(other.currency) and self._fraction.equal_to(other.as_fraction)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._currency, self._fraction))

    def __lt__(self, other: FractionLike) -> bool:
        return self._fraction.less_than(other)

    def __le__(self, other: FractionLike) -> bool:
        return not self._fraction.greater_than(other)

    def __gt__(self, other: FractionLike) -> bool:
        return self._fraction.greater_than(other)

    def __ge__(self, other: FractionLike) -> bool:
        return not self._fraction.less_than(other)

    def __repr__(self) -> str:
        symbol = getattr(self._currency, "symbol", None) or "?"
        return f"CurrencyAmount({symbol}, {self.numerator}/{self.denominator})"
