"""
Prices between two currencies.

The stored ratio is raw quote units per raw base unit. Display values are
scaled by 10**(base.decimals - quote.decimals) via `adjusted_for_decimals`.
"""

from __future__ import annotations

from ..state.currency import Currency
from .amounts import CurrencyAmount
from .errors import require
from .fractions import Fraction, FractionLike, Rounding


class Price:
    __slots__ = ("_base", "_quote", "_fraction", "_scalar")

    def __init__(self, base_currency: Currency, quote_currency: Currency, denominator: int, numerator: int) -> None:
        self._base = base_currency
        self._quote = quote_currency
        self._fraction = Fraction(numerator, denominator)
        self._scalar = Fraction(10**base_currency.decimals, 10**quote_currency.decimals)

    @classmethod
    def from_amounts(cls, base_amount: CurrencyAmount, quote_amount: CurrencyAmount) -> "Price":
        result = quote_amount.as_fraction.divide(base_amount.as_fraction)
        return cls(base_amount.currency, quote_amount.currency, result.denominator, result.numerator)

    @property
    def base_currency(self) -> Currency:
        return self._base

    @property
    def quote_currency(self) -> Currency:
        return self._quote

    @property
    def numerator(self) -> int:
        return self._fraction.numerator

    @property
    def denominator(self) -> int:
        return self._fraction.denominator

    @property
    def scalar(self) -> Fraction:
        return self._scalar

    @property
    def as_fraction(self) -> Fraction:
        return self._fraction

    @property
    def adjusted_for_decimals(self) -> Fraction:
        return self._fraction.multiply(self._scalar)

    def invert(self) -> "Price":
        return Price(self._quote, self._base, self.numerator, self.denominator)

    def multiply(self, other: "Price") -> "Price":
        """Compose base->quote with quote->other.quote."""
        require(self._quote.equals(other.base_currency), "TOKEN")
        fraction = self._fraction.multiply(other.as_fraction)
        return Price(self._base, other.quote_currency, fraction.denominator, fraction.numerator)

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency."""
        require(currency_amount.currency.equals(self._base), "TOKEN")
        result = self._fraction.multiply(currency_amount.as_fraction)
        return CurrencyAmount.from_fractional_amount(self._quote, result.numerator, result.denominator)

    def less_than(self, other: FractionLike) -> bool:
        return self._fraction.less_than(other)

    def equal_to(self, other: FractionLike) -> bool:
        return self._fraction.equal_to(other)

    def greater_than(self, other: FractionLike) -> bool:
        return self._fraction.greater_than(other)

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
        group_separator: str = "",
    ) -> str:
        return self.adjusted_for_decimals.to_significant(significant_digits, rounding, group_separator)

    def to_fixed(
        self,
        decimal_places: int = 4,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
        group_separator: str = "",
    ) -> str:
        return self.adjusted_for_decimals.to_fixed(decimal_places, rounding, group_separator)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Price):
            return (
                self._base.equals(other.base_currency)
                and self._quote.equals(other.quote_currency)
                and self._fraction.equal_to(other.as_fraction)
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._base, self._quote, self._fraction))

    def __repr__(self) -> str:
        return f"Price({self._base!r} -> {self._quote!r}, {self.numerator}/{self.denominator})"
