"""
Trades along a route, plus the ranking helpers used by the best-trade search.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, List, Optional, TypeVar

from .amounts import CurrencyAmount
from .errors import require
from .fractions import Fraction, Percent
from .price import Price
from .route import Route


T = TypeVar("T")


class TradeType(IntEnum):
    EXACT_INPUT = 0
    EXACT_OUTPUT = 1


def compute_price_impact(mid_price: Price, input_amount: CurrencyAmount, output_amount: CurrencyAmount) -> Percent:
    """
    Relative shortfall of the realised output against the mid-price quote:

        (mid_price.quote(input) - output) / mid_price.quote(input)
    """
    quoted_output = mid_price.quote(input_amount)
    impact = quoted_output.subtract(output_amount).divide(quoted_output)
    return Percent(impact.numerator, impact.denominator)


def sorted_insert(items: List[T], add: T, max_size: int, comparator: Callable[[T, T], int]) -> Optional[T]:
    """
    Insert `add` into the sorted list `items`, keeping at most `max_size` entries.

    Returns the evicted item (or `add` itself if it did not make the cut), else None.
    A full list whose last entry already ranks at least as well as `add` is left
    untouched.
    """
    require(max_size > 0, "MAX_SIZE_ZERO")
    require(len(items) <= max_size, "ITEMS_SIZE")
    if not items:
        items.append(add)
        return None

    is_full = len(items) == max_size
    if is_full and comparator(items[-1], add) <= 0:
        return add

    lo, hi = 0, len(items)
    while lo < hi:
        mid = (lo + hi) >> 1
        if comparator(items[mid], add) <= 0:
            lo = mid + 1
        else:
            hi = mid
    items.insert(lo, add)
    return items.pop() if is_full else None


class Trade:
    """
    A swap along `route` for a fixed input (EXACT_INPUT) or fixed output (EXACT_OUTPUT).

    Amounts are computed hop by hop with fee-on-transfer taxes applied.
    """

    __slots__ = ("route", "trade_type", "input_amount", "output_amount", "execution_price", "price_impact")

    def __init__(self, route: Route, amount: CurrencyAmount, trade_type: TradeType) -> None:
        self.route = route
        self.trade_type = trade_type

        amounts: List[Optional[CurrencyAmount]] = [None] * len(route.path)
        if trade_type == TradeType.EXACT_INPUT:
            require(amount.currency.equals(route.input), "INPUT")
            amounts[0] = amount.wrapped
            for i, pair in enumerate(route.pairs):
                amounts[i + 1], _ = pair.get_output_amount(amounts[i])  # type: ignore[arg-type]
            final = amounts[-1]
            self.input_amount = CurrencyAmount.from_fractional_amount(route.input, amount.numerator, amount.denominator)
            self.output_amount = CurrencyAmount.from_fractional_amount(
                route.output, final.numerator, final.denominator  # type: ignore[union-attr]
            )
        else:
            require(amount.currency.equals(route.output), "OUTPUT")
            amounts[-1] = amount.wrapped
            for i in range(len(route.path) - 1, 0, -1):
                amounts[i - 1], _ = route.pairs[i - 1].get_input_amount(amounts[i])  # type: ignore[arg-type]
            first = amounts[0]
            self.input_amount = CurrencyAmount.from_fractional_amount(
                route.input, first.numerator, first.denominator  # type: ignore[union-attr]
            )
            self.output_amount = CurrencyAmount.from_fractional_amount(
                route.output, amount.numerator, amount.denominator
            )

        self.execution_price = Price(
            self.input_amount.currency,
            self.output_amount.currency,
            self.input_amount.quotient,
            self.output_amount.quotient,
        )
        self.price_impact = compute_price_impact(route.mid_price, self.input_amount, self.output_amount)

    @classmethod
    def exact_in(cls, route: Route, amount_in: CurrencyAmount) -> "Trade":
        return cls(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: CurrencyAmount) -> "Trade":
        return cls(route, amount_out, TradeType.EXACT_OUTPUT)

    def minimum_amount_out(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Least output accepted at `slippage_tolerance`: floor(output / (1 + slippage))."""
        require(not slippage_tolerance.less_than(0), "SLIPPAGE_TOLERANCE")
        if self.trade_type == TradeType.EXACT_OUTPUT:
            return self.output_amount
        adjusted = Fraction(1).add(slippage_tolerance).invert().multiply(self.output_amount.quotient).quotient
        return CurrencyAmount.from_raw_amount(self.output_amount.currency, adjusted)

    def maximum_amount_in(self, slippage_tolerance: Percent) -> CurrencyAmount:
        """Most input paid at `slippage_tolerance`: ceil(input * (1 + slippage))."""
        require(not slippage_tolerance.less_than(0), "SLIPPAGE_TOLERANCE")
        if self.trade_type == TradeType.EXACT_INPUT:
            return self.input_amount
        scaled = Fraction(1).add(slippage_tolerance).multiply(self.input_amount.quotient)
        adjusted = scaled.quotient
        if not scaled.remainder.equal_to(0):
            adjusted += 1
        return CurrencyAmount.from_raw_amount(self.input_amount.currency, adjusted)

    def worst_execution_price(self, slippage_tolerance: Percent) -> Price:
        return Price(
            self.input_amount.currency,
            self.output_amount.currency,
            self.maximum_amount_in(slippage_tolerance).quotient,
            self.minimum_amount_out(slippage_tolerance).quotient,
        )

    def __repr__(self) -> str:
        return (
            f"Trade({self.trade_type.name}, {self.route!r}, "
            f"in={self.input_amount!r}, out={self.output_amount!r})"
        )


def input_output_comparator(a: Trade, b: Trade) -> int:
    """Higher output first; on equal output, lower input first."""
    require(a.input_amount.currency.equals(b.input_amount.currency), "INPUT_CURRENCY")
    require(a.output_amount.currency.equals(b.output_amount.currency), "OUTPUT_CURRENCY")
    if a.output_amount.equal_to(b.output_amount):
        if a.input_amount.equal_to(b.input_amount):
            return 0
        return -1 if a.input_amount.less_than(b.input_amount) else 1
    return 1 if a.output_amount.less_than(b.output_amount) else -1


def trade_comparator(a: Trade, b: Trade) -> int:
    """`input_output_comparator`, then lower price impact, then fewer hops."""
    io = input_output_comparator(a, b)
    if io != 0:
        return io
    if a.price_impact.less_than(b.price_impact):
        return -1
    if a.price_impact.greater_than(b.price_impact):
        return 1
    return len(a.route.path) - len(b.route.path)
