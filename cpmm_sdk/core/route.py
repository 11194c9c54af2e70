"""
Ordered chain of pairs from an input currency to an output currency.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..state.currency import Currency, Token
from .errors import require
from .pair import Pair
from .price import Price


class Route:
    __slots__ = ("pairs", "path", "input", "output", "_mid_price")

    def __init__(self, pairs: Sequence[Pair], input: Currency, output: Optional[Currency] = None) -> None:
        require(len(pairs) > 0, "PAIRS")
        chain_id = pairs[0].chain_id
        require(all(pair.chain_id == chain_id for pair in pairs), "CHAIN_IDS")

        wrapped_input = input.wrapped
        require(pairs[0].involves_token(wrapped_input), "INPUT")
        require(output is None or pairs[-1].involves_token(output.wrapped), "OUTPUT")

        path = [wrapped_input]
        for i, pair in enumerate(pairs):
            current = path[i]
            require(current.equals(pair.token0) or current.equals(pair.token1), "PATH")
            path.append(pair.token1 if current.equals(pair.token0) else pair.token0)

        self.pairs: Tuple[Pair, ...] = tuple(pairs)
        self.path: Tuple[Token, ...] = tuple(path)
        self.input = input
        self.output = output if output is not None else path[-1]
        self._mid_price: Optional[Price] = None

    @property
    def chain_id(self) -> int:
        return self.pairs[0].chain_id

    @property
    def mid_price(self) -> Price:
        """Product of each hop's spot price, expressed from `input` to `output`."""
        if self._mid_price is not None:
            return self._mid_price
        prices = []
        for i, pair in enumerate(self.pairs):
            if self.path[i].equals(pair.token0):
                prices.append(pair.token0_price)
            else:
                prices.append(pair.token1_price)
        reduced = prices[0]
        for price in prices[1:]:
            reduced = reduced.multiply(price)
        self._mid_price = Price(self.input, self.output, reduced.denominator, reduced.numerator)
        return self._mid_price

    def __repr__(self) -> str:
        symbols = " -> ".join(token.symbol or token.address for token in self.path)
        return f"Route({symbols})"
