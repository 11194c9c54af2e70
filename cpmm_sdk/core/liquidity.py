"""
Liquidity-position math on raw reserves: arbitrage to a true price and the
underlying value of LP tokens.

All inputs and outputs are raw integers. Square roots are exact (`math.isqrt`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .cpmm import FEE_DENOMINATOR, FEE_NUMERATOR, get_amount_out, protocol_fee_liquidity
from .errors import ValidationError, require


@dataclass(frozen=True)
class PairReserves:
    """
    Snapshot of a pair needed to value liquidity.

    Attributes:
        reserve_a: Reserve of token A
        reserve_b: Reserve of token B
        total_supply: Outstanding LP tokens
        k_last: reserve_a * reserve_b at the last liquidity event (0 if unknown)
        fee_on: Whether the protocol fee is switched on
    """

    reserve_a: int
    reserve_b: int
    total_supply: int
    k_last: int = 0
    fee_on: bool = False

    def __post_init__(self) -> None:
        for name in ("reserve_a", "reserve_b", "total_supply", "k_last"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValidationError(f"{name} must be a non-negative int: {value!r}")


def compute_profit_maximizing_trade(
    true_price_token_a: int,
    true_price_token_b: int,
    reserve_a: int,
    reserve_b: int,
) -> Tuple[bool, int]:
    """
    Direction and size of the swap that moves the pool to the true price.

    The pool price (reserve_b * true_a / reserve_a, floored) is compared with
    true_b; selling A is profitable when the pool overvalues A.

        left  = isqrt(k * 1000 * p_in / (p_out * 997))
        right = reserve_in * 1000 / 997
        amount_in = left - right

    Returns:
        (a_to_b, amount_in); (False, 0) when the pool already sits at the true
        price or the fee makes any trade unprofitable

    Raises:
        ValidationError: INVALID_PRICES or INSUFFICIENT_RESERVES
    """
    require(true_price_token_a > 0 and true_price_token_b > 0, "INVALID_PRICES")
    require(reserve_a > 0 and reserve_b > 0, "INSUFFICIENT_RESERVES")

    current_price = reserve_b * true_price_token_a // reserve_a
    if current_price == true_price_token_b:
        return False, 0
    a_to_b = current_price > true_price_token_b

    k = reserve_a * reserve_b
    price_in, price_out = (
        (true_price_token_a, true_price_token_b) if a_to_b else (true_price_token_b, true_price_token_a)
    )
    left_side = math.isqrt(k * FEE_DENOMINATOR * price_in // (price_out * FEE_NUMERATOR))
    right_side = (reserve_a if a_to_b else reserve_b) * FEE_DENOMINATOR // FEE_NUMERATOR
    if left_side < right_side:
        return False, 0
    return a_to_b, left_side - right_side


def get_reserves_after_arbitrage(
    reserve_a: int,
    reserve_b: int,
    true_price_token_a: int,
    true_price_token_b: int,
) -> Tuple[int, int]:
    """Reserves once an arbitrageur has executed the profit-maximizing trade."""
    require(reserve_a > 0 and reserve_b > 0, "ZERO_PAIR_RESERVES")
    a_to_b, amount_in = compute_profit_maximizing_trade(true_price_token_a, true_price_token_b, reserve_a, reserve_b)
    if amount_in == 0:
        return reserve_a, reserve_b
    if a_to_b:
        amount_out = get_amount_out(amount_in, reserve_a, reserve_b)
        return reserve_a + amount_in, reserve_b - amount_out
    amount_out = get_amount_out(amount_in, reserve_b, reserve_a)
    return reserve_a - amount_out, reserve_b + amount_in


def compute_liquidity_value(
    reserves_a: int,
    reserves_b: int,
    total_supply: int,
    liquidity_amount: int,
    fee_on: bool,
    k_last: int,
) -> Tuple[int, int]:
    """
    Token amounts redeemable for `liquidity_amount` LP tokens.

    With `fee_on` and a positive `k_last`, the supply first grows by the
    protocol-fee mint accrued since `k_last`.
    """
    require(total_supply > 0, "TOTAL_SUPPLY")
    adjusted_total_supply = total_supply
    if fee_on:
        adjusted_total_supply += protocol_fee_liquidity(reserves_a, reserves_b, total_supply, k_last)
    return (
        reserves_a * liquidity_amount // adjusted_total_supply,
        reserves_b * liquidity_amount // adjusted_total_supply,
    )


def get_liquidity_value(pair_reserves: PairReserves, liquidity_amount: int) -> Tuple[int, int]:
    return compute_liquidity_value(
        pair_reserves.reserve_a,
        pair_reserves.reserve_b,
        pair_reserves.total_supply,
        liquidity_amount,
        pair_reserves.fee_on,
        pair_reserves.k_last,
    )


def get_liquidity_value_after_arbitrage_to_price(
    pair_reserves: PairReserves,
    true_price_token_a: int,
    true_price_token_b: int,
    liquidity_amount: int,
) -> Tuple[int, int]:
    """Value of `liquidity_amount` once the pair has been arbitraged to the true price."""
    require(0 < liquidity_amount <= pair_reserves.total_supply, "INVALID_LIQUIDITY_AMOUNT")
    reserves_a, reserves_b = get_reserves_after_arbitrage(
        pair_reserves.reserve_a,
        pair_reserves.reserve_b,
        true_price_token_a,
        true_price_token_b,
    )
    return compute_liquidity_value(
        reserves_a,
        reserves_b,
        pair_reserves.total_supply,
        liquidity_amount,
        pair_reserves.fee_on,
        pair_reserves.k_last,
    )
