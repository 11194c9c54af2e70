"""
Constant Product Market Maker (CPMM) integer kernels.

Raw-integer form of the pool math used by `Pair` and by the liquidity helpers:
a 0.3% input fee (997/1000), floor rounding on outputs and floor+1 on inputs
so a pool is never undercharged.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap, O(n) per n-hop path
- Space Complexity: O(n) for path results
- Invariant: After each swap, x' * y' >= x * y
"""

import math
from typing import List, Sequence, Tuple

from ..state.canonical import sort_addresses
from .errors import require

# Liquidity permanently locked by the first mint.
MINIMUM_LIQUIDITY = 1000

FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000


def sort_tokens(token_a: str, token_b: str) -> Tuple[str, str]:
    """
    Return two token addresses in pool order (lower-cased comparison).

    Raises:
        ValidationError: IDENTICAL_ADDRESSES or ZERO_ADDRESS
    """
    return sort_addresses(token_a, token_b)


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Equivalent amount of the other asset at the current reserve ratio (no fee)."""
    require(amount_a > 0, "INSUFFICIENT_AMOUNT")
    require(reserve_a > 0 and reserve_b > 0, "INSUFFICIENT_LIQUIDITY")
    return amount_a * reserve_b // reserve_a


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    Output amount for an exact input.

        amount_out = floor(amount_in * 997 * reserve_out / (reserve_in * 1000 + amount_in * 997))

    Raises:
        ValidationError: INSUFFICIENT_INPUT_AMOUNT or INSUFFICIENT_LIQUIDITY
    """
    require(amount_in > 0, "INSUFFICIENT_INPUT_AMOUNT")
    require(reserve_in > 0 and reserve_out > 0, "INSUFFICIENT_LIQUIDITY")
    amount_in_with_fee = amount_in * FEE_NUMERATOR
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


def get_amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """
    Input amount required for an exact output.

        amount_in = floor(reserve_in * amount_out * 1000 / ((reserve_out - amount_out) * 997)) + 1

    Raises:
        ValidationError: INSUFFICIENT_OUTPUT_AMOUNT or INSUFFICIENT_LIQUIDITY
    """
    require(amount_out > 0, "INSUFFICIENT_OUTPUT_AMOUNT")
    require(reserve_in > 0 and reserve_out > 0, "INSUFFICIENT_LIQUIDITY")
    require(amount_out < reserve_out, "INSUFFICIENT_LIQUIDITY")
    numerator = reserve_in * amount_out * FEE_DENOMINATOR
    denominator = (reserve_out - amount_out) * FEE_NUMERATOR
    return numerator // denominator + 1


def get_amounts_out(amount_in: int, reserves: Sequence[Tuple[int, int]]) -> List[int]:
    """Chain `get_amount_out` over (reserve_in, reserve_out) hops; result[0] == amount_in."""
    require(len(reserves) >= 1, "INVALID_PATH")
    amounts = [amount_in]
    for reserve_in, reserve_out in reserves:
        amounts.append(get_amount_out(amounts[-1], reserve_in, reserve_out))
    return amounts


def get_amounts_in(amount_out: int, reserves: Sequence[Tuple[int, int]]) -> List[int]:
    """Chain `get_amount_in` backwards over hops; result[-1] == amount_out."""
    require(len(reserves) >= 1, "INVALID_PATH")
    amounts = [amount_out]
    for reserve_in, reserve_out in reversed(reserves):
        amounts.append(get_amount_in(amounts[-1], reserve_in, reserve_out))
    amounts.reverse()
    return amounts


def compute_liquidity_minted(
    reserve0: int,
    reserve1: int,
    amount0: int,
    amount1: int,
    total_supply: int,
) -> int:
    """
    LP tokens minted for a deposit. The result may be non-positive; callers decide
    how to reject it.

    For the first deposit (total_supply == 0):
        lp = isqrt(amount0 * amount1) - MINIMUM_LIQUIDITY

    For subsequent deposits:
        lp = min(amount0 * total_supply // reserve0, amount1 * total_supply // reserve1)
    """
    if total_supply == 0:
        return math.isqrt(amount0 * amount1) - MINIMUM_LIQUIDITY
    require(reserve0 > 0 and reserve1 > 0, "INSUFFICIENT_LIQUIDITY")
    lp0 = amount0 * total_supply // reserve0
    lp1 = amount1 * total_supply // reserve1
    return min(lp0, lp1)


def protocol_fee_liquidity(reserve0: int, reserve1: int, total_supply: int, k_last: int) -> int:
    """
    LP tokens the protocol mints on the next liquidity event when fees are on.

        root_k = isqrt(reserve0 * reserve1), root_k_last = isqrt(k_last)
        fee = total_supply * (root_k - root_k_last) // (5 * root_k + root_k_last)   if root_k > root_k_last
    """
    if k_last <= 0:
        return 0
    root_k = math.isqrt(reserve0 * reserve1)
    root_k_last = math.isqrt(k_last)
    if root_k <= root_k_last:
        return 0
    return total_supply * (root_k - root_k_last) // (root_k * 5 + root_k_last)
