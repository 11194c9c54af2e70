"""
Best-trade search over a set of pairs.

Bounded depth-first search:
- Frontier: the amount currently held after the hops taken so far.
- Candidates: every unused pair touching the frontier currency with non-zero reserves,
  visited in the caller's pair order.
- A hop that cannot be filled (zero output, reserves too small) prunes the branch.
- A hop landing on the target currency materialises a full `Trade` and is ranked
  into a capped list with `trade_comparator`.
- Otherwise the search recurses with the pair marked used, while hops and at least
  two unused pairs remain.

Used pairs are tracked in an int bitmask passed by value, so siblings never see
each other's exclusions and no pair list is copied per level.

Determinism:
- Identical inputs always yield the identical ranked list; ties fall back to
  price impact and then hop count.

Complexity:
- Time: O(P^H) hop evaluations in the worst case (P pairs, H = max_hops).
- Space: O(H) recursion depth plus the result list.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..state.currency import Currency
from .amounts import CurrencyAmount
from .errors import InsufficientInputAmountError, InsufficientReservesError, require
from .pair import Pair
from .route import Route
from .trade import Trade, TradeType, sorted_insert, trade_comparator

logger = logging.getLogger(__name__)

DEFAULT_MAX_NUM_RESULTS = 3
DEFAULT_MAX_HOPS = 3


def _check_params(pairs: Sequence[Pair], max_num_results: int, max_hops: int) -> None:
    require(len(pairs) > 0, "PAIRS")
    require(max_hops > 0, "MAX_HOPS")
    require(max_num_results > 0, "MAX_SIZE_ZERO")


def _is_tradable(pair: Pair, currency: Currency) -> bool:
    if not (pair.token0.equals(currency) or pair.token1.equals(currency)):
        return False
    return not (pair.reserve0.equal_to(0) or pair.reserve1.equal_to(0))


def best_trade_exact_in(
    pairs: Sequence[Pair],
    currency_amount_in: CurrencyAmount,
    currency_out: Currency,
    max_num_results: int = DEFAULT_MAX_NUM_RESULTS,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> List[Trade]:
    """
    Best exact-input trades from `currency_amount_in` to `currency_out`.

    Args:
        pairs: Candidate pairs; their order fixes exploration order
        currency_amount_in: Amount to sell
        currency_out: Currency to receive
        max_num_results: Cap on returned trades
        max_hops: Maximum route length

    Returns:
        Up to `max_num_results` trades, best first

    Raises:
        ValidationError: PAIRS, MAX_HOPS or MAX_SIZE_ZERO
    """
    _check_params(pairs, max_num_results, max_hops)
    pairs = tuple(pairs)
    best: List[Trade] = []
    _search_exact_in(
        pairs,
        currency_amount_in,
        currency_out.wrapped,
        currency_out,
        max_num_results,
        max_hops,
        used=0,
        current_pairs=(),
        next_amount_in=currency_amount_in.wrapped,
        best=best,
    )
    return best


def _search_exact_in(
    pairs: Tuple[Pair, ...],
    currency_amount_in: CurrencyAmount,
    token_out: Currency,
    currency_out: Currency,
    max_num_results: int,
    hops_left: int,
    *,
    used: int,
    current_pairs: Tuple[Pair, ...],
    next_amount_in: CurrencyAmount,
    best: List[Trade],
) -> None:
    remaining = len(pairs) - bin(used).count("1")
    for i, pair in enumerate(pairs):
        if used & (1 << i) or not _is_tradable(pair, next_amount_in.currency):
            continue
        try:
            amount_out, _ = pair.get_output_amount(next_amount_in)
        except (InsufficientInputAmountError, InsufficientReservesError) as exc:
            logger.debug("prune exact-in hop %d via %r: %s", len(current_pairs), pair, exc)
            continue

        if amount_out.currency.equals(token_out):
            trade = Trade(
                Route(current_pairs + (pair,), currency_amount_in.currency, currency_out),
                currency_amount_in,
                TradeType.EXACT_INPUT,
            )
            rejected = sorted_insert(best, trade, max_num_results, trade_comparator)
            if rejected is not trade:
                logger.debug("ranked exact-in candidate %r", trade)
        elif hops_left > 1 and remaining > 1:
            _search_exact_in(
                pairs,
                currency_amount_in,
                token_out,
                currency_out,
                max_num_results,
                hops_left - 1,
                used=used | (1 << i),
                current_pairs=current_pairs + (pair,),
                next_amount_in=amount_out,
                best=best,
            )


def best_trade_exact_out(
    pairs: Sequence[Pair],
    currency_in: Currency,
    currency_amount_out: CurrencyAmount,
    max_num_results: int = DEFAULT_MAX_NUM_RESULTS,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> List[Trade]:
    """
    Best exact-output trades paying `currency_in` to receive `currency_amount_out`.

    Mirrors `best_trade_exact_in`, walking backwards from the output with
    `Pair.get_input_amount` and prepending pairs to the route.
    """
    _check_params(pairs, max_num_results, max_hops)
    pairs = tuple(pairs)
    best: List[Trade] = []
    _search_exact_out(
        pairs,
        currency_in,
        currency_in.wrapped,
        currency_amount_out,
        max_num_results,
        max_hops,
        used=0,
        current_pairs=(),
        next_amount_out=currency_amount_out.wrapped,
        best=best,
    )
    return best


def _search_exact_out(
    pairs: Tuple[Pair, ...],
    currency_in: Currency,
    token_in: Currency,
    currency_amount_out: CurrencyAmount,
    max_num_results: int,
    hops_left: int,
    *,
    used: int,
    current_pairs: Tuple[Pair, ...],
    next_amount_out: CurrencyAmount,
    best: List[Trade],
) -> None:
    remaining = len(pairs) - bin(used).count("1")
    for i, pair in enumerate(pairs):
        if used & (1 << i) or not _is_tradable(pair, next_amount_out.currency):
            continue
        try:
            amount_in, _ = pair.get_input_amount(next_amount_out)
        except (InsufficientInputAmountError, InsufficientReservesError) as exc:
            logger.debug("prune exact-out hop %d via %r: %s", len(current_pairs), pair, exc)
            continue

        if amount_in.currency.equals(token_in):
            trade = Trade(
                Route((pair,) + current_pairs, currency_in, currency_amount_out.currency),
                currency_amount_out,
                TradeType.EXACT_OUTPUT,
            )
            rejected = sorted_insert(best, trade, max_num_results, trade_comparator)
            if rejected is not trade:
                logger.debug("ranked exact-out candidate %r", trade)
        elif hops_left > 1 and remaining > 1:
            _search_exact_out(
                pairs,
                currency_in,
                token_in,
                currency_amount_out,
                max_num_results,
                hops_left - 1,
                used=used | (1 << i),
                current_pairs=(pair,) + current_pairs,
                next_amount_out=amount_in,
                best=best,
            )


def best_trade(
    pairs: Sequence[Pair],
    amount: CurrencyAmount,
    other_currency: Currency,
    trade_type: TradeType,
    max_num_results: int = DEFAULT_MAX_NUM_RESULTS,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> Optional[Trade]:
    """Single best trade in either direction, or None when no route fills."""
    if trade_type == TradeType.EXACT_INPUT:
        trades = best_trade_exact_in(pairs, amount, other_currency, max_num_results, max_hops)
    else:
        trades = best_trade_exact_out(pairs, other_currency, amount, max_num_results, max_hops)
    return trades[0] if trades else None
