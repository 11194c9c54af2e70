"""Property tests for the exact-arithmetic and swap invariants."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from cpmm_sdk.core.amounts import CurrencyAmount
from cpmm_sdk.core.cpmm import get_amount_in, get_amount_out
from cpmm_sdk.core.fractions import Fraction
from cpmm_sdk.core.liquidity import compute_profit_maximizing_trade
from cpmm_sdk.core.pair import Pair
from cpmm_sdk.core.routing import best_trade_exact_in
from cpmm_sdk.core.trade import sorted_insert, trade_comparator
from cpmm_sdk.state.currency import Token


TOKENS = [Token(1, f"0x{i:040x}", 18, f"t{i}") for i in range(1, 5)]

nonzero = st.integers(min_value=-(10**12), max_value=10**12).filter(lambda v: v != 0)
reserves = st.integers(min_value=1_000, max_value=10**12)


def _amount(token: Token, raw: int) -> CurrencyAmount:
    return CurrencyAmount.from_raw_amount(token, raw)


@given(nonzero, nonzero, nonzero, nonzero)
@settings(max_examples=200, deadline=None)
def test_fraction_add_subtract_roundtrip(an: int, ad: int, bn: int, bd: int) -> None:
    a, b = Fraction(an, ad), Fraction(bn, bd)
    assert a.add(b).subtract(b) == a
    assert a.multiply(b).divide(b) == a


@given(reserves, reserves, st.integers(min_value=1, max_value=10**12))
@settings(max_examples=200, deadline=None)
def test_amount_in_covers_requested_output(reserve_in: int, reserve_out: int, amount_out: int) -> None:
    assume(amount_out < reserve_out)
    amount_in = get_amount_in(amount_out, reserve_in, reserve_out)
    assert get_amount_out(amount_in, reserve_in, reserve_out) >= amount_out


@given(reserves, reserves)
@settings(max_examples=100, deadline=None)
def test_pair_is_independent_of_argument_order(ra: int, rb: int) -> None:
    a, b = TOKENS[1], TOKENS[0]
    forward = Pair(_amount(a, ra), _amount(b, rb))
    backward = Pair(_amount(b, rb), _amount(a, ra))
    assert forward == backward
    assert forward.token0 == TOKENS[0]
    assert forward.liquidity_token == backward.liquidity_token


@given(reserves, reserves)
@settings(max_examples=100, deadline=None)
def test_no_arbitrage_at_pool_price(ra: int, rb: int) -> None:
    assert compute_profit_maximizing_trade(ra, rb, ra, rb) == (False, 0)


@given(st.lists(reserves, min_size=10, max_size=10), st.integers(min_value=1, max_value=10**6), st.integers(1, 4))
@settings(max_examples=50, deadline=None)
def test_best_trades_are_capped_and_ranked(pool_reserves, amount_in: int, max_num_results: int) -> None:
    combos = [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3)]
    pairs = [
        Pair(_amount(TOKENS[i], pool_reserves[2 * k]), _amount(TOKENS[j], pool_reserves[2 * k + 1]))
        for k, (i, j) in enumerate(combos)
    ]
    trades = best_trade_exact_in(pairs, _amount(TOKENS[0], amount_in), TOKENS[3], max_num_results=max_num_results)
    assert len(trades) <= max_num_results
    for better, worse in zip(trades, trades[1:]):
        assert trade_comparator(better, worse) <= 0
    for trade in trades:
        assert trade.route.path[0] == TOKENS[0]
        assert trade.route.path[-1] == TOKENS[3]
        assert len(set(trade.route.pairs)) == len(trade.route.pairs)


@given(st.lists(reserves, min_size=4, max_size=4), st.integers(min_value=1, max_value=10**6))
@settings(max_examples=50, deadline=None)
def test_empty_pair_never_improves_best_output(pool_reserves, amount_in: int) -> None:
    t0, t1, t2 = TOKENS[0], TOKENS[1], TOKENS[2]
    pairs = [
        Pair(_amount(t0, pool_reserves[0]), _amount(t1, pool_reserves[1])),
        Pair(_amount(t1, pool_reserves[2]), _amount(t2, pool_reserves[3])),
    ]
    empty = Pair(_amount(t0, 0), _amount(t2, 0))
    with_empty = best_trade_exact_in(pairs + [empty], _amount(t0, amount_in), t2)
    without = best_trade_exact_in(pairs, _amount(t0, amount_in), t2)
    assert [t.output_amount.quotient for t in with_empty] == [t.output_amount.quotient for t in without]


@given(st.lists(st.integers(min_value=-100, max_value=100), max_size=30), st.integers(1, 8))
@settings(max_examples=200, deadline=None)
def test_sorted_insert_keeps_the_smallest(values, max_size: int) -> None:
    items: list = []
    for value in values:
        sorted_insert(items, value, max_size, lambda a, b: a - b)
        assert items == sorted(items)
        assert len(items) <= max_size
    assert items == sorted(values)[:max_size]
