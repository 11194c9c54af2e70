from __future__ import annotations

import pytest

from cpmm_sdk.core.errors import ValidationError
from cpmm_sdk.core.liquidity import (
    PairReserves,
    compute_liquidity_value,
    compute_profit_maximizing_trade,
    get_liquidity_value,
    get_liquidity_value_after_arbitrage_to_price,
    get_reserves_after_arbitrage,
)


def test_profit_maximizing_trade_at_true_price_is_zero() -> None:
    assert compute_profit_maximizing_trade(1, 2, 1000, 2000) == (False, 0)
    assert compute_profit_maximizing_trade(3, 5, 3000, 5000) == (False, 0)


def test_profit_maximizing_trade_direction_and_size() -> None:
    # k = 2e6; isqrt(2e9 // 997) = 1416; 1000 * 1000 // 997 = 1003
    assert compute_profit_maximizing_trade(1, 1, 1000, 2000) == (True, 413)
    assert compute_profit_maximizing_trade(1, 1, 2000, 1000) == (False, 413)


def test_profit_maximizing_trade_inside_fee_band() -> None:
    # Pool price 1.002 vs true price 1.001: the 0.3% fee eats any profit.
    assert compute_profit_maximizing_trade(1000, 1001, 1000, 1002) == (False, 0)


def test_profit_maximizing_trade_validation() -> None:
    with pytest.raises(ValidationError, match="INVALID_PRICES"):
        compute_profit_maximizing_trade(0, 1, 1000, 1000)
    with pytest.raises(ValidationError, match="INSUFFICIENT_RESERVES"):
        compute_profit_maximizing_trade(1, 1, 0, 1000)


def test_reserves_after_arbitrage() -> None:
    assert get_reserves_after_arbitrage(1000, 2000, 1, 1) == (1413, 1417)
    assert get_reserves_after_arbitrage(2000, 1000, 1, 1) == (1417, 1413)
    assert get_reserves_after_arbitrage(1000, 2000, 1, 2) == (1000, 2000)
    with pytest.raises(ValidationError, match="ZERO_PAIR_RESERVES"):
        get_reserves_after_arbitrage(0, 2000, 1, 1)


def test_compute_liquidity_value_without_fee() -> None:
    assert compute_liquidity_value(1000, 2000, 1000, 100, False, 0) == (100, 200)
    assert compute_liquidity_value(1000, 2000, 1000, 1000, False, 0) == (1000, 2000)


def test_compute_liquidity_value_with_fee() -> None:
    # root_k = 1414, root_k_last = 1341: fee mint = 1000 * 73 // 8411 = 8
    assert compute_liquidity_value(1000, 2000, 1000, 100, True, 1_800_000) == (99, 198)
    assert compute_liquidity_value(1000, 2000, 1000, 100, True, 0) == (100, 200)
    assert compute_liquidity_value(1000, 2000, 1000, 100, True, 2_000_000) == (100, 200)


def test_compute_liquidity_value_requires_supply() -> None:
    with pytest.raises(ValidationError, match="TOTAL_SUPPLY"):
        compute_liquidity_value(1000, 2000, 0, 100, False, 0)


def test_pair_reserves_validation() -> None:
    with pytest.raises(ValidationError):
        PairReserves(-1, 1, 1)
    with pytest.raises(ValidationError):
        PairReserves(1, 1, 1, k_last=-5)


def test_get_liquidity_value_reads_snapshot() -> None:
    reserves = PairReserves(1000, 2000, 1000, k_last=1_800_000, fee_on=True)
    assert get_liquidity_value(reserves, 100) == (99, 198)


def test_liquidity_value_after_arbitrage() -> None:
    reserves = PairReserves(1000, 2000, 1000)
    assert get_liquidity_value_after_arbitrage_to_price(reserves, 1, 1, 100) == (141, 141)
    assert get_liquidity_value_after_arbitrage_to_price(reserves, 1, 2, 100) == (100, 200)


def test_liquidity_value_after_arbitrage_large_reserves() -> None:
    reserves = PairReserves(
        reserve_a=10**21,
        reserve_b=2 * 10**21,
        total_supply=1414213562373095048801,
    )
    value = get_liquidity_value_after_arbitrage_to_price(reserves, 1, 2, reserves.total_supply)
    assert value == (10**21, 2 * 10**21)


def test_liquidity_amount_bounds() -> None:
    reserves = PairReserves(1000, 2000, 1000)
    with pytest.raises(ValidationError, match="INVALID_LIQUIDITY_AMOUNT"):
        get_liquidity_value_after_arbitrage_to_price(reserves, 1, 1, 0)
    with pytest.raises(ValidationError, match="INVALID_LIQUIDITY_AMOUNT"):
        get_liquidity_value_after_arbitrage_to_price(reserves, 1, 1, 1001)
