"""
cpmm-sdk: exact-arithmetic engine for constant-product (x * y = k) pools.
"""

from .core.errors import InsufficientInputAmountError, InsufficientReservesError, ValidationError
from .core.fractions import (
    BPS_DENOM,
    ONE_HUNDRED_PERCENT,
    ZERO_PERCENT,
    Fraction,
    Percent,
    Rounding,
)
from .state.currency import SUPPORTED_CHAINS, WETH9, ChainId, Currency, Ether, Token
from .state.canonical import INIT_CODE_HASH, compute_pair_address
from .state.config import DEFAULT_CONFIG, SdkConfig
from .core.amounts import MAX_UINT256, CurrencyAmount
from .core.price import Price
from .core.cpmm import (
    MINIMUM_LIQUIDITY,
    get_amount_in,
    get_amount_out,
    get_amounts_in,
    get_amounts_out,
    quote,
    sort_tokens,
)
from .core.pair import Pair
from .core.route import Route
from .core.trade import (
    Trade,
    TradeType,
    compute_price_impact,
    input_output_comparator,
    sorted_insert,
    trade_comparator,
)
from .core.routing import best_trade, best_trade_exact_in, best_trade_exact_out
from .core.liquidity import (
    PairReserves,
    compute_liquidity_value,
    compute_profit_maximizing_trade,
    get_liquidity_value,
    get_liquidity_value_after_arbitrage_to_price,
    get_reserves_after_arbitrage,
)

__version__ = "0.1.0"

__all__ = [
    "BPS_DENOM",
    "ChainId",
    "compute_liquidity_value",
    "compute_pair_address",
    "compute_price_impact",
    "compute_profit_maximizing_trade",
    "Currency",
    "CurrencyAmount",
    "DEFAULT_CONFIG",
    "Ether",
    "Fraction",
    "get_amount_in",
    "get_amount_out",
    "get_amounts_in",
    "get_amounts_out",
    "get_liquidity_value",
    "get_liquidity_value_after_arbitrage_to_price",
    "get_reserves_after_arbitrage",
    "INIT_CODE_HASH",
    "input_output_comparator",
    "InsufficientInputAmountError",
    "InsufficientReservesError",
    "MAX_UINT256",
    "MINIMUM_LIQUIDITY",
    "ONE_HUNDRED_PERCENT",
    "Pair",
    "PairReserves",
    "Percent",
    "Price",
    "quote",
    "Rounding",
    "Route",
    "SdkConfig",
    "sort_tokens",
    "sorted_insert",
    "SUPPORTED_CHAINS",
    "Token",
    "Trade",
    "trade_comparator",
    "TradeType",
    "ValidationError",
    "WETH9",
    "ZERO_PERCENT",
    "best_trade",
    "best_trade_exact_in",
    "best_trade_exact_out",
]
