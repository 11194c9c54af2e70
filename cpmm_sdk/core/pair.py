"""
Two-token constant-product pool with fee-on-transfer aware swap math.

Swap rules (raw integer units):
- Pool fee: 0.3% of the (taxed) input, i.e. input * 997 / 1000.
- Exact-in rounds every step down (floor).
- Exact-in with taxes: input is reduced by the input token's sell tax before
  the swap and the output by the output token's buy tax after it.
- Exact-out rounds every step up, as floor(x) + 1, in the order
  buy-tax inflate, reserve check, inverse swap, sell-tax inflate.

Tax rates come from the pool's own token records, so the caller's amount may
use a tax-less copy of the same token.

A Pair is immutable; swaps return the post-trade pool as a new value.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..state.config import DEFAULT_CONFIG, SdkConfig
from ..state.currency import Currency, Token
from . import cpmm
from .amounts import CurrencyAmount
from .errors import InsufficientInputAmountError, InsufficientReservesError, require
from .fractions import BPS_DENOM, ONE_HUNDRED_PERCENT, ZERO_PERCENT, Percent
from .price import Price


LIQUIDITY_TOKEN_DECIMALS = 18
LIQUIDITY_TOKEN_SYMBOL = "UNI-V2"
LIQUIDITY_TOKEN_NAME = "Uniswap V2"


def _percent_after_fee(fee_bps: Optional[int]) -> Percent:
    if fee_bps:
        return ONE_HUNDRED_PERCENT.subtract(Percent(fee_bps).divide(BPS_DENOM))
    return ZERO_PERCENT


class Pair:
    __slots__ = ("_reserves", "_liquidity_token", "_config")

    def __init__(
        self,
        currency_amount_a: CurrencyAmount,
        token_amount_b: CurrencyAmount,
        config: SdkConfig = DEFAULT_CONFIG,
    ) -> None:
        token_a, token_b = currency_amount_a.currency, token_amount_b.currency
        require(token_a.is_token and token_b.is_token, "TOKEN")
        if token_a.sorts_before(token_b):  # type: ignore[union-attr]
            reserves = (currency_amount_a, token_amount_b)
        else:
            reserves = (token_amount_b, currency_amount_a)
        for reserve in reserves:
            require(reserve.quotient >= 0, "RESERVES")
        self._reserves = reserves
        self._config = config
        self._liquidity_token = Token(
            reserves[0].currency.chain_id,
            config.pair_address(reserves[0].currency, reserves[1].currency),  # type: ignore[arg-type]
            LIQUIDITY_TOKEN_DECIMALS,
            LIQUIDITY_TOKEN_SYMBOL,
            LIQUIDITY_TOKEN_NAME,
        )

    @staticmethod
    def get_address(token_a: Token, token_b: Token, config: SdkConfig = DEFAULT_CONFIG) -> str:
        return config.pair_address(token_a, token_b)

    @property
    def config(self) -> SdkConfig:
        return self._config

    @property
    def liquidity_token(self) -> Token:
        return self._liquidity_token

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def token0(self) -> Token:
        return self._reserves[0].currency  # type: ignore[return-value]

    @property
    def token1(self) -> Token:
        return self._reserves[1].currency  # type: ignore[return-value]

    @property
    def reserve0(self) -> CurrencyAmount:
        return self._reserves[0]

    @property
    def reserve1(self) -> CurrencyAmount:
        return self._reserves[1]

    @property
    def token0_price(self) -> Price:
        """Price of token0 in token1."""
        return Price(self.token0, self.token1, self.reserve0.quotient, self.reserve1.quotient)

    @property
    def token1_price(self) -> Price:
        """Price of token1 in token0."""
        return Price(self.token1, self.token0, self.reserve1.quotient, self.reserve0.quotient)

    def involves_token(self, token: Currency) -> bool:
        return token.equals(self.token0) or token.equals(self.token1)

    def price_of(self, token: Currency) -> Price:
        require(self.involves_token(token), "TOKEN")
        return self.token0_price if token.equals(self.token0) else self.token1_price

    def reserve_of(self, token: Currency) -> CurrencyAmount:
        require(self.involves_token(token), "TOKEN")
        return self.reserve0 if token.equals(self.token0) else self.reserve1

    def _other_token(self, token: Currency) -> Token:
        return self.token1 if token.equals(self.token0) else self.token0

    def _pool_token(self, token: Currency) -> Token:
        return self.token0 if token.equals(self.token0) else self.token1

    def _percent_after_sell_fees(self, input_amount: CurrencyAmount) -> Percent:
        return _percent_after_fee(self._pool_token(input_amount.currency).sell_fee_bps)

    def _percent_after_buy_fees(self, output_amount: CurrencyAmount) -> Percent:
        return _percent_after_fee(self._pool_token(output_amount.currency).buy_fee_bps)

    def _with_reserves(self, amount_a: CurrencyAmount, amount_b: CurrencyAmount) -> "Pair":
        return Pair(amount_a, amount_b, self._config)

    def get_output_amount(
        self, input_amount: CurrencyAmount, calculate_fot_fees: bool = True
    ) -> Tuple[CurrencyAmount, "Pair"]:
        """
        Exact-in swap.

        Returns:
            Tuple of (taxed output amount, pool after the swap)

        Raises:
            ValidationError: TOKEN if the input currency is not in the pool
            InsufficientReservesError: If either reserve is zero
            InsufficientInputAmountError: If the output (before or after tax) is zero
        """
        require(self.involves_token(input_amount.currency), "TOKEN")
        if self.reserve0.quotient == 0 or self.reserve1.quotient == 0:
            raise InsufficientReservesError()

        input_reserve = self.reserve_of(input_amount.currency)
        output_token = self._other_token(input_amount.currency)
        output_reserve = self.reserve_of(output_token)

        percent_after_sell_fees = (
            self._percent_after_sell_fees(input_amount) if calculate_fot_fees else ZERO_PERCENT
        )
        if percent_after_sell_fees.greater_than(ZERO_PERCENT):
            input_after_tax = CurrencyAmount.from_raw_amount(
                input_amount.currency, percent_after_sell_fees.multiply(input_amount).quotient
            )
        else:
            input_after_tax = input_amount

        fee_adjusted_input = input_after_tax.quotient * cpmm.FEE_NUMERATOR
        numerator = fee_adjusted_input * output_reserve.quotient
        denominator = input_reserve.quotient * cpmm.FEE_DENOMINATOR + fee_adjusted_input
        output_amount = CurrencyAmount.from_raw_amount(output_token, numerator // denominator)
        if output_amount.quotient == 0:
            raise InsufficientInputAmountError()

        percent_after_buy_fees = (
            self._percent_after_buy_fees(output_amount) if calculate_fot_fees else ZERO_PERCENT
        )
        if percent_after_buy_fees.greater_than(ZERO_PERCENT):
            output_after_tax = CurrencyAmount.from_raw_amount(
                output_token, percent_after_buy_fees.multiply(output_amount).quotient
            )
        else:
            output_after_tax = output_amount
        if output_after_tax.quotient == 0:
            raise InsufficientInputAmountError()

        return output_after_tax, self._with_reserves(
            input_reserve.add(input_after_tax), output_reserve.subtract(output_after_tax)
        )

    def get_input_amount(
        self, output_amount: CurrencyAmount, calculate_fot_fees: bool = True
    ) -> Tuple[CurrencyAmount, "Pair"]:
        """
        Exact-out swap: the input needed to receive `output_amount` after taxes.

        Returns:
            Tuple of (pre-tax input amount, pool after the swap)

        Raises:
            ValidationError: TOKEN if the output currency is not in the pool
            InsufficientReservesError: If a reserve is zero or the output (pre-tax
                included) does not fit strictly inside the output reserve
        """
        require(self.involves_token(output_amount.currency), "TOKEN")
        percent_after_buy_fees = (
            self._percent_after_buy_fees(output_amount) if calculate_fot_fees else ZERO_PERCENT
        )
        if percent_after_buy_fees.greater_than(ZERO_PERCENT):
            output_before_tax = CurrencyAmount.from_raw_amount(
                output_amount.currency, output_amount.divide(percent_after_buy_fees).quotient + 1
            )
        else:
            output_before_tax = output_amount

        output_reserve = self.reserve_of(output_amount.currency)
        if (
            self.reserve0.quotient == 0
            or self.reserve1.quotient == 0
            or output_amount.quotient >= output_reserve.quotient
            or output_before_tax.quotient >= output_reserve.quotient
        ):
            raise InsufficientReservesError()

        input_token = self._other_token(output_amount.currency)
        input_reserve = self.reserve_of(input_token)
        numerator = input_reserve.quotient * output_before_tax.quotient * cpmm.FEE_DENOMINATOR
        denominator = (output_reserve.quotient - output_before_tax.quotient) * cpmm.FEE_NUMERATOR
        input_amount = CurrencyAmount.from_raw_amount(input_token, numerator // denominator + 1)

        percent_after_sell_fees = (
            self._percent_after_sell_fees(input_amount) if calculate_fot_fees else ZERO_PERCENT
        )
        if percent_after_sell_fees.greater_than(ZERO_PERCENT):
            input_before_tax = CurrencyAmount.from_raw_amount(
                input_token, input_amount.divide(percent_after_sell_fees).quotient + 1
            )
        else:
            input_before_tax = input_amount

        return input_before_tax, self._with_reserves(
            input_reserve.add(input_amount), output_reserve.subtract(output_amount)
        )

    def get_liquidity_minted(
        self,
        total_supply: CurrencyAmount,
        token_amount_a: CurrencyAmount,
        token_amount_b: CurrencyAmount,
    ) -> CurrencyAmount:
        """
        Liquidity tokens minted for depositing both amounts.

        Raises:
            ValidationError: LIQUIDITY if `total_supply` is not this pool's
                liquidity token, TOKEN if the amounts are not the pool's tokens
            InsufficientInputAmountError: If nothing would be minted
        """
        require(total_supply.currency.equals(self._liquidity_token), "LIQUIDITY")
        if token_amount_a.currency.sorts_before(token_amount_b.currency):  # type: ignore[union-attr]
            amount0, amount1 = token_amount_a, token_amount_b
        else:
            amount0, amount1 = token_amount_b, token_amount_a
        require(amount0.currency.equals(self.token0) and amount1.currency.equals(self.token1), "TOKEN")

        liquidity = cpmm.compute_liquidity_minted(
            reserve0=self.reserve0.quotient,
            reserve1=self.reserve1.quotient,
            amount0=amount0.quotient,
            amount1=amount1.quotient,
            total_supply=total_supply.quotient,
        )
        if liquidity <= 0:
            raise InsufficientInputAmountError()
        return CurrencyAmount.from_raw_amount(self._liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: CurrencyAmount,
        liquidity: CurrencyAmount,
        fee_on: bool = False,
        k_last: Optional[int] = None,
    ) -> CurrencyAmount:
        """
        Amount of `token` redeemable for `liquidity`.

        With `fee_on`, the supply is first inflated by the protocol-fee mint
        that accrued since `k_last`.
        """
        require(self.involves_token(token), "TOKEN")
        require(total_supply.currency.equals(self._liquidity_token), "TOTAL_SUPPLY")
        require(liquidity.currency.equals(self._liquidity_token), "LIQUIDITY")
        require(liquidity.quotient <= total_supply.quotient, "LIQUIDITY")

        supply = total_supply.quotient
        if fee_on:
            require(k_last is not None, "K_LAST")
            supply += cpmm.protocol_fee_liquidity(
                self.reserve0.quotient, self.reserve1.quotient, supply, int(k_last)  # type: ignore[arg-type]
            )
        return CurrencyAmount.from_raw_amount(
            token, liquidity.quotient * self.reserve_of(token).quotient // supply
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Pair):
            return self._reserves == other._reserves
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._reserves)

    def __repr__(self) -> str:
        return f"Pair({self.reserve0!r}, {self.reserve1!r})"
