"""
Currency identities: ERC-20 style tokens and the chain's native currency.

Addresses are trusted to be validated upstream; identity is
(chain_id, lower-cased address) and fee-on-transfer fields never take part in
equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import ClassVar, Dict, Optional, Union

from ..core.errors import ValidationError, require


class ChainId(IntEnum):
    MAINNET = 1
    ROPSTEN = 3
    SEPOLIA = 11155111
    BASE = 8453


SUPPORTED_CHAINS = tuple(ChainId)

ZERO_ADDRESS = "0x" + "0" * 40


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, eq=False)
class Token:
    """
    A fungible token on one chain.

    Attributes:
        chain_id: Chain the token lives on
        address: Contract address (checksummed or not; compared lower-cased)
        decimals: Display decimals in [0, 255)
        symbol: Optional ticker
        name: Optional long name
        buy_fee_bps: Fee-on-transfer tax charged when bought from a pool
        sell_fee_bps: Fee-on-transfer tax charged when sold into a pool
    """

    chain_id: int
    address: str
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None
    buy_fee_bps: Optional[int] = None
    sell_fee_bps: Optional[int] = None

    is_native: ClassVar[bool] = False
    is_token: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not _is_int(self.chain_id) or self.chain_id <= 0:
            raise ValidationError(f"chain_id must be a positive int: {self.chain_id!r}")
        if not isinstance(self.address, str) or not self.address:
            raise ValidationError("address must be a non-empty string")
        require(_is_int(self.decimals) and 0 <= self.decimals < 255, "DECIMALS")
        for label, bps in (("buy_fee_bps", self.buy_fee_bps), ("sell_fee_bps", self.sell_fee_bps)):
            if bps is not None and (not _is_int(bps) or bps < 0):
                raise ValidationError(f"{label} must be a non-negative int: {bps!r}")

    def equals(self, other: object) -> bool:
        return (
            isinstance(other, Token)
            and self.chain_id == other.chain_id
            and self.address.lower() == other.address.lower()
        )

    def sorts_before(self, other: "Token") -> bool:
        """Canonical pool ordering: lower-cased address comparison on one chain."""
        require(self.chain_id == other.chain_id, "CHAIN_IDS")
        require(self.address.lower() != other.address.lower(), "ADDRESSES")
        return self.address.lower() < other.address.lower()

    @property
    def wrapped(self) -> "Token":
        return self

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address.lower()))


WETH9: Dict[int, Token] = {
    ChainId.MAINNET: Token(ChainId.MAINNET, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH", "Wrapped Ether"),
    ChainId.ROPSTEN: Token(ChainId.ROPSTEN, "0xc778417E063141139Fce010982780140Aa0cD5Ab", 18, "WETH", "Wrapped Ether"),
    ChainId.SEPOLIA: Token(ChainId.SEPOLIA, "0xfFf9976782d46CC05630D1f6eBAb18b2324d6B14", 18, "WETH", "Wrapped Ether"),
    ChainId.BASE: Token(ChainId.BASE, "0x4200000000000000000000000000000000000006", 18, "WETH", "Wrapped Ether"),
}


@dataclass(frozen=True)
class Ether:
    """Native currency of an EVM chain; swaps route through its wrapped token."""

    chain_id: int
    decimals: int = 18
    symbol: str = "ETH"
    name: str = "Ether"

    is_native: ClassVar[bool] = True
    is_token: ClassVar[bool] = False

    @classmethod
    def on_chain(cls, chain_id: int) -> "Ether":
        return _ether_on_chain(chain_id)

    @property
    def wrapped(self) -> Token:
        weth = WETH9.get(self.chain_id)
        require(weth is not None, "WRAPPED")
        return weth  # type: ignore[return-value]

    def equals(self, other: object) -> bool:
        return isinstance(other, Ether) and other.chain_id == self.chain_id


@lru_cache(maxsize=None)
def _ether_on_chain(chain_id: int) -> Ether:
    return Ether(chain_id)


Currency = Union[Token, Ether]
