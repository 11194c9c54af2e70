"""
SDK configuration: factory and router addresses per chain, plus the injected
pair-identity function.

There is no module-level mutable registry. Callers hold an `SdkConfig` value
and derive updated copies with `with_factory` / `with_router`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..core.errors import require
from .canonical import INIT_CODE_HASH, compute_pair_address
from .currency import ChainId, Token


PairIdentityFn = Callable[[str, Token, Token], str]

V2_FACTORY_ADDRESS = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
V2_ROUTER_ADDRESS = "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"
SEPOLIA_FACTORY_ADDRESS = "0x8F6e70BafAb970150435FF91c9478E564DD283B6"
SEPOLIA_ROUTER_ADDRESS = "0x5e387eb2064f88dD6bCf8864D1532A7995Adee2D"

_DEFAULT_FACTORIES = {
    int(ChainId.MAINNET): V2_FACTORY_ADDRESS,
    int(ChainId.ROPSTEN): V2_FACTORY_ADDRESS,
    int(ChainId.SEPOLIA): SEPOLIA_FACTORY_ADDRESS,
}

_DEFAULT_ROUTERS = {
    int(ChainId.MAINNET): V2_ROUTER_ADDRESS,
    int(ChainId.ROPSTEN): V2_ROUTER_ADDRESS,
    int(ChainId.SEPOLIA): SEPOLIA_ROUTER_ADDRESS,
}


def _env_int(environ: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _frozen(mapping: Mapping[int, str]) -> Mapping[int, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class SdkConfig:
    """
    Addresses and hooks used when constructing pairs.

    Attributes:
        factory_addresses: chain_id -> pair factory address
        router_addresses: chain_id -> router address (consumed by call encoders)
        init_code_hash: Pair contract init code hash passed to the identity function
        pair_identity: (factory, token_a, token_b) -> pair address; must be
            deterministic and independent of token order
        chain_id: Default chain for callers that need one
        network: Free-form network label
    """

    factory_addresses: Mapping[int, str] = field(default_factory=lambda: _frozen(_DEFAULT_FACTORIES))
    router_addresses: Mapping[int, str] = field(default_factory=lambda: _frozen(_DEFAULT_ROUTERS))
    init_code_hash: str = INIT_CODE_HASH
    pair_identity: Optional[PairIdentityFn] = None
    chain_id: int = int(ChainId.MAINNET)
    network: str = "mainnet"

    def __post_init__(self) -> None:
        object.__setattr__(self, "factory_addresses", _frozen(self.factory_addresses))
        object.__setattr__(self, "router_addresses", _frozen(self.router_addresses))

    def factory_address(self, chain_id: int) -> Optional[str]:
        return self.factory_addresses.get(int(chain_id))

    def router_address(self, chain_id: int) -> Optional[str]:
        return self.router_addresses.get(int(chain_id))

    def with_factory(self, chain_id: int, address: str) -> "SdkConfig":
        updated = dict(self.factory_addresses)
        updated[int(chain_id)] = address
        return replace(self, factory_addresses=updated)

    def with_router(self, chain_id: int, address: str) -> "SdkConfig":
        updated = dict(self.router_addresses)
        updated[int(chain_id)] = address
        return replace(self, router_addresses=updated)

    def pair_address(self, token_a: Token, token_b: Token) -> str:
        """Pair identity for two tokens on the same chain."""
        factory = self.factory_address(token_a.chain_id)
        require(factory is not None, "FACTORY_ADDRESS")
        if self.pair_identity is not None:
            return self.pair_identity(factory, token_a, token_b)  # type: ignore[arg-type]
        return compute_pair_address(factory, token_a, token_b, self.init_code_hash)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SdkConfig":
        """
        Build a config from environment variables.

        - CHAIN_ID: chain the FACTORY_ADDRESS / ROUTER_ADDRESS overrides apply to (default 1)
        - FACTORY_ADDRESS: factory override for CHAIN_ID
        - ROUTER_ADDRESS: router override for CHAIN_ID
        - NETWORK: network label (default "mainnet")
        """
        env = os.environ if environ is None else environ
        chain_id = _env_int(env, "CHAIN_ID", int(ChainId.MAINNET), lo=1, hi=2**63 - 1)
        config = cls(chain_id=chain_id, network=_env_str(env, "NETWORK", "mainnet"))
        factory = _env_str(env, "FACTORY_ADDRESS", "")
        if factory:
            config = config.with_factory(chain_id, factory)
        router = _env_str(env, "ROUTER_ADDRESS", "")
        if router:
            config = config.with_router(chain_id, router)
        return config


DEFAULT_CONFIG = SdkConfig()
