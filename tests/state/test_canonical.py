from __future__ import annotations

import re

import pytest

from cpmm_sdk.core.errors import ValidationError
from cpmm_sdk.state.canonical import (
    INIT_CODE_HASH,
    canonical_json_bytes,
    compute_pair_address,
    domain_sep_bytes,
    sort_addresses,
)
from cpmm_sdk.state.currency import Token


FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
DAI = Token(1, "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18, "DAI")
USDC = Token(1, "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6, "USDC")


def test_canonical_json_is_compact_and_sorted() -> None:
    assert canonical_json_bytes({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}'


def test_canonical_json_rejects_floats_and_non_str_keys() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({"a": 1.5})
    with pytest.raises(TypeError):
        canonical_json_bytes({1: "a"})


def test_domain_sep_bytes() -> None:
    assert domain_sep_bytes("pair") == b"cpmm-sdk:pair:v1\x00"
    with pytest.raises(TypeError):
        domain_sep_bytes("")
    with pytest.raises(ValueError):
        domain_sep_bytes("a\x00b")


def test_sort_addresses() -> None:
    assert sort_addresses(USDC.address, DAI.address) == (DAI.address, USDC.address)
    with pytest.raises(ValidationError, match="IDENTICAL_ADDRESSES"):
        sort_addresses(DAI.address, DAI.address.lower())
    with pytest.raises(ValidationError, match="ZERO_ADDRESS"):
        sort_addresses("0x" + "0" * 40, DAI.address)


def test_pair_address_is_deterministic_and_order_independent() -> None:
    forward = compute_pair_address(FACTORY, DAI, USDC)
    assert re.fullmatch(r"0x[0-9a-f]{40}", forward)
    assert compute_pair_address(FACTORY, USDC, DAI) == forward
    assert compute_pair_address(FACTORY.lower(), DAI, USDC, INIT_CODE_HASH.upper().replace("0X", "0x")) == forward


def test_pair_address_depends_on_factory_and_init_code() -> None:
    base = compute_pair_address(FACTORY, DAI, USDC)
    assert compute_pair_address("0x" + "1" * 40, DAI, USDC) != base
    assert compute_pair_address(FACTORY, DAI, USDC, "0x" + "ab" * 32) != base


def test_pair_address_ignores_fee_fields() -> None:
    taxed = Token(1, DAI.address, 18, buy_fee_bps=100, sell_fee_bps=100)
    assert compute_pair_address(FACTORY, taxed, USDC) == compute_pair_address(FACTORY, DAI, USDC)
