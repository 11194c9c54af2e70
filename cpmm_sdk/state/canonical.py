"""
Deterministic canonical encoding primitives.

Used to derive pool identities that do not depend on argument order or on the
host's JSON formatting.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from ..core.errors import require
from .currency import ZERO_ADDRESS, Token


CANONICAL_ENCODING_VERSION = 1

# Init code hash of the reference pair contract; part of every default pair identity.
INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding for hashing.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - floats rejected (to avoid representation ambiguity)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def domain_sep_bytes(label: str, version: int = CANONICAL_ENCODING_VERSION) -> bytes:
    """ASCII, NUL-terminated domain prefix so concatenations stay unambiguous."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    return b"cpmm-sdk:" + label.encode("ascii") + b":v" + str(version).encode("ascii") + b"\x00"


def sort_addresses(address_a: str, address_b: str) -> tuple:
    """Order two addresses the way pools order their tokens."""
    require(address_a.lower() != address_b.lower(), "IDENTICAL_ADDRESSES")
    if address_a.lower() < address_b.lower():
        token0, token1 = address_a, address_b
    else:
        token0, token1 = address_b, address_a
    require(token0.lower() != ZERO_ADDRESS, "ZERO_ADDRESS")
    return token0, token1


def compute_pair_address(
    factory_address: str,
    token_a: Token,
    token_b: Token,
    init_code_hash: str = INIT_CODE_HASH,
) -> str:
    """
    Deterministic, order-independent pair identity.

    Stands in for the on-chain CREATE2 derivation: the last 20 bytes of
    sha256(domain || canonical_json({factory, init_code_hash, token0, token1})),
    rendered as a 0x-prefixed address.
    """
    token0, token1 = sort_addresses(token_a.address, token_b.address)
    payload = {
        "chain_id": int(token_a.chain_id),
        "factory": factory_address.lower(),
        "init_code_hash": init_code_hash.lower(),
        "token0": token0.lower(),
        "token1": token1.lower(),
    }
    digest = hashlib.sha256(domain_sep_bytes("pair") + canonical_json_bytes(payload)).hexdigest()
    return "0x" + digest[-40:]
