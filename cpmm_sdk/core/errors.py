"""Exception types for the swap engine.

Validation failures carry a short reason code as their message (``"CURRENCY"``,
``"TOKEN"``, ``"CHAIN_IDS"``, ...) so callers can match on it.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when an argument violates a precondition."""


class InsufficientReservesError(Exception):
    """Raised when a pool cannot cover a requested amount."""

    def __init__(self, message: str = "insufficient reserves") -> None:
        super().__init__(message)


class InsufficientInputAmountError(Exception):
    """Raised when a swap would yield a zero amount."""

    def __init__(self, message: str = "insufficient input amount") -> None:
        super().__init__(message)


def require(condition: bool, reason: str) -> None:
    if not condition:
        raise ValidationError(reason)
