from __future__ import annotations

import pytest

from cpmm_sdk.core.errors import ValidationError
from cpmm_sdk.core.fractions import (
    ONE_HUNDRED_PERCENT,
    ZERO_PERCENT,
    Fraction,
    Percent,
    Rounding,
)


def test_zero_denominator_is_rejected() -> None:
    with pytest.raises(ValidationError, match="ZERO_DENOMINATOR"):
        Fraction(1, 0)


def test_non_int_parts_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Fraction(1.5, 2)  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        Fraction(True, 2)


def test_explicit_constructors() -> None:
    assert Fraction.from_int(7) == Fraction(7, 1)
    assert Fraction.from_string(" 12/5 ") == Fraction(12, 5)
    assert Fraction.from_string("42") == Fraction(42)
    assert Fraction.from_fraction(Percent(3, 4)) == Fraction(3, 4)
    with pytest.raises(ValidationError):
        Fraction.from_string("twelve")


def test_arithmetic_does_not_reduce() -> None:
    a, b = Fraction(1, 10), Fraction(4, 12)
    s = a.add(b)
    assert (s.numerator, s.denominator) == (52, 120)
    d = a.subtract(b)
    assert (d.numerator, d.denominator) == (-28, 120)
    m = a.multiply(b)
    assert (m.numerator, m.denominator) == (4, 120)
    q = a.divide(b)
    assert (q.numerator, q.denominator) == (12, 40)


def test_same_denominator_add_keeps_denominator() -> None:
    s = Fraction(1, 3).add(Fraction(4, 3))
    assert (s.numerator, s.denominator) == (5, 3)


def test_quotient_truncates_toward_zero() -> None:
    assert Fraction(8, 3).quotient == 2
    assert Fraction(12, 4).quotient == 3
    assert Fraction(16, 5).quotient == 3
    assert Fraction(-7, 2).quotient == -3
    assert Fraction(8, 3).remainder == Fraction(2, 3)


def test_invert() -> None:
    f = Fraction(5, 7).invert()
    assert (f.numerator, f.denominator) == (7, 5)


def test_comparisons_cross_multiply() -> None:
    assert Fraction(1, 2) == Fraction(2, 4)
    assert hash(Fraction(1, 2)) == hash(Fraction(2, 4))
    assert Fraction(1, 10).less_than(Fraction(4, 12))
    assert Fraction(4, 12).greater_than(Fraction(1, 10))
    assert Fraction(1, 3).equal_to(Fraction(3, 9))
    assert Fraction(1, -2) < 0
    assert Fraction(-1, -2) > 0
    assert Fraction(6, 3) == 2


def test_to_significant() -> None:
    assert Fraction(1, 3).to_significant(3) == "0.333"
    assert Fraction(200).to_significant(2) == "200"
    assert Fraction(3, 2).to_significant(5) == "1.5"
    assert Fraction(0).to_significant(4) == "0"
    assert Fraction(1234567).to_significant(7, group_separator=",") == "1,234,567"


def test_to_significant_rounds_through_an_extra_digit() -> None:
    # 1.2451 -> 1.25 (3 digits) -> 1.3 (2 digits) under half-up.
    assert Fraction(12451, 10000).to_significant(2) == "1.3"
    assert Fraction(12451, 10000).to_significant(2, Rounding.ROUND_DOWN) == "1.2"
    assert Fraction(12001, 10000).to_significant(2, Rounding.ROUND_UP) == "1.3"


def test_to_significant_rejects_bad_digits() -> None:
    with pytest.raises(ValidationError):
        Fraction(1).to_significant(0)


def test_to_fixed() -> None:
    assert Fraction(1, 3).to_fixed(2) == "0.33"
    assert Fraction(2, 3).to_fixed(2) == "0.67"
    assert Fraction(2, 3).to_fixed(2, Rounding.ROUND_DOWN) == "0.66"
    assert Fraction(1, 3).to_fixed(2, Rounding.ROUND_UP) == "0.34"
    assert Fraction(5, 2).to_fixed(0) == "3"
    assert Fraction(-5, 2).to_fixed(0) == "-3"
    assert Fraction(1234567, 2).to_fixed(1, group_separator=",") == "617,283.5"
    with pytest.raises(ValidationError):
        Fraction(1).to_fixed(-1)


def test_percent_arithmetic_stays_percent() -> None:
    total = Percent(1, 100).add(Percent(2, 100))
    assert isinstance(total, Percent)
    assert total == Percent(3, 100)
    assert isinstance(Percent(1, 100).subtract(Percent(1, 1000)), Percent)
    assert isinstance(Percent(1, 100).multiply(3), Percent)
    assert isinstance(Percent(1, 100).divide(Fraction(1, 2)), Percent)


def test_percent_after_fee() -> None:
    after = ONE_HUNDRED_PERCENT.subtract(Percent(350).divide(10_000))
    assert after == Percent(9650, 10_000)
    assert after.greater_than(ZERO_PERCENT)
    assert ONE_HUNDRED_PERCENT.subtract(Percent(10_000).divide(10_000)).equal_to(0)


def test_percent_display_is_scaled_by_100() -> None:
    assert Percent(1, 100).to_significant() == "1"
    assert Percent(12345, 1_000_000).to_significant(5) == "1.2345"
    assert Percent(12345, 1_000_000).to_fixed() == "1.23"
    assert Percent(1, 3).to_fixed(3) == "33.333"


def test_integral_fraction_hashes_like_its_int() -> None:
    assert hash(Fraction(2, 1)) == hash(2)
    assert hash(Fraction(6, 3)) == hash(2)
    assert hash(Fraction(-4, -2)) == hash(2)
    assert 2 in {Fraction(4, 2)}
    assert Fraction(4, 2) in {2}


def test_percent_equality_matches_equal_to() -> None:
    assert Percent(1, 2) == Fraction(1, 2)
    assert Fraction(2, 4) == Percent(1, 2)
    assert Percent(2, 2) == 1
    assert Percent(1, 2) != Fraction(1, 3)
    assert hash(Percent(1, 2)) == hash(Fraction(2, 4))
    assert Fraction(1, 2) in {Percent(2, 4)}


def test_percent_supports_all_orderings() -> None:
    assert Percent(1, 2) <= Percent(1, 2)
    assert Percent(1, 3) <= Fraction(1, 2)
    assert Percent(1, 2) >= Percent(2, 4)
    assert Percent(3, 4) >= 0
    assert not Percent(3, 4) <= Percent(1, 2)
