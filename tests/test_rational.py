"""Tests for exact rational arithmetic."""

from math import gcd

import pytest

from shareguard.crypto.rational import ExactRational
from shareguard.errors import DivisionByZero, InvalidArguments, NotIntegral


def _assert_canonical(r: ExactRational) -> None:
    assert r.denominator > 0
    assert gcd(abs(r.numerator), r.denominator) == 1


def test_reduces_to_lowest_terms():
    r = ExactRational(6, 8)
    assert (r.numerator, r.denominator) == (3, 4)


def test_negative_denominator_normalized():
    r = ExactRational(3, -6)
    assert (r.numerator, r.denominator) == (-1, 2)


def test_both_negative():
    r = ExactRational(-4, -10)
    assert (r.numerator, r.denominator) == (2, 5)


def test_zero_is_zero_over_one():
    r = ExactRational(0, -17)
    assert (r.numerator, r.denominator) == (0, 1)


def test_zero_denominator_rejected():
    with pytest.raises(DivisionByZero):
        ExactRational(1, 0)


def test_float_rejected():
    with pytest.raises(InvalidArguments):
        ExactRational(0.5, 1)


def test_add_sub():
    a = ExactRational(1, 3)
    b = ExactRational(1, 6)
    assert a.add(b) == ExactRational(1, 2)
    assert a.sub(b) == ExactRational(1, 6)
    assert b.sub(a) == ExactRational(-1, 6)


def test_mul_div():
    a = ExactRational(2, 3)
    b = ExactRational(-9, 4)
    assert a.mul(b) == ExactRational(-3, 2)
    assert a.div(b) == ExactRational(-8, 27)


def test_div_by_zero():
    with pytest.raises(DivisionByZero):
        ExactRational(5).div(ExactRational(0))


def test_operator_aliases():
    a = ExactRational(1, 2)
    assert a + 1 == ExactRational(3, 2)
    assert 1 - a == a
    assert a * 4 == 2
    assert 1 / a == 2
    assert -a == ExactRational(-1, 2)


@pytest.mark.parametrize("v", [0, 1, -1, 42, -42, 2**200 + 7, -(3**150)])
def test_integer_round_trip(v):
    assert ExactRational(v, 1).to_integer() == v
    assert ExactRational.from_int(v).to_integer() == v


def test_to_integer_after_reduction():
    assert ExactRational(-12, 4).to_integer() == -3


def test_not_integral():
    with pytest.raises(NotIntegral):
        ExactRational(7, 2).to_integer()


def test_invariants_hold_after_operation_chain():
    r = ExactRational(1)
    for i in range(1, 25):
        step = ExactRational(-i if i % 3 else i, i + 1)
        r = r.mul(step).add(ExactRational(1, i)).sub(ExactRational(i, 7))
        if step.numerator:
            r = r.div(step)
        _assert_canonical(r)


def test_equality_and_hash():
    assert ExactRational(2, 4) == ExactRational(1, 2)
    assert hash(ExactRational(2, 4)) == hash(ExactRational(1, 2))
    assert ExactRational(3) == 3
    assert str(ExactRational(-3, 9)) == "-1/3"


def test_module_constants():
    from shareguard.crypto.rational import ONE, ZERO

    assert ZERO == 0
    assert ONE == 1


def test_huge_non_integral_raises_not_integral():
    # beyond the default int -> str digit limit
    r = ExactRational(1, 10**5000 + 3)
    with pytest.raises(NotIntegral):
        r.to_integer()


def test_huge_division_by_zero():
    with pytest.raises(DivisionByZero):
        ExactRational(10**5000 + 1, 7).div(ExactRational(0))
