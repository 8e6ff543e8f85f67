"""Tests for Lagrange interpolation at zero."""

from itertools import combinations

import pytest

from shareguard.crypto.lagrange import interpolate_at_zero, secret_at_zero
from shareguard.crypto.rational import ExactRational
from shareguard.crypto.shamir import eval_poly
from shareguard.errors import DivisionByZero, InvalidArguments, NotIntegral


def test_line():
    # y = 2x + 1
    assert secret_at_zero([(1, 3), (2, 5)]) == 1


def test_single_point_is_its_y():
    assert secret_at_zero([(9, -17)]) == -17


def test_result_is_exact_rational():
    result = interpolate_at_zero([(1, 0), (3, 1)])
    assert result == ExactRational(-1, 2)


def test_every_subset_agrees():
    """Any k points of one integer polynomial give the same secret."""
    coeffs = [-123456789012345678901234567890, 17, -3, 5]
    k = len(coeffs)
    points = [(x, eval_poly(coeffs, x)) for x in (-4, -1, 1, 2, 5, 11, 30)]
    for subset in combinations(points, k):
        assert secret_at_zero(list(subset)) == coeffs[0]


def test_order_does_not_matter():
    coeffs = [7, 2, 9]
    points = [(x, eval_poly(coeffs, x)) for x in (1, 2, 3)]
    assert secret_at_zero(points) == secret_at_zero(points[::-1]) == 7


def test_empty_rejected():
    with pytest.raises(InvalidArguments):
        interpolate_at_zero([])


@pytest.mark.parametrize("k", [2, 3, 5])
def test_duplicate_x_fails(k):
    points = [(x, x * x) for x in range(1, k)] + [(1, 99)]
    with pytest.raises(DivisionByZero):
        interpolate_at_zero(points)


def test_inconsistent_points_not_integral():
    with pytest.raises(NotIntegral):
        secret_at_zero([(1, 0), (3, 1)])
