"""Lagrange interpolation at x = 0 over exact rationals.

API
---
interpolate_at_zero(points) -> ExactRational   (P(0) of the k given points)
secret_at_zero(points)      -> int             (raises NotIntegral otherwise)

The individual Lagrange terms are fractional even when their sum is an
integer, so every step stays in ``ExactRational``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from shareguard.crypto.rational import ONE, ZERO, ExactRational
from shareguard.errors import InvalidArguments

Point = Tuple[int, int]


def interpolate_at_zero(points: Sequence[Point]) -> ExactRational:
    """Evaluate the degree-(k-1) polynomial through *points* at x = 0.

    P(0) = sum_i y_i * prod_{j != i} (-x_j) / (x_i - x_j)

    Two points with the same x raise ``DivisionByZero``.
    """
    if not points:
        raise InvalidArguments("Need at least one point")
    k = len(points)
    acc = ZERO
    for i in range(k):
        xi, yi = points[i]
        num = ExactRational.from_int(yi)
        den = ONE
        for j in range(k):
            if j == i:
                continue
            xj = points[j][0]
            num = num.mul(ExactRational.from_int(-xj))                       # (0 - x_j)
            den = den.mul(ExactRational.from_int(xi).sub(ExactRational.from_int(xj)))  # (x_i - x_j)
        acc = acc.add(num.div(den))
    return acc


def secret_at_zero(points: Sequence[Point]) -> int:
    """Integer secret of *points*; ``NotIntegral`` if they are inconsistent."""
    return interpolate_at_zero(points).to_integer()
