"""Shamir (K-of-N) secret sharing over the integers.

API
---
share(secret, n, k)  -> list of (x_i, y_i)  with x_i = 1..n
reconstruct(points)  -> secret   (needs >= k points on one polynomial)

Coefficients are integers, so any k shares interpolate to the secret
exactly with rational arithmetic; no modulus is involved.
"""

from __future__ import annotations

import secrets
from typing import List, Tuple

from shareguard.crypto.lagrange import secret_at_zero
from shareguard.errors import InvalidArguments

Point = Tuple[int, int]

DEFAULT_COEFF_BITS = 64


def _random_coefficient(bits: int) -> int:
    """Return a uniform random integer in [1, 2**bits)."""
    return secrets.randbelow(2**bits - 1) + 1


def share(secret: int, n: int, k: int, coeff_bits: int = DEFAULT_COEFF_BITS) -> List[Point]:
    """Split *secret* into *n* shares with threshold *k*.

    A random integer polynomial f of degree k-1 is chosen such that
    f(0) = secret.  Shares are (i, f(i)) for i = 1 … n.
    """
    if k < 1 or k > n:
        raise InvalidArguments(f"Invalid threshold: k={k}, n={n}")

    # Random coefficients a_1 … a_{k-1}
    coeffs = [secret] + [_random_coefficient(coeff_bits) for _ in range(k - 1)]
    return [(i, eval_poly(coeffs, i)) for i in range(1, n + 1)]


def reconstruct(points: List[Point]) -> int:
    """Reconstruct the secret from *points* (Lagrange interpolation at x=0)."""
    return secret_at_zero(points)


def eval_poly(coeffs: List[int], x: int) -> int:
    """Evaluate polynomial (Horner's method) over the integers."""
    result = 0
    for c in reversed(coeffs):
        result = result * x + c
    return result
