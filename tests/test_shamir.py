"""Tests for integer Shamir secret sharing."""

import random

import pytest

from shareguard.crypto import shamir
from shareguard.errors import InvalidArguments, NotIntegral


def test_share_reconstruct_basic():
    secret = 42
    shares = shamir.share(secret, 3, 2)
    assert len(shares) == 3
    assert [x for x, _ in shares] == [1, 2, 3]
    assert shamir.reconstruct(shares[:2]) == secret


def test_reconstruct_any_k_subset():
    """Any K-of-N subset must reconstruct the same secret."""
    secret = 7777
    n, k = 5, 3
    shares = shamir.share(secret, n, k)
    for _ in range(10):
        subset = random.sample(shares, k)
        assert shamir.reconstruct(subset) == secret


def test_large_and_negative_secrets():
    for secret in (2**521 - 1, -(10**40), 0):
        shares = shamir.share(secret, 4, 3)
        assert shamir.reconstruct(shares[1:]) == secret


def test_threshold_equals_n():
    secret = 555
    n = k = 4
    shares = shamir.share(secret, n, k)
    assert shamir.reconstruct(shares) == secret


def test_invalid_threshold():
    with pytest.raises(InvalidArguments):
        shamir.share(1, 2, 3)
    with pytest.raises(InvalidArguments):
        shamir.share(1, 2, 0)


def test_eval_poly():
    # 1 + 2x + 3x^2 at x = 2
    assert shamir.eval_poly([1, 2, 3], 2) == 17


def test_tampered_share_breaks_consistency():
    shares = [(1, 3), (3, 7)]  # y = 2x + 1
    tampered = [(1, 3), (3, 8)]
    assert shamir.reconstruct(shares) == 1
    with pytest.raises(NotIntegral):
        shamir.reconstruct(tampered)
