"""Exception hierarchy for share reconstruction and fault detection."""

from __future__ import annotations


class ShareGuardError(Exception):
    """Base class for every error raised by ShareGuard."""


class InvalidArguments(ShareGuardError, ValueError):
    """Raised for a bad threshold, bad combination bounds or malformed input."""


class DivisionByZero(ShareGuardError, ZeroDivisionError):
    """Raised when a rational has (or would get) a zero denominator.

    During interpolation this means two points share the same ``x``.
    """


class NotIntegral(ShareGuardError, ArithmeticError):
    """Raised when an exact result is not an integer.

    For interpolation this is an expected outcome: the points do not lie
    on a common integer polynomial.
    """


class NoConsistentSecret(ShareGuardError):
    """Raised when no enumerated combination yields an integer secret."""


class ResourceExceeded(ShareGuardError):
    """Raised when the combination budget runs out before enumeration ends."""


class Timeout(ResourceExceeded):
    """Raised when the wall-clock deadline of a budget has passed."""


class ShareDecodeError(InvalidArguments):
    """Raised when a share value cannot be decoded from its stated base."""
