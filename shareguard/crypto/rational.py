"""Exact rational arithmetic over Python ints.

Every value is kept in lowest terms with a positive denominator, so two
equal rationals always have identical (numerator, denominator) pairs.
No floating point is involved anywhere.
"""

from __future__ import annotations

from math import gcd

from shareguard.errors import DivisionByZero, InvalidArguments, NotIntegral


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a meaningful coordinate
    return isinstance(value, int) and not isinstance(value, bool)


class ExactRational:
    """Immutable signed rational number in lowest terms."""

    __slots__ = ("_num", "_den")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if not _is_int(numerator) or not _is_int(denominator):
            raise InvalidArguments(
                f"ExactRational needs int parts, got {type(numerator).__name__}"
                f"/{type(denominator).__name__}"
            )
        if denominator == 0:
            raise DivisionByZero("zero denominator")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        g = gcd(numerator, denominator)  # math.gcd is always non-negative
        self._num = numerator // g
        self._den = denominator // g

    @classmethod
    def from_int(cls, value: int) -> ExactRational:
        return cls(value, 1)

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    # ---- arithmetic ----

    def add(self, other: ExactRational) -> ExactRational:
        """Exact sum."""
        return ExactRational(
            self._num * other._den + other._num * self._den,
            self._den * other._den,
        )

    def sub(self, other: ExactRational) -> ExactRational:
        """Exact difference."""
        return ExactRational(
            self._num * other._den - other._num * self._den,
            self._den * other._den,
        )

    def mul(self, other: ExactRational) -> ExactRational:
        """Exact product."""
        return ExactRational(self._num * other._num, self._den * other._den)

    def div(self, other: ExactRational) -> ExactRational:
        """Exact quotient; *other* must be non-zero."""
        if other._num == 0:
            raise DivisionByZero("division by a zero rational")
        return ExactRational(self._num * other._den, self._den * other._num)

    def neg(self) -> ExactRational:
        return ExactRational(-self._num, self._den)

    def to_integer(self) -> int:
        """Return the value as an int, or raise ``NotIntegral``."""
        if self._den != 1:
            raise NotIntegral(
                f"not an integer ({self._den.bit_length()}-bit denominator)"
            )
        return self._num

    def is_integer(self) -> bool:
        return self._den == 1

    # ---- operator aliases ----

    def _coerce(self, other: object) -> ExactRational | None:
        if isinstance(other, ExactRational):
            return other
        if _is_int(other):
            return ExactRational(other, 1)
        return None

    def __add__(self, other: object):
        o = self._coerce(other)
        return NotImplemented if o is None else self.add(o)

    __radd__ = __add__

    def __sub__(self, other: object):
        o = self._coerce(other)
        return NotImplemented if o is None else self.sub(o)

    def __rsub__(self, other: object):
        o = self._coerce(other)
        return NotImplemented if o is None else o.sub(self)

    def __mul__(self, other: object):
        o = self._coerce(other)
        return NotImplemented if o is None else self.mul(o)

    __rmul__ = __mul__

    def __truediv__(self, other: object):
        o = self._coerce(other)
        return NotImplemented if o is None else self.div(o)

    def __rtruediv__(self, other: object):
        o = self._coerce(other)
        return NotImplemented if o is None else o.div(self)

    def __neg__(self) -> ExactRational:
        return self.neg()

    # ---- comparison / hashing ----

    def __eq__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._num == o._num and self._den == o._den

    def __hash__(self) -> int:
        return hash((self._num, self._den))

    def __repr__(self) -> str:
        return f"ExactRational({self._num}, {self._den})"

    def __str__(self) -> str:
        if self._den == 1:
            return str(self._num)
        return f"{self._num}/{self._den}"


ZERO = ExactRational(0, 1)
ONE = ExactRational(1, 1)
