"""Lazy k-subset enumeration in lexicographic order.

The number of combinations is C(n, k), so subsets are streamed one at a
time and every yield is charged against a ``BudgetMeter``.
"""

from __future__ import annotations

from math import comb
from typing import Iterator, Optional, Tuple

from shareguard.budget import Budget, BudgetMeter
from shareguard.errors import InvalidArguments

Combination = Tuple[int, ...]


def count_combinations(n: int, k: int) -> int:
    """C(n, k) for valid bounds."""
    _check_bounds(n, k)
    return comb(n, k)


def enumerate_combinations(
    n: int,
    k: int,
    budget: Budget | BudgetMeter | None = None,
) -> Iterator[Combination]:
    """Yield every strictly increasing k-tuple over ``range(n)``.

    Order is lexicographic: ``(0, 1, ..., k-1)`` first, then repeatedly the
    rightmost index that can still grow is incremented and every index to
    its right is reset to the consecutive run after it.

    With a *budget*, the generator raises ``ResourceExceeded`` (or
    ``Timeout``) once the cap or deadline is reached while combinations
    remain; it never truncates silently.
    """
    _check_bounds(n, k)
    return _generate(n, k, _as_meter(budget))


def _generate(n: int, k: int, meter: Optional[BudgetMeter]) -> Iterator[Combination]:
    idx = list(range(k))
    last = n - 1
    while True:
        if meter is not None:
            meter.charge()
        yield tuple(idx)
        i = k - 1
        while i >= 0 and idx[i] == last - (k - 1 - i):
            i -= 1
        if i < 0:
            return
        idx[i] += 1
        for j in range(i + 1, k):
            idx[j] = idx[j - 1] + 1


def _as_meter(budget: Budget | BudgetMeter | None) -> Optional[BudgetMeter]:
    if budget is None or isinstance(budget, BudgetMeter):
        return budget
    return budget.meter()


def _check_bounds(n: int, k: int) -> None:
    if n < 0 or k < 0 or k > n:
        raise InvalidArguments(f"Invalid combination bounds: n={n}, k={k}")
