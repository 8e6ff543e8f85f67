"""Resource budget for combination enumeration.

A ``Budget`` is a frozen description of the limits (combination cap and/or
wall-clock deadline).  Each detection run takes a fresh ``BudgetMeter``
from it, which tracks consumption against a monotonic clock.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from shareguard.config import DEFAULT_DEADLINE_SECONDS, DEFAULT_MAX_COMBINATIONS
from shareguard.errors import InvalidArguments, ResourceExceeded, Timeout


@dataclass(frozen=True)
class Budget:
    """Limits for one detection run.  ``None`` disables a limit."""

    max_combinations: Optional[int] = DEFAULT_MAX_COMBINATIONS
    deadline_seconds: Optional[float] = DEFAULT_DEADLINE_SECONDS

    def __post_init__(self) -> None:
        if self.max_combinations is None and self.deadline_seconds is None:
            raise InvalidArguments("Budget needs a combination cap or a deadline")
        if self.max_combinations is not None and self.max_combinations < 1:
            raise InvalidArguments(f"max_combinations must be >= 1, got {self.max_combinations}")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise InvalidArguments(f"deadline_seconds must be > 0, got {self.deadline_seconds}")

    def meter(self) -> BudgetMeter:
        return BudgetMeter(budget=self)

    def tightened(
        self,
        max_combinations: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ) -> Budget:
        """Return a budget no looser than this one on either limit."""
        return Budget(
            max_combinations=_min_limit(self.max_combinations, max_combinations),
            deadline_seconds=_min_limit(self.deadline_seconds, deadline_seconds),
        )


@dataclass
class BudgetMeter:
    """Running consumption against a ``Budget``."""

    budget: Budget
    consumed: int = 0
    started: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started

    def check_deadline(self) -> None:
        limit = self.budget.deadline_seconds
        if limit is not None and self.elapsed > limit:
            raise Timeout(
                f"deadline of {limit}s passed after {self.consumed} combinations"
            )

    def charge(self) -> None:
        """Account for one more combination, or raise if none are left."""
        cap = self.budget.max_combinations
        if cap is not None and self.consumed >= cap:
            raise ResourceExceeded(
                f"combination budget of {cap} exhausted before enumeration finished"
            )
        self.check_deadline()
        self.consumed += 1


def _min_limit(current, requested):
    if requested is None:
        return current
    if current is None:
        return requested
    return min(current, requested)
