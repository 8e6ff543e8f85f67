"""Value types exchanged with the fault detector."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Share:
    """One party's point ``(x, y)`` on the secret polynomial."""

    id: str
    x: int
    y: int

    @property
    def point(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass
class Classification:
    """Recovered secret plus the partition of share ids."""

    secret: int
    inlier_ids: List[str] = field(default_factory=list)
    wrong_ids: List[str] = field(default_factory=list)
    combinations_examined: int = 0
    votes: int = 0  # how many combinations produced ``secret``
