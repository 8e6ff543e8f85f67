"""Vote tally over per-combination interpolation outcomes.

The tally is a fold: ``record`` adds one outcome, ``merge`` combines two
partial tallies (e.g. from parallel workers).  Every vote remembers the
enumeration position of its representative combination, and merging keeps
the smaller position, so the result never depends on the order in which
partial tallies arrive.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Dict, Iterable, Iterator, Optional, Tuple

from shareguard.crypto.combinations import Combination
from shareguard.errors import NoConsistentSecret

# (enumeration position, combination, secret or None when it failed)
Outcome = Tuple[int, Combination, Optional[int]]


@dataclass(frozen=True)
class Vote:
    count: int
    position: int
    representative: Combination


class SecretTally:
    """Mapping secret -> ``Vote``."""

    def __init__(self, votes: Dict[int, Vote] | None = None) -> None:
        self._votes: Dict[int, Vote] = dict(votes or {})

    def record(self, position: int, combination: Combination, secret: Optional[int]) -> SecretTally:
        """Count one outcome; failed combinations (``secret is None``) are skipped."""
        if secret is None:
            return self
        vote = self._votes.get(secret)
        if vote is None:
            self._votes[secret] = Vote(1, position, combination)
        elif position < vote.position:
            self._votes[secret] = Vote(vote.count + 1, position, combination)
        else:
            self._votes[secret] = Vote(vote.count + 1, vote.position, vote.representative)
        return self

    def merge(self, other: SecretTally) -> SecretTally:
        """Return a new tally holding the votes of both."""
        merged = SecretTally(self._votes)
        for secret, theirs in other._votes.items():
            mine = merged._votes.get(secret)
            if mine is None:
                merged._votes[secret] = theirs
                continue
            first = mine if mine.position <= theirs.position else theirs
            merged._votes[secret] = Vote(
                mine.count + theirs.count, first.position, first.representative
            )
        return merged

    def majority(self) -> Tuple[int, Vote]:
        """Secret with the most votes; ties go to the earliest representative."""
        if not self._votes:
            raise NoConsistentSecret(
                "Unable to compute any consistent secret from given shares"
            )
        return min(self._votes.items(), key=lambda item: (-item[1].count, item[1].position))

    def get(self, secret: int) -> Optional[Vote]:
        return self._votes.get(secret)

    def items(self) -> Iterator[Tuple[int, Vote]]:
        return iter(self._votes.items())

    def __len__(self) -> int:
        return len(self._votes)

    def __contains__(self, secret: object) -> bool:
        return secret in self._votes


def tally_outcomes(outcomes: Iterable[Outcome]) -> SecretTally:
    """Fold a stream of outcomes into a fresh tally."""
    return reduce(lambda t, o: t.record(*o), outcomes, SecretTally())


def merge_tallies(tallies: Iterable[SecretTally]) -> SecretTally:
    return reduce(SecretTally.merge, tallies, SecretTally())
