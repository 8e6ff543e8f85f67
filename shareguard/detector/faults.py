"""Majority-vote detection of corrupted shares.

Flow
----
1. Interpolate every k-subset of the shares (within the budget) and fold
   the integer results into a ``SecretTally``.  Subsets that hit a
   duplicate x or a non-integral result are skipped.
2. The most frequent secret wins; its first representative subset is the
   inlier core.
3. Every other share is re-checked together with the first k-1 core
   members.  It is an inlier only if that reproduces the majority secret.

Shares are put in canonical ``(x, y, id)`` order first, so the outcome
does not depend on the order in which they were supplied.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ProcessPoolExecutor
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from shareguard.budget import Budget, BudgetMeter
from shareguard.config import DEFAULT_WORKERS, PARALLEL_BATCH_SIZE
from shareguard.crypto.combinations import Combination, enumerate_combinations
from shareguard.crypto.lagrange import secret_at_zero
from shareguard.detector.models import Classification, Share
from shareguard.detector.tally import Outcome, SecretTally, tally_outcomes
from shareguard.errors import DivisionByZero, InvalidArguments, NotIntegral

log = logging.getLogger(__name__)

Point = Tuple[int, int]


def detect(
    shares: Iterable[Share],
    k: int,
    budget: Budget | None = None,
    workers: Optional[int] = None,
) -> Classification:
    """Recover the majority secret of *shares* and split them into inliers / wrong.

    Raises ``InvalidArguments`` for a bad threshold, ``NoConsistentSecret``
    when no subset interpolates to an integer, and ``ResourceExceeded`` /
    ``Timeout`` when *budget* runs out.
    """
    ordered = sorted(shares, key=lambda s: (s.x, s.y, s.id))
    n = len(ordered)
    if k < 1 or k > n:
        raise InvalidArguments(f"Invalid threshold: k={k}, n={n}")
    if budget is None:
        budget = Budget()
    if workers is None:
        workers = DEFAULT_WORKERS

    points = [s.point for s in ordered]
    meter = budget.meter()
    combos = enumerate_combinations(n, k, meter)

    if workers > 1:
        tally = _tally_parallel(points, combos, workers, meter)
    else:
        tally = tally_outcomes(_evaluate(points, enumerate(combos)))

    log.debug(
        "examined %d combinations of %d shares (k=%d), %d distinct secrets",
        meter.consumed, n, k, len(tally),
    )
    secret, vote = tally.majority()

    # Inlier core: the earliest subset that produced the majority secret
    core = vote.representative
    inliers = set(core)
    anchors = [points[i] for i in core[: k - 1]]
    for i in range(n):
        if i in inliers:
            continue
        meter.check_deadline()
        if _try_secret([points[i]] + anchors) == secret:
            inliers.add(i)

    result = Classification(
        secret=secret,
        inlier_ids=[s.id for i, s in enumerate(ordered) if i in inliers],
        wrong_ids=[s.id for i, s in enumerate(ordered) if i not in inliers],
        combinations_examined=meter.consumed,
        votes=vote.count,
    )
    log.info(
        "majority secret found with %d/%d votes; %d inlier(s), %d wrong share(s)",
        vote.count, meter.consumed, len(result.inlier_ids), len(result.wrong_ids),
    )
    return result


# ---------------------------------------------------------------------------
# Per-combination evaluation
# ---------------------------------------------------------------------------


def _try_secret(subset: Sequence[Point]) -> Optional[int]:
    """Integer secret of *subset*, or None for a degenerate / inconsistent one."""
    try:
        return secret_at_zero(subset)
    except (DivisionByZero, NotIntegral):
        return None


def _evaluate(
    points: Sequence[Point],
    positioned: Iterable[Tuple[int, Combination]],
) -> Iterator[Outcome]:
    for position, combo in positioned:
        yield position, combo, _try_secret([points[i] for i in combo])


def _tally_batch(points: Sequence[Point], batch: List[Tuple[int, Combination]]) -> SecretTally:
    """Worker entry point: fold one batch into a partial tally."""
    return tally_outcomes(_evaluate(points, batch))


def _batches(
    positioned: Iterator[Tuple[int, Combination]], size: int
) -> Iterator[List[Tuple[int, Combination]]]:
    while True:
        batch = list(islice(positioned, size))
        if not batch:
            return
        yield batch


def _tally_parallel(
    points: Sequence[Point],
    combos: Iterator[Combination],
    workers: int,
    meter: BudgetMeter,
) -> SecretTally:
    """Evaluate batches in worker processes and merge the partial tallies.

    At most ``2 * workers`` batches are in flight, so enumeration (and its
    budget checks) stays incremental.  The deadline is checked after every
    merge, including while the last batches drain.
    """
    tally = SecretTally()
    pending: List[Future] = []
    with ProcessPoolExecutor(max_workers=workers) as pool:
        try:
            for batch in _batches(enumerate(combos), PARALLEL_BATCH_SIZE):
                pending.append(pool.submit(_tally_batch, points, batch))
                if len(pending) >= 2 * workers:
                    tally = tally.merge(pending.pop(0).result())
                    meter.check_deadline()
            while pending:
                tally = tally.merge(pending.pop(0).result())
                meter.check_deadline()
        except BaseException:
            for fut in pending:
                fut.cancel()
            raise
    return tally
