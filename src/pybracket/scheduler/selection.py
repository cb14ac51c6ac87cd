"""Pick the least repetitive group of players from a pool."""

from __future__ import annotations

import logging
import math
from itertools import combinations
from typing import Iterator, Sequence

from pybracket.config import default_search_limit
from pybracket.models import PlayerRecord
from pybracket.scheduler.ledger import MatchupLedger

logger = logging.getLogger(__name__)


def score_group(group: Sequence[PlayerRecord], ledger: MatchupLedger) -> int:
    """Uniqueness score of a candidate group; lower means fresher pairings.

    ``sum + max + 2 * min`` over the ledger counts of every pair in the group.
    The sum penalizes total repetition, the max keeps one bad pair from hiding
    behind fresh ones and the doubled min pushes away from groups whose least
    repeated pair has still met before. This is a heuristic, not a guarantee of
    global fairness.
    """

    counts = [ledger.count(a.player_id, b.player_id) for a, b in combinations(group, 2)]
    if not counts:
        return 0
    return sum(counts) + max(counts) + 2 * min(counts)


def index_combinations(n: int, k: int) -> Iterator[tuple[int, ...]]:
    """Every k-of-n index combination exactly once, in lexicographic order."""

    return combinations(range(n), k)


def _greedy_group(pool: Sequence[PlayerRecord], size: int, ledger: MatchupLedger) -> tuple[PlayerRecord, ...]:
    group = [pool[0]]
    remaining = list(pool[1:])
    while len(group) < size:
        best = min(
            remaining,
            key=lambda candidate: sum(ledger.count(candidate.player_id, member.player_id) for member in group),
        )
        remaining.remove(best)
        group.append(best)
    return tuple(group)


def select_group(
    pool: Sequence[PlayerRecord],
    size: int,
    ledger: MatchupLedger,
    *,
    search_limit: int | None = None,
) -> tuple[PlayerRecord, ...]:
    """Return the ``size`` players from ``pool`` with the lowest uniqueness score.

    Ties go to the combination enumerated last. Callers remove the returned
    players from the pool themselves.
    """

    if size <= 0:
        raise ValueError(f"group size must be positive, got {size}")
    if size > len(pool):
        raise ValueError(f"cannot select {size} players from a pool of {len(pool)}")

    if ledger.all_zero():
        return tuple(pool[:size])

    limit = search_limit if search_limit is not None else default_search_limit()
    candidates = math.comb(len(pool), size)
    if candidates > limit:
        logger.warning(
            "Pool of %s players has %s groups of %s (limit %s); using greedy selection",
            len(pool),
            candidates,
            size,
            limit,
        )
        return _greedy_group(pool, size, ledger)

    best: tuple[int, ...] | None = None
    best_score = 0
    for indices in index_combinations(len(pool), size):
        score = score_group([pool[i] for i in indices], ledger)
        # <= keeps the last minimum enumerated
        if best is None or score <= best_score:
            best = indices
            best_score = score

    if best is None:
        raise ValueError(f"no combination of {size} players found in a pool of {len(pool)}")
    logger.debug("Selected group %s with score %s from %s candidates", best, best_score, candidates)
    return tuple(pool[i] for i in best)
