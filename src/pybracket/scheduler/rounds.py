"""Partition a roster into one round of matches."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import List, Sequence

from pybracket.config import TournamentConfigError
from pybracket.models import MatchResult, PlayerRecord, RoundResult
from pybracket.scheduler.ledger import MatchupLedger
from pybracket.scheduler.selection import select_group

logger = logging.getLogger(__name__)


def next_group_size(remaining: int, group_size: int) -> int:
    """Size of the next match given how many players are still unplaced.

    An uneven remainder shrinks the match by one; the result is clamped to the
    players that are actually left.
    """

    size = group_size if remaining % group_size == 0 else max(0, group_size - 1)
    return min(max(size, 1), remaining)


def plan_group_sizes(player_count: int, group_size: int) -> List[int]:
    """Match sizes one round of ``player_count`` players will be split into."""

    if group_size <= 0:
        raise TournamentConfigError(f"group_size must be positive, got {group_size}")
    sizes: List[int] = []
    remaining = player_count
    while remaining > 0:
        size = next_group_size(remaining, group_size)
        sizes.append(size)
        remaining -= size
    return sizes


def build_round(
    roster: Sequence[PlayerRecord],
    group_size: int,
    ledger: MatchupLedger,
    round_start: datetime,
    match_spacing: timedelta,
    *,
    rng: random.Random | None = None,
    round_id: int = 0,
    search_limit: int | None = None,
) -> RoundResult:
    """Group every roster player into exactly one match.

    The ledger is only read here; folding the finished round into it is the
    caller's job.
    """

    if group_size <= 0:
        raise TournamentConfigError(f"group_size must be positive, got {group_size}")

    rng = rng or random.Random()
    pool = list(roster)
    rng.shuffle(pool)

    matches: List[MatchResult] = []
    while pool:
        size = next_group_size(len(pool), group_size)
        group = select_group(pool, size, ledger, search_limit=search_limit)
        chosen = {player.player_id for player in group}
        pool = [player for player in pool if player.player_id not in chosen]
        match_id = len(matches)
        matches.append(
            MatchResult(
                match_id=match_id,
                time=round_start + match_spacing * match_id,
                players=list(group),
            )
        )

    logger.debug(
        "Round %s: %s matches (%s)",
        round_id,
        len(matches),
        ", ".join(str(len(match.players)) for match in matches),
    )
    return RoundResult(round_id=round_id, matches=matches)
