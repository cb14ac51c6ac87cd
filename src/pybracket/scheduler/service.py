"""Run every round of a tournament against a shared matchup ledger."""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Sequence

from pybracket.config import TournamentConfig, TournamentConfigError
from pybracket.models import PlayerRecord, RoundResult
from pybracket.scheduler.ledger import MatchupLedger
from pybracket.scheduler.odds import apply_odds
from pybracket.scheduler.rounds import build_round, plan_group_sizes

logger = logging.getLogger(__name__)


@dataclass
class ScheduleOutput:
    rounds: List[RoundResult]
    ledger: MatchupLedger


def validate_roster(records: Sequence[PlayerRecord]) -> None:
    if not records:
        raise TournamentConfigError("roster is empty")
    duplicates = sorted(pid for pid, count in Counter(r.player_id for r in records).items() if count > 1)
    if duplicates:
        raise TournamentConfigError(f"duplicate player ids in roster: {duplicates}")


def round_start_time(config: TournamentConfig, round_index: int, matches_per_round: int) -> datetime:
    # round 0 starts at config.start and every later round adds one break, not a single fixed offset
    round_length = timedelta(minutes=config.match_minutes * matches_per_round + config.break_minutes)
    return config.start + round_length * round_index


def build_schedule(
    records: Sequence[PlayerRecord],
    config: TournamentConfig,
    *,
    rng: random.Random | None = None,
    ledger: MatchupLedger | None = None,
) -> ScheduleOutput:
    """Build ``config.round_count`` rounds for ``records``.

    ``rng`` defaults to one seeded from ``config.seed``; a passed ``ledger``
    carries pairing history over from earlier play and is updated in place.
    """

    validate_roster(records)
    roster = tuple(records)
    rng = rng or random.Random(config.seed)
    ledger = ledger if ledger is not None else MatchupLedger()
    if config.preseed_ledger:
        ledger.seed(player.player_id for player in roster)

    sizes = plan_group_sizes(len(roster), config.group_size)
    spacing = timedelta(minutes=config.match_minutes)
    logger.info(
        "Scheduling %s players over %s rounds (%s matches per round, sizes %s)",
        len(roster),
        config.round_count,
        len(sizes),
        sizes,
    )

    rounds: List[RoundResult] = []
    for round_index in range(config.round_count):
        round_result = build_round(
            roster,
            config.group_size,
            ledger,
            round_start_time(config, round_index, len(sizes)),
            spacing,
            rng=rng,
            round_id=round_index,
            search_limit=config.search_limit,
        )
        for match in round_result.matches:
            ledger.record_group(match.player_ids)
        if config.odds_enabled:
            round_result = round_result.model_copy(
                update={"matches": [apply_odds(match) for match in round_result.matches]}
            )
        rounds.append(round_result)

    logger.info(
        "Scheduled %s rounds; pair repeats range %s-%s across %s pairs",
        len(rounds),
        ledger.min_count(),
        ledger.max_count(),
        len(ledger),
    )
    return ScheduleOutput(rounds=rounds, ledger=ledger)
