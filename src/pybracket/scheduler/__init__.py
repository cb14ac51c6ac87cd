"""Matchup-aware tournament scheduling."""

from .ledger import MatchupLedger, pair_key
from .odds import apply_odds, compute_odds, favored_and_underdog, format_fraction
from .rounds import build_round, plan_group_sizes
from .selection import index_combinations, score_group, select_group
from .service import ScheduleOutput, build_schedule

__all__ = [
    "MatchupLedger",
    "ScheduleOutput",
    "apply_odds",
    "build_round",
    "build_schedule",
    "compute_odds",
    "favored_and_underdog",
    "format_fraction",
    "index_combinations",
    "pair_key",
    "plan_group_sizes",
    "score_group",
    "select_group",
]
