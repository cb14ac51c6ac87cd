"""Fractional odds derived from historical averages within a match."""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, Mapping

from pybracket.models import MatchResult


def compute_odds(match: MatchResult) -> Dict[int, float]:
    """Odds against each eligible player winning ``match``.

    Probability is a player's share of the summed historical averages of the
    match and odds are ``(1 - p) / p``. Players without odds display or with a
    zero share are left out, and a match whose averages sum to zero or less gets
    no odds at all.
    """

    total = sum(player.historical_average or 0.0 for player in match.players)
    if total <= 0:
        return {}

    odds: Dict[int, float] = {}
    for player in match.players:
        if not player.show_odds:
            continue
        probability = (player.historical_average or 0.0) / total
        if probability <= 0:
            continue
        odds[player.player_id] = (1.0 - probability) / probability
    return odds


def apply_odds(match: MatchResult) -> MatchResult:
    return match.model_copy(update={"fractional_odds": compute_odds(match)})


def favored_and_underdog(odds: Mapping[int, float]) -> tuple[int | None, int | None]:
    """Ids with the lowest and the highest odds.

    Ties go to whichever entry comes first in the mapping's iteration order.
    """

    if not odds:
        return None, None
    favored = min(odds, key=lambda player_id: odds[player_id])
    underdog = max(odds, key=lambda player_id: odds[player_id])
    return favored, underdog


def format_fraction(value: float, *, max_denominator: int = 10) -> str:
    """Render odds as ``"3/1"`` style text."""

    fraction = Fraction(value).limit_denominator(max_denominator)
    return f"{fraction.numerator}/{fraction.denominator}"
