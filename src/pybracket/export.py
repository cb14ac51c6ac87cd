"""Text, CSV and JSON renderings of a schedule."""

from __future__ import annotations

import csv
from io import StringIO
from typing import List, Sequence

from pydantic import TypeAdapter

from pybracket.models import MatchResult, RoundResult
from pybracket.scheduler.odds import favored_and_underdog, format_fraction

_ROUNDS_ADAPTER = TypeAdapter(List[RoundResult])

TIME_FORMAT = "%I:%M %p"


def _odds_labels(match: MatchResult) -> list[str]:
    favored, underdog = favored_and_underdog(match.fractional_odds)
    names = {player.player_id: player.name for player in match.players}
    labels: list[str] = []
    for player_id, value in match.fractional_odds.items():
        tag = ""
        if player_id == favored:
            tag = "(favoured)"
        elif player_id == underdog:
            tag = "(underdog)"
        parts = [names.get(player_id, str(player_id)), tag, format_fraction(value)]
        labels.append(" ".join(part for part in parts if part))
    return labels


def format_match(match: MatchResult) -> str:
    text = "Match [{}] [{}] [{}]".format(
        match.match_id + 1,
        match.time.strftime(TIME_FORMAT),
        ", ".join(player.name for player in match.players),
    )
    if match.fractional_odds:
        text += " [{}]".format(", ".join(_odds_labels(match)))
    return text


def format_round(round_result: RoundResult) -> str:
    lines = [f"Round [{round_result.round_id + 1}]"]
    lines.extend(format_match(match) for match in round_result.matches)
    return "\n".join(lines)


def format_schedule(rounds: Sequence[RoundResult]) -> str:
    return "\n\n".join(format_round(round_result) for round_result in rounds)


def export_schedule_to_csv(rounds: Sequence[RoundResult]) -> str:
    """One CSV row per match with space-separated player ids and names."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["round", "match", "time", "player_ids", "player_names", "odds"])
    for round_result in rounds:
        for match in round_result.matches:
            writer.writerow([
                round_result.round_id + 1,
                match.match_id + 1,
                match.time.isoformat(),
                " ".join(str(player.player_id) for player in match.players),
                "|".join(player.name for player in match.players),
                " ".join(
                    f"{player_id}:{value:.4f}" for player_id, value in match.fractional_odds.items()
                ),
            ])
    return buffer.getvalue()


def schedule_to_json(rounds: Sequence[RoundResult], *, indent: int | None = 2) -> str:
    return _ROUNDS_ADAPTER.dump_json(list(rounds), indent=indent).decode("utf-8")


def schedule_from_json(text: str | bytes) -> List[RoundResult]:
    return _ROUNDS_ADAPTER.validate_json(text)


__all__ = [
    "export_schedule_to_csv",
    "format_match",
    "format_round",
    "format_schedule",
    "schedule_from_json",
    "schedule_to_json",
]
