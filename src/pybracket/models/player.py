"""Canonical player and schedule models shared across ingestion, scheduling and output."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """Normalized roster entry used by the scheduler."""

    player_id: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    historical_average: float | None = Field(default=None, ge=0.0)
    show_odds: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class MatchResult(BaseModel):
    """One group of players competing together at a scheduled time."""

    match_id: int = Field(..., ge=0)
    time: datetime
    players: List[PlayerRecord]
    fractional_odds: Dict[int, float] = Field(default_factory=dict)

    @property
    def player_ids(self) -> tuple[int, ...]:
        return tuple(player.player_id for player in self.players)


class RoundResult(BaseModel):
    """One full partition of the roster into matches."""

    round_id: int = Field(..., ge=0)
    matches: List[MatchResult]

    @property
    def player_ids(self) -> list[int]:
        return [player_id for match in self.matches for player_id in match.player_ids]
