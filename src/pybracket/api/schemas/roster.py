from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from pybracket.models import PlayerRecord


class RosterPreviewResponse(BaseModel):
    total_players: int
    players_with_odds: int
    players: List[PlayerRecord] = Field(default_factory=list)
