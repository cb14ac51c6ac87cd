from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from pybracket.models import PlayerRecord, RoundResult


class ScheduleRequest(BaseModel):
    players: List[PlayerRecord] | None = None
    names: List[str] | None = None
    group_size: int = Field(default=4, ge=1)
    round_count: int = Field(default=1, ge=0)
    match_minutes: int = Field(default=10, ge=0)
    break_minutes: int = Field(default=0, ge=0)
    start: datetime | None = None
    odds_enabled: bool = True
    seed: int | None = None


class LedgerSummary(BaseModel):
    pairs: int
    total: int
    min_count: int
    max_count: int


class ScheduleResponse(BaseModel):
    run_id: str
    created_at: datetime
    rounds: List[RoundResult]
    ledger: dict[str, int]
    summary: LedgerSummary


class RunSummaryResponse(BaseModel):
    run_id: str
    created_at: datetime
    players: int
    rounds: int
    group_size: int
