"""Pydantic models for API I/O."""

from .roster import RosterPreviewResponse
from .schedule import (
    LedgerSummary,
    RunSummaryResponse,
    ScheduleRequest,
    ScheduleResponse,
)

__all__ = [
    "LedgerSummary",
    "RosterPreviewResponse",
    "RunSummaryResponse",
    "ScheduleRequest",
    "ScheduleResponse",
]
