"""REST API for the pybracket scheduler."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse, Response

from pybracket.api.schemas import (
    LedgerSummary,
    RosterPreviewResponse,
    RunSummaryResponse,
    ScheduleRequest,
    ScheduleResponse,
)
from pybracket.config import TournamentConfig, TournamentConfigError
from pybracket.export import export_schedule_to_csv, format_schedule
from pybracket.ingest import parse_roster_text, records_from_names
from pybracket.models import PlayerRecord, RoundResult
from pybracket.persistence import RunRecord, RunStore
from pybracket.scheduler import build_schedule


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        return json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc


def _request_players(request: ScheduleRequest) -> list[PlayerRecord]:
    if request.players:
        return list(request.players)
    return records_from_names(request.names or [])


def _config_to_dict(config: TournamentConfig) -> dict[str, Any]:
    return {
        "group_size": config.group_size,
        "round_count": config.round_count,
        "match_minutes": config.match_minutes,
        "break_minutes": config.break_minutes,
        "start": config.start.isoformat(),
        "odds_enabled": config.odds_enabled,
        "seed": config.seed,
    }


def _summary_from_ledger(ledger: dict[str, int]) -> LedgerSummary:
    counts = list(ledger.values())
    return LedgerSummary(
        pairs=len(counts),
        total=sum(counts),
        min_count=min(counts, default=0),
        max_count=max(counts, default=0),
    )


def _run_rounds(run: RunRecord) -> list[RoundResult]:
    return [RoundResult.model_validate(item) for item in run.rounds]


def run_to_response(run: RunRecord) -> ScheduleResponse:
    return ScheduleResponse(
        run_id=run.run_id,
        created_at=run.created_at,
        rounds=_run_rounds(run),
        ledger=run.ledger,
        summary=_summary_from_ledger(run.ledger),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="pybracket scheduler")
    store = RunStore(Path(__file__).resolve().parent.parent / "pybracket.sqlite")
    app.state.run_store = store

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/roster/preview", response_model=RosterPreviewResponse)
    async def preview_roster(
        roster: UploadFile = File(...),
        roster_mapping: str | None = Form(None),
    ) -> RosterPreviewResponse:
        contents = await roster.read()
        if not contents:
            raise HTTPException(status_code=400, detail="roster file is empty")
        try:
            records = parse_roster_text(
                contents.decode("utf-8"),
                filename=roster.filename or "",
                mapping=_parse_mapping(roster_mapping) or None,
            )
        except (UnicodeDecodeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return RosterPreviewResponse(
            total_players=len(records),
            players_with_odds=sum(1 for r in records if r.show_odds and (r.historical_average or 0) > 0),
            players=records,
        )

    @app.post("/schedules", response_model=ScheduleResponse)
    async def create_schedule(request: ScheduleRequest) -> ScheduleResponse:
        players = _request_players(request)
        try:
            config = TournamentConfig.from_mapping(request.model_dump())
            output = build_schedule(players, config)
        except TournamentConfigError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        run = store.save_run(
            config=_config_to_dict(config),
            players=[player.model_dump(mode="json") for player in players],
            rounds=[round_result.model_dump(mode="json") for round_result in output.rounds],
            ledger=output.ledger.as_dict(),
        )
        return run_to_response(run)

    def _fetch_run_or_404(run_id: str) -> RunRecord:
        run = store.get_run(run_id)
        if run is None:
            raise HTTPException(status_code=404, detail="Run not found")
        return run

    @app.get("/runs", response_model=list[RunSummaryResponse])
    async def list_runs(limit: int = 50) -> list[RunSummaryResponse]:
        return [
            RunSummaryResponse(
                run_id=run.run_id,
                created_at=run.created_at,
                players=len(run.players),
                rounds=len(run.rounds),
                group_size=int(run.config.get("group_size", 0)),
            )
            for run in store.list_runs(limit=limit)
        ]

    @app.get("/runs/{run_id}", response_model=ScheduleResponse)
    async def get_run(run_id: str) -> ScheduleResponse:
        return run_to_response(_fetch_run_or_404(run_id))

    @app.get("/runs/{run_id}/text", response_class=PlainTextResponse)
    async def run_text(run_id: str) -> str:
        return format_schedule(_run_rounds(_fetch_run_or_404(run_id)))

    @app.get("/runs/{run_id}/export.csv")
    async def export_csv(run_id: str):
        run = _fetch_run_or_404(run_id)
        return Response(
            content=export_schedule_to_csv(_run_rounds(run)),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={run_id}.csv"},
        )

    return app
