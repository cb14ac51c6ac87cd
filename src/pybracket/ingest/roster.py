"""Helpers to load rosters from JSON or CSV and emit canonical records."""

from __future__ import annotations

import csv
import json
import logging
import re
from io import StringIO
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from pybracket.models import PlayerRecord

logger = logging.getLogger(__name__)


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_average: Optional[str] = None
    raw_show_odds: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str, default_key: Optional[str] = None) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key)
            if spec is None and default_key:
                spec = default_key
            if spec is None:
                return None
            if isinstance(spec, str) and "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        data = {
            "raw_id": extract(parse_spec("player_id")),
            "raw_name": extract(parse_spec("name", "name"), default=""),
            "raw_average": extract(parse_spec("historical_average")),
            "raw_show_odds": extract(parse_spec("show_odds")),
        }
        return cls(**data)


DEFAULT_ROSTER_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "historical_average": "historical_average",
    "show_odds": "show_odds",
}


def _parse_id(raw_id: Optional[str], *, default: int) -> int:
    if raw_id is None or not raw_id.strip():
        return default
    digits = raw_id.strip()
    if not re.fullmatch(r"\d+", digits):
        raise ValueError(f"player id '{raw_id}' is not a non-negative integer")
    return int(digits)


def _parse_average(raw_average: Optional[str]) -> Optional[float]:
    if raw_average is None:
        return None
    text = raw_average.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"historical average '{raw_average}' is not numeric") from None
    if value < 0:
        raise ValueError(f"historical average '{raw_average}' cannot be negative")
    return value


def _parse_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "t", "yes", "y"}:
        return True
    if text in {"0", "false", "f", "no", "n"}:
        return False
    return None


def _check_unique(records: Sequence[PlayerRecord]) -> None:
    seen: set[int] = set()
    for record in records:
        if record.player_id in seen:
            raise ValueError(f"duplicate player id {record.player_id} ({record.name})")
        seen.add(record.player_id)


def rows_to_records(rows: Sequence[RosterRow]) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    for index, row in enumerate(rows):
        if not row.raw_name:
            logger.debug("Skipping roster row %s without a name", index)
            continue
        show_odds = _parse_flag(row.raw_show_odds)
        records.append(
            PlayerRecord(
                player_id=_parse_id(row.raw_id, default=index),
                name=row.raw_name,
                historical_average=_parse_average(row.raw_average),
                show_odds=True if show_odds is None else show_odds,
            )
        )
    _check_unique(records)
    return records


def records_from_names(names: Iterable[str]) -> List[PlayerRecord]:
    """Players numbered by position, as a bare list of names is read."""

    return [
        PlayerRecord(player_id=index, name=name.strip())
        for index, name in enumerate(names)
        if name.strip()
    ]


def records_from_payload(payload: Any) -> List[PlayerRecord]:
    """Accept a JSON array of names or of player objects."""

    if isinstance(payload, Mapping) and "players" in payload:
        payload = payload["players"]
    if not isinstance(payload, list):
        raise ValueError("roster JSON must be an array of names or player objects")
    if all(isinstance(item, str) for item in payload):
        return records_from_names(payload)

    records: List[PlayerRecord] = []
    for index, item in enumerate(payload):
        if isinstance(item, str):
            records.append(PlayerRecord(player_id=index, name=item))
            continue
        if not isinstance(item, Mapping):
            raise ValueError(f"unsupported roster entry at position {index}: {item!r}")
        data = dict(item)
        if "player_id" not in data:
            data["player_id"] = data.pop("id", index)
        if data.get("historical_average") is None and "historical_average_points" in data:
            data["historical_average"] = data.pop("historical_average_points")
        records.append(PlayerRecord.model_validate(data))
    _check_unique(records)
    return records


def load_roster_csv_text(text: str, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    reader = csv.DictReader(StringIO(text))
    return [RosterRow.from_mapping(row, mapping) for row in reader]


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    return load_roster_csv_text(path.read_text(encoding="utf-8"), mapping=mapping)


def parse_roster_text(
    text: str,
    *,
    filename: str = "",
    mapping: Mapping[str, str] | None = None,
) -> List[PlayerRecord]:
    """Parse roster contents, choosing JSON or CSV from the filename or content."""

    stripped = text.lstrip()
    if filename.lower().endswith(".json") or stripped.startswith(("[", "{")):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid roster JSON: {exc}") from exc
        return records_from_payload(payload)
    return rows_to_records(load_roster_csv_text(text, mapping=mapping))


def load_roster(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    records = parse_roster_text(path.read_text(encoding="utf-8"), filename=path.name, mapping=mapping)
    logger.info("Loaded %s players from %s", len(records), path)
    return records
