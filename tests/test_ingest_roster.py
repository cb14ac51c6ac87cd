import json
from pathlib import Path

import pytest

from pybracket.ingest import (
    RosterRow,
    load_roster,
    parse_roster_text,
    records_from_names,
    records_from_payload,
    rows_to_records,
)


def _row(**kwargs):
    mapping = {
        "player_id": "player_id",
        "name": "name",
        "historical_average": "historical_average",
        "show_odds": "show_odds",
    }
    return RosterRow.from_mapping(kwargs, mapping)


def test_rows_to_records_parses_fields():
    rows = [
        _row(player_id="7", name="Mario", historical_average="31.5", show_odds="yes"),
        _row(player_id="", name="Luigi", historical_average="", show_odds="no"),
    ]
    records = rows_to_records(rows)

    assert [r.player_id for r in records] == [7, 1]
    assert records[0].historical_average == pytest.approx(31.5)
    assert records[1].historical_average is None
    assert records[1].show_odds is False


def test_rows_to_records_rejects_bad_average():
    with pytest.raises(ValueError, match="not numeric"):
        rows_to_records([_row(player_id="1", name="Toad", historical_average="fast")])


def test_rows_to_records_rejects_negative_average():
    with pytest.raises(ValueError, match="negative"):
        rows_to_records([_row(player_id="1", name="Toad", historical_average="-3.5")])


def test_rows_to_records_rejects_duplicate_ids():
    with pytest.raises(ValueError, match="duplicate"):
        rows_to_records([_row(player_id="1", name="A"), _row(player_id="1", name="B")])


def test_from_mapping_joins_columns():
    row = RosterRow.from_mapping({"First": "Princess", "Last": "Peach"}, {"name": "First|Last"})
    assert row.raw_name == "Princess Peach"


def test_records_from_names_numbers_by_position():
    records = records_from_names(["Mario", " ", "Yoshi"])
    assert [(r.player_id, r.name) for r in records] == [(0, "Mario"), (1, "Yoshi")]


def test_records_from_payload_accepts_objects():
    records = records_from_payload(
        [
            {"id": 3, "name": "Wario", "historical_average_points": 12.0},
            {"player_id": 5, "name": "Waluigi", "show_odds": False},
        ]
    )
    assert records[0].player_id == 3
    assert records[0].historical_average == pytest.approx(12.0)
    assert records[1].show_odds is False


def test_records_from_payload_rejects_scalar():
    with pytest.raises(ValueError):
        records_from_payload("Mario")


def test_parse_roster_text_detects_csv():
    text = "player_id,name,historical_average\n1,Bowser,40\n2,Koopa,20\n"
    records = parse_roster_text(text, filename="roster.csv")
    assert [r.name for r in records] == ["Bowser", "Koopa"]


def test_load_roster_json_names(tmp_path: Path):
    path = tmp_path / "players.json"
    path.write_text(json.dumps(["Mario", "Luigi", "Peach"]), encoding="utf-8")
    records = load_roster(path)
    assert [r.player_id for r in records] == [0, 1, 2]


def test_load_roster_csv_with_mapping(tmp_path: Path):
    path = tmp_path / "roster.csv"
    path.write_text("Id,First,Last,Avg\n10,Donkey,Kong,55\n11,Diddy,Kong,\n", encoding="utf-8")
    records = load_roster(path, mapping={"player_id": "Id", "name": "First|Last", "historical_average": "Avg"})
    assert [r.name for r in records] == ["Donkey Kong", "Diddy Kong"]
    assert records[1].historical_average is None
