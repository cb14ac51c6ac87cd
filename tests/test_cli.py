import json
from pathlib import Path

import pytest

from pybracket.cli import main
from pybracket.export import schedule_from_json


def test_cli_writes_json_and_csv(tmp_path: Path, capsys):
    output = tmp_path / "brackets.json"
    csv_path = tmp_path / "brackets.csv"
    main([
        "--num-players", "3",
        "--num-rounds", "2",
        "--match-length", "10",
        "--start", "2024-05-01T19:00:00",
        "--seed", "3",
        "--players", "Mario", "Luigi", "Peach", "Yoshi", "Toad", "Bowser",
        "--output", str(output),
        "--csv", str(csv_path),
    ])

    rounds = schedule_from_json(output.read_text(encoding="utf-8"))
    assert len(rounds) == 2
    assert csv_path.read_text(encoding="utf-8").startswith("round,match")
    assert "Round [2]" in capsys.readouterr().out


def test_cli_reads_players_file(tmp_path: Path):
    roster = tmp_path / "players.json"
    roster.write_text(json.dumps(["A", "B", "C", "D"]), encoding="utf-8")
    output = tmp_path / "out.json"
    main([
        "--num-players", "2",
        "--num-rounds", "1",
        "--match-length", "5",
        "--players-file", str(roster),
        "--output", str(output),
        "--no-odds",
    ])
    rounds = schedule_from_json(output.read_text(encoding="utf-8"))
    assert len(rounds[0].matches) == 2


def test_cli_rejects_bad_group_size(tmp_path: Path):
    with pytest.raises(SystemExit, match="group_size"):
        main([
            "--num-players", "0",
            "--num-rounds", "1",
            "--match-length", "5",
            "--players", "A", "B",
            "--output", str(tmp_path / "out.json"),
        ])


def test_cli_saves_and_reuses_mapping_profile(tmp_path: Path):
    roster = tmp_path / "roster.csv"
    roster.write_text("Id,Driver,Avg\n1,Mario,30\n2,Luigi,10\n", encoding="utf-8")
    profile = tmp_path / "profile.json"
    output = tmp_path / "out.json"
    base_args = [
        "--num-players", "2",
        "--num-rounds", "1",
        "--match-length", "5",
        "--players-file", str(roster),
        "--output", str(output),
    ]
    main(base_args + [
        "--column", "player_id=Id",
        "--column", "name=Driver",
        "--column", "historical_average=Avg",
        "--save-profile", str(profile),
    ])
    saved = json.loads(profile.read_text(encoding="utf-8"))
    assert saved["roster_mapping"]["name"] == "Driver"

    main(base_args + ["--load-profile", str(profile)])
    match = schedule_from_json(output.read_text(encoding="utf-8"))[0].matches[0]
    assert {p.name for p in match.players} == {"Mario", "Luigi"}
    assert match.fractional_odds[2] == pytest.approx(3.0)
