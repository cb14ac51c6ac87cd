"""Command-line interface for generating tournament brackets from a roster."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pybracket.config import TournamentConfig, TournamentConfigError, parse_start
from pybracket.config_loader import MappingProfile
from pybracket.export import export_schedule_to_csv, format_schedule, schedule_to_json
from pybracket.ingest import load_roster, records_from_names
from pybracket.models import PlayerRecord
from pybracket.scheduler import build_schedule

PLAYERS_FILE = Path("players.json")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a multi-round tournament bracket")
    parser.add_argument(
        "--num-players",
        dest="group_size",
        type=int,
        required=True,
        help="Maximum number of players per match",
    )
    parser.add_argument(
        "--num-rounds",
        dest="round_count",
        type=int,
        required=True,
        help="Number of rounds each player will play",
    )
    parser.add_argument(
        "--match-length",
        dest="match_minutes",
        type=int,
        required=True,
        help="Estimated match length in minutes",
    )
    parser.add_argument(
        "--break-length",
        dest="break_minutes",
        type=int,
        default=0,
        help="Estimated break between rounds in minutes",
    )
    parser.add_argument("--start", default=None, help="Start date and time of the first match (ISO format)")
    parser.add_argument(
        "--players",
        nargs="*",
        default=None,
        help="List of player names. Defaults to players in --players-file if not provided",
    )
    parser.add_argument(
        "--players-file",
        type=Path,
        default=PLAYERS_FILE,
        help="Roster JSON or CSV used when --players is not given",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible brackets")
    parser.add_argument("--no-odds", action="store_true", help="Skip fractional odds")
    parser.add_argument("--output", type=Path, default=Path("brackets.json"), help="Output JSON path")
    parser.add_argument("--csv", type=Path, default=None, help="Optional path to write a CSV export")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_players(args: argparse.Namespace, mapping: dict[str, str]) -> list[PlayerRecord]:
    if args.players:
        return records_from_names(args.players)
    if not args.players_file.exists():
        raise SystemExit(f"No players provided and {args.players_file} does not exist")
    print(f"No players provided, reading from {args.players_file} instead...")
    records = load_roster(args.players_file, mapping=mapping or None)
    print(f"Found {len(records)} players")
    return records


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        mapping = _parse_mapping(args.column)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        mapping = profile.roster_mapping | mapping
    if args.save_profile:
        MappingProfile(mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    try:
        players = _resolve_players(args, mapping)
        config = TournamentConfig(
            group_size=args.group_size,
            round_count=args.round_count,
            match_minutes=args.match_minutes,
            break_minutes=args.break_minutes,
            start=parse_start(args.start),
            odds_enabled=not args.no_odds,
            seed=args.seed,
        )
        output = build_schedule(players, config)
    except (TournamentConfigError, ValueError) as exc:
        raise SystemExit(f"Unable to build schedule: {exc}") from exc

    print(format_schedule(output.rounds))
    args.output.write_text(schedule_to_json(output.rounds), encoding="utf-8")
    print(f"Wrote {len(output.rounds)} rounds to {args.output}")
    if args.csv:
        args.csv.write_text(export_schedule_to_csv(output.rounds), encoding="utf-8")
        print(f"Wrote CSV export to {args.csv}")


if __name__ == "__main__":
    main()
