"""Lightweight REST client for the pybracket API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(name: str) -> dict[str, str]:
    if not name:
        return {}
    try:
        return json.loads(name)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pybracket REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster JSON or CSV")
    parser.add_argument("--num-players", type=int, default=4, help="Maximum players per match")
    parser.add_argument("--num-rounds", type=int, default=3, help="Number of rounds")
    parser.add_argument("--match-length", type=int, default=10, help="Match length in minutes")
    parser.add_argument("--break-length", type=int, default=0, help="Break between rounds in minutes")
    parser.add_argument("--start", default=None, help="ISO start time of the first match")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--roster-mapping", default="", help="JSON mapping for roster CSV columns")
    parser.add_argument("--preview-only", action="store_true", help="Parse the roster without scheduling")
    parser.add_argument("--list-runs", action="store_true", help="List recent runs and exit")
    parser.add_argument("--get-run", metavar="RUN_ID", help="Print a stored schedule and exit")
    parser.add_argument("--export-run", metavar="RUN_ID", help="Download schedule CSV for a run")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    if args.list_runs or args.get_run or args.export_run:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list_runs:
                resp = client.get("/runs")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get_run:
                resp = client.get(f"/runs/{args.get_run}/text")
                if resp.status_code == 404:
                    raise SystemExit(f"run {args.get_run} not found")
                resp.raise_for_status()
                print(resp.text)
            if args.export_run:
                resp = client.get(f"/runs/{args.export_run}/export.csv")
                if resp.status_code == 404:
                    raise SystemExit(f"run {args.export_run} not found")
                resp.raise_for_status()
                if args.export_path:
                    args.export_path.write_text(resp.text)
                    print(f"CSV export saved to {args.export_path}")
                else:
                    print(resp.text)
        return

    if args.roster is None:
        raise SystemExit("a roster file is required unless using --list-runs/--get-run/--export-run")

    mapping = build_mapping(args.roster_mapping)
    files = {"roster": (args.roster.name, args.roster.read_bytes(), "text/plain")}
    data = {"roster_mapping": json.dumps(mapping)} if mapping else {}

    with httpx.Client(base_url=args.base_url) as client:
        resp = client.post("/roster/preview", files=files, data=data)
        resp.raise_for_status()
        preview = resp.json()
        print(f"Roster: {preview['total_players']} players, {preview['players_with_odds']} with odds")

        if args.preview_only:
            return

        request = {
            "players": preview["players"],
            "group_size": args.num_players,
            "round_count": args.num_rounds,
            "match_minutes": args.match_length,
            "break_minutes": args.break_length,
            "start": args.start,
            "seed": args.seed,
        }
        resp = client.post("/schedules", json=request)
        if resp.status_code == 400:
            raise SystemExit(resp.json().get("detail", "schedule rejected"))
        resp.raise_for_status()
        payload = resp.json()
        print(f"Run {payload['run_id']}: {len(payload['rounds'])} rounds")
        print(json.dumps(payload["summary"], indent=2))


if __name__ == "__main__":
    main()
