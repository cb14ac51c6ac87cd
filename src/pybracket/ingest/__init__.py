"""Input adapters that normalize raw roster data."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    RosterRow,
    load_roster,
    load_roster_csv,
    parse_roster_text,
    records_from_names,
    records_from_payload,
    rows_to_records,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "RosterRow",
    "load_roster",
    "load_roster_csv",
    "parse_roster_text",
    "records_from_names",
    "records_from_payload",
    "rows_to_records",
]
