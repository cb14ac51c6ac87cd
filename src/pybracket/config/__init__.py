"""Configuration helpers for tournament settings."""

from .tournament import (
    TournamentConfig,
    TournamentConfigError,
    default_search_limit,
    parse_start,
)

__all__ = [
    "TournamentConfig",
    "TournamentConfigError",
    "default_search_limit",
    "parse_start",
]
