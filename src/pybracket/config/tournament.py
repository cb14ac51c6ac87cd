"""Tournament configuration and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_SEARCH_LIMIT_ENV = "PYBRACKET_SEARCH_LIMIT"
_SEARCH_LIMIT_DEFAULT = 250_000


class TournamentConfigError(ValueError):
    """Raised when a tournament cannot be scheduled with the given settings."""


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_search_limit() -> int:
    """Largest number of candidate groups searched exhaustively per selection."""

    return _env_int(_SEARCH_LIMIT_ENV, _SEARCH_LIMIT_DEFAULT, min_value=1)


def parse_start(raw: str | datetime | None) -> datetime:
    """Parse a tournament start, falling back to the current time."""

    if isinstance(raw, datetime):
        return raw
    if raw:
        try:
            return datetime.fromisoformat(raw.strip())
        except ValueError:
            logger.warning("Defaulting to now. Unable to parse start time from %r", raw)
    return datetime.now().replace(second=0, microsecond=0)


@dataclass(frozen=True)
class TournamentConfig:
    group_size: int
    round_count: int
    match_minutes: int
    break_minutes: int = 0
    start: datetime = field(default_factory=lambda: parse_start(None))
    odds_enabled: bool = True
    seed: int | None = None
    preseed_ledger: bool = True
    search_limit: int = field(default_factory=default_search_limit)

    def __post_init__(self) -> None:
        if self.group_size <= 0:
            raise TournamentConfigError(f"group_size must be positive, got {self.group_size}")
        if self.round_count < 0:
            raise TournamentConfigError(f"round_count cannot be negative, got {self.round_count}")
        if self.match_minutes < 0:
            raise TournamentConfigError(f"match_minutes cannot be negative, got {self.match_minutes}")
        if self.break_minutes < 0:
            raise TournamentConfigError(f"break_minutes cannot be negative, got {self.break_minutes}")
        if self.search_limit <= 0:
            raise TournamentConfigError(f"search_limit must be positive, got {self.search_limit}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TournamentConfig":
        """Build a config from loose JSON or form input."""

        def as_int(key: str, default: int | None = None) -> int:
            value = data.get(key, default)
            if value is None:
                raise TournamentConfigError(f"missing required setting {key!r}")
            try:
                return int(value)
            except (TypeError, ValueError):
                raise TournamentConfigError(f"setting {key!r} must be an integer, got {value!r}") from None

        def as_flag(key: str, default: bool) -> bool:
            value = data.get(key)
            if value is None:
                return default
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in {"1", "true", "t", "yes", "y"}:
                return True
            if text in {"0", "false", "f", "no", "n"}:
                return False
            raise TournamentConfigError(f"setting {key!r} must be a boolean, got {value!r}")

        kwargs: dict[str, Any] = {
            "group_size": as_int("group_size"),
            "round_count": as_int("round_count"),
            "match_minutes": as_int("match_minutes"),
            "break_minutes": as_int("break_minutes", 0),
            "start": parse_start(data.get("start")),
            "odds_enabled": as_flag("odds_enabled", True),
            "seed": as_int("seed") if data.get("seed") is not None else None,
            "preseed_ledger": as_flag("preseed_ledger", True),
        }
        if data.get("search_limit") is not None:
            kwargs["search_limit"] = as_int("search_limit")
        return cls(**kwargs)
