"""Symmetric pairwise counter of how often two players shared a match."""

from __future__ import annotations

from itertools import combinations
from typing import Dict, Iterable, Iterator, Tuple

PairKey = Tuple[int, int]


def pair_key(a: int, b: int) -> PairKey:
    """Canonical key for an unordered pair of player ids."""

    return (a, b) if a <= b else (b, a)


class MatchupLedger:
    """Counts how many times each unordered pair of players has been grouped.

    Counts only ever grow. A pair that was never recorded reads as 0.
    """

    def __init__(self) -> None:
        self._counts: Dict[PairKey, int] = {}

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def count(self, a: int, b: int) -> int:
        return self._counts.get(pair_key(a, b), 0)

    def increment(self, a: int, b: int) -> None:
        if a == b:
            raise ValueError(f"cannot pair player {a} with itself")
        key = pair_key(a, b)
        self._counts[key] = self._counts.get(key, 0) + 1

    def all_zero(self) -> bool:
        return not any(self._counts.values())

    def seed(self, player_ids: Iterable[int]) -> None:
        """Register every pair at 0 so iteration order is stable before any round."""

        for a, b in combinations(player_ids, 2):
            self._counts.setdefault(pair_key(a, b), 0)

    def record_group(self, player_ids: Iterable[int]) -> None:
        for a, b in combinations(player_ids, 2):
            self.increment(a, b)

    def pairs(self) -> Iterator[tuple[PairKey, int]]:
        return iter(self._counts.items())

    def total(self) -> int:
        return sum(self._counts.values())

    def min_count(self) -> int:
        return min(self._counts.values(), default=0)

    def max_count(self) -> int:
        return max(self._counts.values(), default=0)

    def as_dict(self) -> dict[str, int]:
        return {f"{a}-{b}": count for (a, b), count in self._counts.items()}
