"""Shared data models."""

from .player import MatchResult, PlayerRecord, RoundResult

__all__ = ["MatchResult", "PlayerRecord", "RoundResult"]
