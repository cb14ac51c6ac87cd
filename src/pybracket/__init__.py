"""Matchup-aware tournament bracket generator."""

__version__ = "0.1.0"
