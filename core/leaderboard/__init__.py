"""Persisted results of past rounds."""

from core.leaderboard.records import (
    LABEL_BANK,
    LABEL_NO_WINNER,
    LABEL_TIE,
    ScoreRecord,
    record_for,
    winner_label,
)
from core.leaderboard.store import PersistenceError, ScoreStore

__all__ = [
    "LABEL_BANK",
    "LABEL_NO_WINNER",
    "LABEL_TIE",
    "ScoreRecord",
    "record_for",
    "winner_label",
    "PersistenceError",
    "ScoreStore",
]
