"""Core game logic - 100% UI-agnostic."""

from core.rng import random_in_range
from core.game import Outcome, Round, RoundEngine
from core.leaderboard import ScoreRecord, ScoreStore

__all__ = [
    "random_in_range",
    "Outcome",
    "Round",
    "RoundEngine",
    "ScoreRecord",
    "ScoreStore",
]
