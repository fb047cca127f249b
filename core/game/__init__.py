"""Round engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import Outcome
from core.game.engine import InvalidPlayerNameError, Round, RoundEngine, evaluate_totals

__all__ = [
    "GameEvent",
    "EventType",
    "Outcome",
    "InvalidPlayerNameError",
    "Round",
    "RoundEngine",
    "evaluate_totals",
]
