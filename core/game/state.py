"""Round outcome enumeration."""

from enum import Enum, auto


class Outcome(Enum):
    """
    Round state machine states.

    Flow: IN_PROGRESS → PLAYER_WIN | BANK_WIN | TIE

    NO_WINNER is never reached by play; it only labels a persisted result
    where both totals went over the target.
    """

    IN_PROGRESS = auto()
    PLAYER_WIN = auto()
    BANK_WIN = auto()
    TIE = auto()
    NO_WINNER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Check if no further play is possible."""
        return self is not Outcome.IN_PROGRESS
