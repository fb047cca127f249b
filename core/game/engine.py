"""Round engine with state machine."""

from dataclasses import dataclass, field
from random import Random
from typing import Any, Callable

from transitions import Machine

from config import GameConfig
from core.rng import random_in_range
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import Outcome
from logging_utils import get_logger

logger = get_logger(__name__)


class InvalidPlayerNameError(ValueError):
    """Raised when a round is started without a player name."""


@dataclass(eq=False)
class Round:
    """
    One playthrough from the dealt totals to a terminal outcome.

    Each round carries its own state machine; the outcome can only move
    from in progress to one of the terminal states, once.
    """

    # State machine states
    STATES = [s.name.lower() for s in Outcome if s is not Outcome.NO_WINNER]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "declare_player_win", "source": "in_progress", "dest": "player_win"},
        {"trigger": "declare_bank_win", "source": "in_progress", "dest": "bank_win"},
        {"trigger": "declare_tie", "source": "in_progress", "dest": "tie"},
    ]

    player_name: str
    player_total: int
    bank_total: int
    draws: list[int] = field(default_factory=list)
    machine: Machine = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.player_total < 0 or self.bank_total < 0:
            raise ValueError("Totals cannot be negative")

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="in_progress",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def outcome(self) -> Outcome:
        """Get the current outcome as enum."""
        return Outcome[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def is_finished(self) -> bool:
        """Check if the round reached a terminal outcome."""
        return self.outcome.is_terminal

    def to_dict(self) -> dict[str, Any]:
        """Plain snapshot of the round for display."""
        return {
            "player_name": self.player_name,
            "player_total": self.player_total,
            "bank_total": self.bank_total,
            "draws": list(self.draws),
            "outcome": self.outcome.name,
        }


def evaluate_totals(player_total: int, bank_total: int, target: int = 21) -> Outcome:
    """
    Decide a round from its totals.

    Checks run in a fixed priority order and the first match wins, so a
    player reaching the target beats a bank sitting on it too.

    Args:
        player_total: Player's points
        bank_total: Bank's points
        target: Winning total (21)

    Returns:
        PLAYER_WIN, BANK_WIN or TIE
    """
    if player_total == target:
        return Outcome.PLAYER_WIN
    if player_total > target:
        return Outcome.BANK_WIN
    if bank_total == target:
        return Outcome.BANK_WIN
    if player_total > bank_total:
        return Outcome.PLAYER_WIN
    if bank_total > player_total:
        return Outcome.BANK_WIN
    return Outcome.TIE


_TRIGGERS = {
    Outcome.PLAYER_WIN: "declare_player_win",
    Outcome.BANK_WIN: "declare_bank_win",
    Outcome.TIE: "declare_tie",
}

_OUTCOME_EVENTS = {
    Outcome.PLAYER_WIN: EventType.PLAYER_WINS,
    Outcome.BANK_WIN: EventType.BANK_WINS,
    Outcome.TIE: EventType.TIE,
}


class RoundEngine:
    """
    Deals and decides rounds against the bank.

    The engine holds no round state of its own: every operation takes the
    Round it acts on. Communication with the front end happens through
    events and return values only.
    """

    def __init__(
        self,
        rules: GameConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            rules: Point ranges (uses defaults if not provided)
            rng: Random number generator for reproducible rounds
        """
        self.rules = rules or GameConfig()
        self.rng = rng or Random()
        self.events = EventEmitter()

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def start_round(self, player_name: str) -> Round:
        """
        Deal a new round.

        The bank total is drawn first, then the player's opening total.
        A round whose opening totals already reach the target is decided
        straight away.

        Raises:
            InvalidPlayerNameError: If the name is empty or whitespace
        """
        name = (player_name or "").strip()
        if not name:
            raise InvalidPlayerNameError("Player name cannot be empty")

        bank_total = random_in_range(self.rules.bank_min, self.rules.bank_max, self.rng)
        player_total = random_in_range(self.rules.player_min, self.rules.player_max, self.rng)

        round_ = Round(player_name=name, player_total=player_total, bank_total=bank_total)
        logger.debug("Round started for %s: player=%d bank=%d", name, player_total, bank_total)
        self.events.emit_new(
            EventType.ROUND_STARTED,
            player_name=name,
            player_total=player_total,
        )

        if self._must_stand(round_):
            self.stand(round_)

        return round_

    def draw_card(self, round_: Round) -> tuple[Round, int | None]:
        """
        Player hits: add a random card value to the player's total.

        Returns:
            The round and the drawn value, or None if the round was already over
        """
        if round_.is_finished:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Round is already over",
                outcome=round_.outcome.name,
            )
            return round_, None

        drawn = random_in_range(self.rules.card_min, self.rules.card_max, self.rng)
        round_.player_total += drawn
        round_.draws.append(drawn)
        self.events.emit_new(
            EventType.CARD_DRAWN,
            value=drawn,
            player_total=round_.player_total,
        )

        if self._must_stand(round_):
            self.stand(round_)

        return round_, drawn

    def evaluate(self, round_: Round) -> Outcome:
        """Decide the round from its current totals without changing it."""
        return evaluate_totals(round_.player_total, round_.bank_total, self.rules.target)

    def stand(self, round_: Round) -> Outcome:
        """
        Finalize the round.

        Standing on a finished round returns its outcome unchanged.
        """
        if round_.is_finished:
            return round_.outcome

        self.events.emit_new(EventType.PLAYER_STAND, player_total=round_.player_total)

        outcome = self.evaluate(round_)
        getattr(round_, _TRIGGERS[outcome])()

        reason = self._reason(round_)
        if reason == "blackjack":
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
        elif reason == "bust":
            self.events.emit_new(EventType.PLAYER_BUSTS, player_total=round_.player_total)
        elif reason == "bank_blackjack":
            self.events.emit_new(EventType.BANK_BLACKJACK)

        self.events.emit_new(_OUTCOME_EVENTS[outcome])
        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=outcome.name,
            reason=reason,
            player_total=round_.player_total,
            bank_total=round_.bank_total,
        )
        logger.debug(
            "Round finished for %s: %s (%s) player=%d bank=%d",
            round_.player_name,
            outcome.name,
            reason,
            round_.player_total,
            round_.bank_total,
        )
        return outcome

    def _must_stand(self, round_: Round) -> bool:
        """Either total at or past the target ends the round."""
        target = self.rules.target
        return round_.player_total >= target or round_.bank_total >= target

    def _reason(self, round_: Round) -> str:
        """Which rule of the priority chain decided the round."""
        target = self.rules.target
        if round_.player_total == target:
            return "blackjack"
        if round_.player_total > target:
            return "bust"
        if round_.bank_total == target:
            return "bank_blackjack"
        return "points"
