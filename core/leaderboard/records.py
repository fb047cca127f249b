"""Leaderboard records: one immutable entry per finished round."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from core.game.engine import Round

# Winner labels stored alongside the player's own name
LABEL_TIE = "Tie"
LABEL_NO_WINNER = "No winner"
LABEL_BANK = "Bank"


class ScoreRecord(BaseModel):
    """
    Result of one round as stored in the leaderboard file.

    Field aliases are the keys used on disk.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    timestamp: str = Field(..., alias="date")
    winner_label: str = Field(..., alias="winner")
    player_score: int = Field(..., ge=0, alias="playerScore")
    bank_score: int = Field(..., ge=0, alias="bankScore")

    def to_dict(self) -> dict:
        """Convert to the on-disk dictionary."""
        return self.model_dump(by_alias=True)


# Validates a whole leaderboard file
Leaderboard = TypeAdapter(list[ScoreRecord])


def winner_label(player_name: str, player_total: int, bank_total: int, target: int = 21) -> str:
    """
    Label the winner of a finished round for the leaderboard.

    This table is separate from the round outcome and does not always agree
    with it: a player and a bank both on the target are labelled "Tie", and
    both over the target are labelled "No winner".
    """
    if player_total > target and bank_total > target:
        return LABEL_NO_WINNER
    if player_total > target:
        return LABEL_BANK
    if bank_total > target:
        return player_name
    if player_total == bank_total:
        return LABEL_TIE
    if player_total > bank_total:
        return player_name
    return LABEL_BANK


def format_timestamp(moment: datetime | None = None) -> str:
    """Locale date and time, e.g. '10/19/26, 14:03:12'."""
    return (moment or datetime.now()).strftime("%x, %X")


def record_for(round_: Round, target: int = 21, timestamp: str | None = None) -> ScoreRecord:
    """Build the leaderboard record for a finished round."""
    if not round_.is_finished:
        raise ValueError("Cannot record a round that is still in progress")

    return ScoreRecord(
        name=round_.player_name,
        timestamp=timestamp or format_timestamp(),
        winner_label=winner_label(
            round_.player_name, round_.player_total, round_.bank_total, target
        ),
        player_score=round_.player_total,
        bank_score=round_.bank_total,
    )
