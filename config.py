"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED environment variable."""
    raw = os.getenv("BLACKJACK_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"BLACKJACK_SEED must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """Point ranges used to deal a round."""

    bank_min: int = 16
    bank_max: int = 21
    player_min: int = 1
    player_max: int = 11
    card_min: int = 1
    card_max: int = 11
    target: int = 21

    def __post_init__(self) -> None:
        """Validate ranges."""
        for low, high, label in (
            (self.bank_min, self.bank_max, "bank"),
            (self.player_min, self.player_max, "player"),
            (self.card_min, self.card_max, "card"),
        ):
            if low < 0 or low > high:
                raise ValueError(f"{label} range must satisfy 0 <= min <= max")
        if self.target < 1:
            raise ValueError("target must be at least 1")


@dataclass(frozen=True)
class LeaderboardConfig:
    """Leaderboard file configuration."""

    path: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_SCORES_FILE", "scores.json")
    )
    encoding: str = "utf-8"
    indent: int = 2


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    seed: int | None = field(default_factory=_parse_seed)

    game: GameConfig = field(default_factory=GameConfig)
    leaderboard: LeaderboardConfig = field(default_factory=LeaderboardConfig)


# Global configuration instance
config = AppConfig()
