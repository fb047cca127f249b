"""Pytest fixtures for blackjack tests."""

import io
from random import Random
from unittest.mock import Mock

import pytest

from config import GameConfig
from core.game import RoundEngine
from core.leaderboard import ScoreRecord, ScoreStore
from terminal_ui.prompts import Prompter
from terminal_ui.render import ConsoleRenderer


class ScriptedPrompter(Prompter):
    """Answers prompts from a fixed list; runs out like a closed stdin."""

    def __init__(self, answers: list[str]) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []

    def ask(self, message: str) -> str:
        self.asked.append(message)
        if not self._answers:
            raise EOFError("No more scripted answers")
        return self._answers.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._answers)


def _make_record(name: str, winner: str | None = None, player: int = 19, bank: int = 18) -> ScoreRecord:
    return ScoreRecord(
        name=name,
        timestamp="10/19/2026, 14:03:12",
        winner_label=winner or name,
        player_score=player,
        bank_score=bank,
    )


@pytest.fixture
def scripted_prompter():
    """Factory for prompters with fixed answers."""
    return ScriptedPrompter


@pytest.fixture
def make_record():
    """Factory for leaderboard records."""
    return _make_record


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def scripted_rng():
    """Factory for a generator that returns the given values in order."""

    def _make(*values: int) -> Mock:
        stub = Mock(spec=Random)
        stub.randint.side_effect = list(values)
        return stub

    return _make


@pytest.fixture
def rules():
    """Default point ranges."""
    return GameConfig()


@pytest.fixture
def engine(rng, rules):
    """A round engine with a seeded generator."""
    return RoundEngine(rules=rules, rng=rng)


@pytest.fixture
def scripted_engine(scripted_rng, rules):
    """Factory for an engine whose draws are fixed in advance."""

    def _make(*values: int) -> RoundEngine:
        return RoundEngine(rules=rules, rng=scripted_rng(*values))

    return _make


@pytest.fixture
def scores_path(tmp_path):
    """Leaderboard file location that does not exist yet."""
    return tmp_path / "scores.json"


@pytest.fixture
def store(scores_path):
    """A leaderboard store backed by a temporary file."""
    return ScoreStore(scores_path)


@pytest.fixture
def output():
    """Captured renderer output."""
    return io.StringIO()


@pytest.fixture
def renderer(output):
    """Renderer writing plain text to the captured output."""
    return ConsoleRenderer(stream=output, color=False)
