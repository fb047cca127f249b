"""Leaderboard persistence in a local JSON file."""

import json
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from config import LeaderboardConfig
from core.leaderboard.records import Leaderboard, ScoreRecord
from logging_utils import get_logger

logger = get_logger(__name__)


class PersistenceError(Exception):
    """The leaderboard file exists but cannot be understood."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ScoreStore:
    """Stores the leaderboard as a JSON array of records.

    A missing file is an empty leaderboard and is created on first use.
    Every write replaces the whole file in one rename.
    """

    def __init__(
        self,
        path: str | os.PathLike = "scores.json",
        encoding: str = "utf-8",
        indent: int = 2,
    ) -> None:
        self._path = Path(path)
        self._encoding = encoding
        self._indent = indent

    @classmethod
    def from_config(cls, cfg: LeaderboardConfig) -> "ScoreStore":
        return cls(cfg.path, encoding=cfg.encoding, indent=cfg.indent)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def exists(self) -> bool:
        """Check if the backing file has been created."""
        return self._path.is_file()

    def load(self) -> list[ScoreRecord]:
        """Load all records in the order they were added.

        Raises:
            PersistenceError: If the file is not a valid leaderboard
        """
        self._ensure_initialized()
        try:
            text = self._path.read_text(encoding=self._encoding)
        except UnicodeDecodeError as exc:
            logger.error("Leaderboard %s is not %s text: %s", self._path, self._encoding, exc)
            raise PersistenceError(self._path, f"not {self._encoding} text") from exc
        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Leaderboard %s is not valid JSON: %s", self._path, exc)
            raise PersistenceError(self._path, f"invalid JSON ({exc.msg})") from exc

        try:
            return Leaderboard.validate_python(data)
        except ValidationError as exc:
            logger.error("Leaderboard %s has invalid records: %s", self._path, exc)
            raise PersistenceError(
                self._path, f"{exc.error_count()} invalid record field(s)"
            ) from exc

    def append(self, record: ScoreRecord) -> None:
        """Add a record after the existing ones."""
        records = self.load()
        records.append(record)
        self._write(records)
        logger.debug("Saved score for %s (%d records)", record.name, len(records))

    def reset(self) -> None:
        """Discard every record."""
        self._write([])
        logger.info("Leaderboard %s cleared", self._path)

    def has_scores(self) -> bool:
        """Check if there is at least one record, without creating the file."""
        if not self.exists:
            return False
        return len(self.load()) > 0

    @staticmethod
    def sorted_view(records: list[ScoreRecord]) -> list[ScoreRecord]:
        """Order by name, ignoring case; entries for the same name keep their order."""
        return sorted(records, key=lambda r: r.name.casefold())

    def _ensure_initialized(self) -> None:
        """Create an empty leaderboard if there is none yet."""
        if not self.exists:
            self._write([])
            logger.info("Created leaderboard %s", self._path)

    def _write(self, records: list[ScoreRecord]) -> None:
        """Write to a temporary file next to the target, then rename it over."""
        payload = json.dumps(
            [r.to_dict() for r in records],
            indent=self._indent,
            ensure_ascii=False,
        )
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding=self._encoding) as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            os.unlink(tmp_name)
            raise
