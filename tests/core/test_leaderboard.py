"""Tests for leaderboard records and the score store."""

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from core.game import Round
from core.leaderboard import (
    LABEL_BANK,
    LABEL_NO_WINNER,
    LABEL_TIE,
    PersistenceError,
    ScoreRecord,
    ScoreStore,
    record_for,
    winner_label,
)
from core.leaderboard.records import format_timestamp


class TestWinnerLabel:
    """Tests for the persisted winner label."""

    @pytest.mark.parametrize(
        "player, bank, expected",
        [
            (22, 23, LABEL_NO_WINNER),
            (22, 18, LABEL_BANK),
            (18, 22, "Ann"),
            (18, 18, LABEL_TIE),
            (21, 21, LABEL_TIE),
            (19, 18, "Ann"),
            (17, 18, LABEL_BANK),
            (20, 21, LABEL_BANK),
        ],
    )
    def test_label_table(self, player, bank, expected):
        """Test each row of the label table."""
        assert winner_label("Ann", player, bank) == expected


class TestScoreRecord:
    """Tests for ScoreRecord."""

    def test_on_disk_keys(self, make_record):
        """Test that records serialize with the leaderboard file keys."""
        record = make_record("Ann", player=19, bank=18)
        assert record.to_dict() == {
            "name": "Ann",
            "date": "10/19/2026, 14:03:12",
            "winner": "Ann",
            "playerScore": 19,
            "bankScore": 18,
        }

    def test_load_from_on_disk_keys(self):
        """Test validating a dictionary read from disk."""
        record = ScoreRecord.model_validate(
            {"name": "Ann", "date": "d", "winner": "Bank", "playerScore": 12, "bankScore": 20}
        )
        assert record.winner_label == LABEL_BANK
        assert record.player_score == 12

    def test_records_are_immutable(self, make_record):
        """Test that a record cannot be changed after creation."""
        record = make_record("Ann")
        with pytest.raises(ValidationError):
            record.player_score = 5

    def test_negative_score_rejected(self):
        """Test score validation."""
        with pytest.raises(ValidationError):
            ScoreRecord(name="Ann", timestamp="d", winner_label="Ann", player_score=-1, bank_score=18)

    def test_record_for_finished_round(self):
        """Test building a record from a round."""
        round_ = Round(player_name="Ann", player_total=19, bank_total=18)
        round_.declare_player_win()

        record = record_for(round_, timestamp="now")
        assert record == ScoreRecord(
            name="Ann", timestamp="now", winner_label="Ann", player_score=19, bank_score=18
        )

    def test_record_for_tie_on_21(self):
        """Test that 21 against 21 wins the round but is labelled a tie."""
        round_ = Round(player_name="Ann", player_total=21, bank_total=21)
        round_.declare_player_win()
        assert record_for(round_).winner_label == LABEL_TIE

    def test_record_for_unfinished_round_rejected(self):
        """Test that an in-progress round cannot be recorded."""
        round_ = Round(player_name="Ann", player_total=9, bank_total=18)
        with pytest.raises(ValueError):
            record_for(round_)

    def test_format_timestamp(self):
        """Test the timestamp uses the locale date and time."""
        moment = datetime(2026, 10, 19, 14, 3, 12)
        assert format_timestamp(moment) == moment.strftime("%x, %X")


class TestScoreStore:
    """Tests for ScoreStore persistence."""

    def test_load_missing_file_is_empty(self, store, scores_path):
        """Test that a missing file reads as empty and gets created."""
        assert not scores_path.exists()
        assert store.load() == []
        assert json.loads(scores_path.read_text(encoding="utf-8")) == []

    def test_append_then_load(self, store, make_record):
        """Test that appended records come back in order."""
        first = make_record("Ann")
        second = make_record("Bob", winner=LABEL_BANK, player=12, bank=20)

        store.append(first)
        before = store.load()
        store.append(second)

        assert store.load() == before + [second]
        assert store.load() == [first, second]

    def test_reset(self, store, make_record):
        """Test that reset empties the leaderboard."""
        store.append(make_record("Ann"))
        store.reset()
        assert store.load() == []

    def test_has_scores(self, store, scores_path, make_record):
        """Test has_scores without creating the file."""
        assert not store.has_scores()
        assert not scores_path.exists()

        store.load()
        assert not store.has_scores()

        store.append(make_record("Ann"))
        assert store.has_scores()

    def test_file_format(self, store, scores_path, make_record):
        """Test the file is an indented UTF-8 JSON array."""
        store.append(make_record("Zoë"))
        text = scores_path.read_text(encoding="utf-8")

        assert "Zoë" in text
        assert text.startswith("[\n  {")
        assert json.loads(text)[0]["playerScore"] == 19

    def test_reads_existing_leaderboard(self, scores_path):
        """Test loading a leaderboard written by an earlier version."""
        scores_path.write_text(
            json.dumps(
                [
                    {
                        "name": "tidjee",
                        "date": "9/13/2024, 3:12:45 PM",
                        "winner": "Bank",
                        "playerScore": 24,
                        "bankScore": 17,
                    }
                ],
                indent=2,
            ),
            encoding="utf-8",
        )
        records = ScoreStore(scores_path).load()
        assert records[0].name == "tidjee"
        assert records[0].player_score == 24

    def test_blank_file_is_empty(self, scores_path):
        """Test that an empty file reads as an empty leaderboard."""
        scores_path.write_text("", encoding="utf-8")
        assert ScoreStore(scores_path).load() == []

    def test_invalid_json_raises(self, scores_path):
        """Test that corrupt JSON is reported and left untouched."""
        scores_path.write_text("{not json", encoding="utf-8")
        store = ScoreStore(scores_path)

        with pytest.raises(PersistenceError) as exc_info:
            store.load()
        assert exc_info.value.path == scores_path
        assert scores_path.read_text(encoding="utf-8") == "{not json"

    def test_non_utf8_file_raises(self, scores_path):
        """Test that undecodable bytes are reported and left untouched."""
        scores_path.write_bytes(b"\xff\xfe garbage")

        with pytest.raises(PersistenceError) as exc_info:
            ScoreStore(scores_path).load()
        assert "utf-8" in exc_info.value.reason
        assert scores_path.read_bytes() == b"\xff\xfe garbage"

    @pytest.mark.parametrize(
        "content",
        [
            {"name": "Ann"},
            [{"name": "Ann"}],
            [{"name": "Ann", "date": "d", "winner": "Ann", "playerScore": "many", "bankScore": 1}],
        ],
    )
    def test_invalid_records_raise(self, scores_path, content):
        """Test that well-formed JSON with bad records is reported."""
        scores_path.write_text(json.dumps(content), encoding="utf-8")
        with pytest.raises(PersistenceError):
            ScoreStore(scores_path).load()

    def test_append_to_corrupt_file_keeps_data(self, scores_path, make_record):
        """Test that a failed append does not overwrite the file."""
        scores_path.write_text("[{", encoding="utf-8")
        with pytest.raises(PersistenceError):
            ScoreStore(scores_path).append(make_record("Ann"))
        assert scores_path.read_text(encoding="utf-8") == "[{"

    def test_reset_recovers_corrupt_file(self, scores_path):
        """Test that reset replaces a corrupt leaderboard."""
        scores_path.write_text("garbage", encoding="utf-8")
        store = ScoreStore(scores_path)
        store.reset()
        assert store.load() == []

    def test_no_temporary_files_left(self, store, scores_path, make_record):
        """Test that writes leave only the leaderboard file behind."""
        store.append(make_record("Ann"))
        store.append(make_record("Bob"))
        store.reset()
        assert [p.name for p in scores_path.parent.iterdir()] == ["scores.json"]

    def test_creates_missing_directory(self, tmp_path, make_record):
        """Test the parent directory is created on first write."""
        store = ScoreStore(tmp_path / "data" / "scores.json")
        store.append(make_record("Ann"))
        assert len(store.load()) == 1

    def test_failed_write_cleans_up(self, tmp_path, make_record):
        """Test that a write over a directory fails and leaves no temp file."""
        target = tmp_path / "scores.json"
        target.mkdir()
        store = ScoreStore(target)

        with pytest.raises(OSError):
            store.append(make_record("Ann"))
        assert [p.name for p in tmp_path.iterdir()] == ["scores.json"]

    def test_from_config(self, scores_path):
        """Test building a store from configuration."""
        from config import LeaderboardConfig

        store = ScoreStore.from_config(LeaderboardConfig(path=str(scores_path)))
        assert store.path == scores_path


class TestSortedView:
    """Tests for leaderboard ordering."""

    def test_case_insensitive_name_order(self, make_record):
        """Test names sort alphabetically regardless of case."""
        records = [make_record("bob"), make_record("Ann"), make_record("zack")]
        assert [r.name for r in ScoreStore.sorted_view(records)] == ["Ann", "bob", "zack"]

    def test_same_name_keeps_insertion_order(self, make_record):
        """Test the sort is stable for repeated names."""
        records = [
            make_record("bob", player=1),
            make_record("Ann"),
            make_record("Bob", player=2),
            make_record("bob", player=3),
        ]
        view = ScoreStore.sorted_view(records)
        assert [(r.name, r.player_score) for r in view[1:]] == [("bob", 1), ("Bob", 2), ("bob", 3)]

    def test_does_not_modify_input(self, make_record):
        """Test that sorting returns a new list."""
        records = [make_record("bob"), make_record("Ann")]
        ScoreStore.sorted_view(records)
        assert [r.name for r in records] == ["bob", "Ann"]
