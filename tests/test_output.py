"""
Tests for output formatting helpers and formatter modes
"""

import json
from unittest.mock import MagicMock

import pytest

from veo.client import ListRecordingsResult
from veo.models import Period, Recording, RecordingDetails
from veo.output import (
    OutputFormatter,
    calculate_title_max_length,
    format_duration,
    format_timestamp,
    share_url,
    truncate_string,
)


class TestTruncateString:
    @pytest.mark.parametrize(
        "text,max_len,expected",
        [
            ("Short title", 50, "Short title"),
            (
                "This is a very long title that needs to be truncated",
                30,
                "This is a very long title t...",
            ),
            ("Exactly 20 chars!!!", 19, "Exactly 20 chars!!!"),
            ("Hello World", 3, "Hel"),
            ("Hello", 1, "H"),
            ("", 10, ""),
        ],
    )
    def test_truncate(self, text, max_len, expected):
        assert truncate_string(text, max_len) == expected


class TestFormatting:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "00:00:00"),
            (45, "00:00:45"),
            (3600, "01:00:00"),
            (3665, "01:01:05"),
            (5432, "01:30:32"),
        ],
    )
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_format_timestamp(self):
        assert format_timestamp(0) == "00:00"
        assert format_timestamp(312) == "05:12"
        assert format_timestamp(3725) == "62:05"


class TestTitleWidth:
    def _console(self, is_terminal, width=120):
        console = MagicMock()
        console.is_terminal = is_terminal
        console.size.width = width
        return console

    def test_not_a_terminal_keeps_full_titles(self):
        assert calculate_title_max_length(self._console(False)) == 1000

    def test_width_minus_fixed_columns(self):
        assert calculate_title_max_length(self._console(True, 140)) == 70

    def test_clamped_to_bounds(self):
        assert calculate_title_max_length(self._console(True, 80)) == 30
        assert calculate_title_max_length(self._console(True, 400)) == 100


class TestShareUrl:
    def test_with_kickoff(self):
        periods = [Period(timeframe=(312, 3000)), Period(timeframe=(3300, 6000))]
        assert share_url("match-abc", periods) == "https://app.veo.co/matches/match-abc/#t=05:12"

    def test_without_periods(self):
        assert share_url("match-abc", None) == "https://app.veo.co/matches/match-abc/"
        assert share_url("match-abc", []) == "https://app.veo.co/matches/match-abc/"


class TestFormatterJson:
    def test_recordings_json(self, capsys):
        result = ListRecordingsResult(
            recordings=[Recording(identifier="id1", title="A"), Recording(identifier="id2")],
            total_count=40,
        )
        OutputFormatter("json").output_recordings(result)

        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "success"
        assert data["total_count"] == 40
        assert data["count"] == 2
        assert [r["identifier"] for r in data["recordings"]] == ["id1", "id2"]

    def test_details_json_without_periods(self, capsys):
        details = RecordingDetails(identifier="abc", slug="match-abc", team={"name": "U12"})
        OutputFormatter("json").output_recording_details(details, None)

        data = json.loads(capsys.readouterr().out)
        assert data["recording"]["team"] == {"name": "U12"}
        assert data["periods"] is None
        assert data["share_url"] == "https://app.veo.co/matches/match-abc/"


class TestFormatterHuman:
    def test_error_goes_to_stderr_console(self):
        formatter = OutputFormatter()
        formatter.err_console = MagicMock()
        formatter.output_error("boom")
        printed = formatter.err_console.print.call_args[0][0]
        assert "Error:" in printed
        assert "boom" in printed

    def test_warning_is_prefixed(self):
        formatter = OutputFormatter()
        formatter.err_console = MagicMock()
        formatter.output_warning("could not fetch periods")
        printed = formatter.err_console.print.call_args[0][0]
        assert "Warning:" in printed

    def test_empty_recordings(self, capsys):
        OutputFormatter().output_recordings(ListRecordingsResult())
        captured = capsys.readouterr()
        assert "No recordings found" in captured.out
        assert "Total: 0 recordings" in captured.err

    def test_details_human(self, capsys):
        details = RecordingDetails(
            identifier="abc",
            slug="match-abc",
            title="U12 vs [Rovers]",
            opponent_team_name="Rovers U12",
            opponent_club_name="Rovers FC",
            info={"age_group": "U12", "stats": {"score_aggregated": {"own": 3, "opponent": 2}}},
            reel_url="https://app.veo.co/reels/xyz/",
        )
        OutputFormatter().output_recording_details(details, [Period(timeframe=(60, 2700))])

        out = capsys.readouterr().out
        assert "U12 vs [Rovers]" in out
        assert "Rovers U12 (Rovers FC)" in out
        assert "Score:       3-2" in out
        assert "Age Group:   U12" in out
        assert "https://app.veo.co/matches/match-abc/#t=01:00" in out
        assert "Highlights:  https://app.veo.co/reels/xyz/" in out

    def test_details_human_shows_team(self, capsys):
        details = RecordingDetails(
            identifier="abc",
            slug="match-abc",
            team={"id": 7, "name": "U12 Girls"},
            own_team_home_or_away="home",
        )
        OutputFormatter().output_recording_details(details, None)

        out = capsys.readouterr().out
        assert "Team:        U12 Girls" in out
        assert "Side:        home" in out

    def test_error_in_json_mode_stays_on_stderr(self, capsys):
        OutputFormatter("json").output_error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "boom" in captured.err
