"""
Output formatters for different output modes (JSON, human-readable)
"""

import json
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from veo.client import ListRecordingsResult
from veo.models import Period, RecordingDetails, kickoff_offset

SHARE_URL_BASE = "https://app.veo.co/matches"

# ID (36) + DURATION (8) + CREATED (16) + column padding
FIXED_COLUMNS_WIDTH = 70
MIN_TITLE_WIDTH = 30
MAX_TITLE_WIDTH = 100
UNTRUNCATED_TITLE_WIDTH = 1000
FALLBACK_TITLE_WIDTH = 50


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS"""
    seconds = max(int(seconds), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_timestamp(seconds: int) -> str:
    """Format seconds as MM:SS for share URL fragments (minutes may exceed 59)"""
    seconds = max(int(seconds), 0)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def truncate_string(text: str, max_len: int) -> str:
    """Truncate text to max_len characters, marking the cut with '...'"""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def calculate_title_max_length(console: Console) -> int:
    """Title column width that keeps a list row on one terminal line"""
    if not console.is_terminal:
        # Piped or redirected: keep full titles
        return UNTRUNCATED_TITLE_WIDTH
    try:
        width = console.size.width
    except Exception:
        return FALLBACK_TITLE_WIDTH
    return max(MIN_TITLE_WIDTH, min(MAX_TITLE_WIDTH, width - FIXED_COLUMNS_WIDTH))


def share_url(slug: str, periods: list[Period] | None = None) -> str:
    """Public match URL, deep-linked to kickoff when the periods are known"""
    offset = kickoff_offset(periods)
    if offset is None:
        return f"{SHARE_URL_BASE}/{slug}/"
    return f"{SHARE_URL_BASE}/{slug}/#t={format_timestamp(offset)}"


def _format_local(value: datetime | None, fmt: str) -> str:
    if value is None:
        return "N/A"
    return value.astimezone().strftime(fmt)


def _format_score(value: float | None) -> str:
    return f"{value if value is not None else 0:.0f}"


class OutputFormatter:
    """Format command output in human or JSON mode"""

    def __init__(self, mode: str = "human"):
        """
        Initialize formatter

        Args:
            mode: Output mode (human, json)
        """
        self.mode = mode.lower()
        self.console = Console()
        # Diagnostics (totals, warnings, errors) never mix with stdout data
        self.err_console = Console(stderr=True)

    def output_recordings(self, result: ListRecordingsResult) -> None:
        """
        Output a page (or all pages) of recordings

        Args:
            result: Recordings and the server-reported total
        """
        if self.mode == "json":
            self._output_json(
                {
                    "status": "success",
                    "command": "list",
                    "total_count": result.total_count,
                    "count": len(result.recordings),
                    "recordings": [r.to_dict() for r in result.recordings],
                }
            )
            return

        if not result.recordings:
            self.console.print("[yellow]No recordings found[/yellow]")
        else:
            title_max_len = calculate_title_max_length(self.console)
            table = Table(box=None, pad_edge=False, show_edge=False)
            table.add_column("ID", style="cyan", no_wrap=True)
            table.add_column("TITLE", style="green", no_wrap=True)
            table.add_column("DURATION", style="magenta", no_wrap=True)
            table.add_column("CREATED", style="blue", no_wrap=True)

            for recording in result.recordings:
                created = (
                    recording.created.strftime("%Y-%m-%d %H:%M") if recording.created else ""
                )
                table.add_row(
                    escape(recording.identifier),
                    escape(truncate_string(recording.title, title_max_len)),
                    format_duration(recording.duration),
                    created,
                )
            if not self.console.is_terminal:
                # Piped output: rich would otherwise squeeze the table to 80 columns
                self.console.width = FIXED_COLUMNS_WIDTH + title_max_len
            self.console.print(table)

        total = f"\nTotal: {len(result.recordings)} recordings"
        if result.total_count > len(result.recordings):
            total += f" (of {result.total_count})"
        self.err_console.print(total)

    def output_recording_details(
        self, details: RecordingDetails, periods: list[Period] | None = None
    ) -> None:
        """
        Output one recording with its match metadata

        Args:
            details: Recording details
            periods: Match periods, or None when they could not be fetched
        """
        url = share_url(details.slug, periods)
        if self.mode == "json":
            self._output_json(
                {
                    "status": "success",
                    "command": "get",
                    "recording": details.to_dict(),
                    "periods": [p.to_dict() for p in periods] if periods is not None else None,
                    "share_url": url,
                }
            )
            return

        lines: list[tuple[str, str]] = [
            ("ID", details.identifier),
            ("Title", details.title),
            ("Type", details.type),
            ("Start", _format_local(details.start, "%Y-%m-%d %H:%M:%S %Z")),
            ("End", _format_local(details.end, "%Y-%m-%d %H:%M:%S %Z")),
            ("Duration", format_duration(details.duration)),
        ]
        self._print_fields(lines)

        own_team = [
            ("Team", details.team_name),
            ("Side", details.own_team_home_or_away),
            ("Own Color", details.own_team_color),
            ("Formation", details.own_team_formation),
        ]
        if any(value for _, value in own_team):
            self.console.print()
        self._print_fields([(label, value) for label, value in own_team if value])

        if details.opponent_team_name or details.opponent_club_name:
            opponent = details.opponent_team_name
            if details.opponent_club_name and details.opponent_club_name != opponent:
                opponent = f"{opponent} ({details.opponent_club_name})".strip()
            self.console.print()
            self._print_fields([("Opponent", opponent)])
        self._print_fields(
            [
                (label, value)
                for label, value in (
                    ("Opp Color", details.opponent_team_color),
                    ("Opp Short", details.opponent_short_name),
                    ("Opp Form", details.opponent_team_formation),
                )
                if value
            ]
        )

        score = details.score()
        if score is not None:
            own, opponent_score = score
            score_text = f"{_format_score(own)}-{_format_score(opponent_score)}"
            self._print_fields([("Score", score_text)])
        if details.age_group:
            self._print_fields([("Age Group", details.age_group)])

        self.console.print()
        self._print_fields([("Slug", details.slug)])
        self.console.print()
        self._print_fields([("Share URL", url)])
        if details.reel_url:
            self._print_fields([("Highlights", details.reel_url)])

    def output_error(self, message: str) -> None:
        """Output error message on stderr (JSON errors are written by the CLI)"""
        self.err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)

    def output_warning(self, message: str) -> None:
        """Output a non-fatal warning on stderr"""
        self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def output_info(self, message: str) -> None:
        """Output info message"""
        if self.mode == "json":
            return
        self.err_console.print(escape(message), soft_wrap=True)

    def _print_fields(self, fields: list[tuple[str, str]]) -> None:
        for label, value in fields:
            self.console.print(
                f"{label + ':':<12} {escape(value)}", highlight=False, soft_wrap=True
            )

    def _output_json(self, data: Any) -> None:
        """Output as JSON"""
        print(json.dumps(data, indent=2))
