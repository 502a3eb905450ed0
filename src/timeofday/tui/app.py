from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
from pathlib import Path

from textual.app import App, ComposeResult  # type: ignore[import]
from textual.binding import Binding  # type: ignore[import]
from textual.containers import Vertical  # type: ignore[import]
from textual.widgets import DataTable, Footer, Header, Static  # type: ignore[import]

from ..config import ClockConfig, ConfigIssue, ConfigManager
from ..scheduler import Scheduler, UpcomingOccurrence
from ..timeutils import format_12h, format_countdown, format_hhmm, zone_name

logger = logging.getLogger(__name__)


@dataclass
class ClockRow:
    name: str
    time_label: str
    next_label: str
    countdown: str


@dataclass
class IssueRow:
    entry: str
    spec: str
    problem: str


def build_rows(items: list[UpcomingOccurrence], *, twelve_hour: bool) -> list[ClockRow]:
    rows: list[ClockRow] = []
    for item in items:
        value = item.time_of_day
        time_label = value.format_12h() if twelve_hour else str(value)
        next_time = format_12h(item.at.hour, item.at.minute) if twelve_hour else format_hhmm(item.at)
        rows.append(
            ClockRow(
                name=item.name,
                time_label=time_label,
                next_label=f"{item.at.strftime('%a %d %b')} {next_time}",
                countdown=format_countdown(item.remaining),
            )
        )
    return rows


def build_issue_rows(issues: list[ConfigIssue]) -> list[IssueRow]:
    rows: list[IssueRow] = []
    for issue in issues:
        if issue.name is not None:
            entry = issue.name
        elif issue.section == "file":
            entry = "file"
        else:
            entry = f"[{issue.section}]"
        spec = issue.spec if issue.spec is not None else "--"
        rows.append(IssueRow(entry=entry, spec=spec, problem=issue.message))
    return rows


class StatusLine(Static):
    def show(self, config: ClockConfig, now: datetime, problems: int = 0) -> None:
        parts = [
            f"Zone: {zone_name(config.zone)}",
            f"Now: {format_hhmm(now)}",
            f"Times: {len(config.times)}",
        ]
        if problems:
            parts.append(f"Problems: {problems}")
        self.update(" • ".join(parts))


class ClockTable(DataTable):
    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    def update_rows(self, rows: list[ClockRow]) -> None:
        self.clear()
        if not rows:
            self.add_row("--", "--", "No times configured", "--")
            return
        for row in rows:
            self.add_row(row.name, row.time_label, row.next_label, row.countdown, key=row.name)


class IssueTable(DataTable):
    """Problems from the last config load. Hidden while there are none."""

    def update_rows(self, rows: list[IssueRow]) -> None:
        self.clear()
        for row in rows:
            self.add_row(row.entry, row.spec, row.problem)
        self.display = bool(rows)


class ClockApp(App):
    CSS = """
    Screen {
        background: $surface;
    }

    .panel {
        border: round $accent;
        padding: 1 2;
        background: $boost;
        layout: vertical;
        height: 1fr;
    }

    .panel-title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    #clock-table {
        height: 1fr;
    }

    #issue-table {
        height: auto;
        max-height: 8;
        border-top: solid $error;
    }
    """
    TITLE = "Time of Day"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "reload", "Reload"),
        Binding("t", "toggle_clock", "12/24h"),
    ]

    def __init__(self, config_path: Path | None = None) -> None:
        super().__init__()
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load()
        self.scheduler = Scheduler(self.config)
        self.twelve_hour = self.config.clock.twelve_hour
        self.clock_table: ClockTable | None = None
        self.issue_table: IssueTable | None = None
        self.status_line = StatusLine()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self.clock_table = ClockTable(id="clock-table")
        self.issue_table = IssueTable(id="issue-table")
        yield Vertical(
            Static("Upcoming", classes="panel-title"),
            self.status_line,
            self.clock_table,
            self.issue_table,
            classes="panel",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.clock_table.add_columns("Name", "Time", "Next", "In")
        self.issue_table.add_columns("Entry", "Spec", "Problem")
        self.clock_table.focus()
        self.refresh_clock()
        self.set_interval(1.0, self.refresh_clock)
        self._show_config_issues()

    def refresh_clock(self) -> None:
        now = datetime.now(self.config.zone)
        rows = build_rows(self.scheduler.upcoming(now), twelve_hour=self.twelve_hour)
        if self.clock_table is not None:
            self.clock_table.update_rows(rows)
        self.status_line.show(self.config, now, len(self.config_manager.issues()))

    def action_reload(self) -> None:
        self.config = self.config_manager.load()
        self.scheduler = Scheduler(self.config)
        logger.info("Reloaded %d time(s)", len(self.config.times))
        self.refresh_clock()
        self._show_config_issues()

    def action_toggle_clock(self) -> None:
        self.twelve_hour = not self.twelve_hour
        self.refresh_clock()

    def _show_config_issues(self) -> None:
        issues = self.config_manager.issues()
        if self.issue_table is not None:
            self.issue_table.update_rows(build_issue_rows(issues))
        if issues:
            self.notify(
                f"{len(issues)} problem(s) in {self.config_manager.config_path}",
                title="Configuration",
                severity="warning",
            )
