from datetime import datetime, timezone
from pathlib import Path

from timeofday.config import ClockConfig, ClockSettings, ConfigIssue
from timeofday.scheduler import Scheduler
from timeofday.tui.app import ClockApp, IssueRow, build_issue_rows, build_rows

REFERENCE = datetime(2000, 1, 1, 1, 0, tzinfo=timezone.utc)


def _upcoming():
    config = ClockConfig(clock=ClockSettings(timezone="UTC"), zone=timezone.utc)
    config.add("tea", "3:09 PM")
    config.add("night", "0:30")
    return Scheduler(config).upcoming(REFERENCE)


def test_build_rows_24_hour() -> None:
    rows = build_rows(_upcoming(), twelve_hour=False)
    assert [row.name for row in rows] == ["tea", "night"]
    assert rows[0].time_label == "15:09"
    assert rows[0].next_label == "Sat 01 Jan 15:09"
    assert rows[0].countdown == "14:09:00"
    assert rows[1].next_label == "Sun 02 Jan 00:30"


def test_build_rows_12_hour() -> None:
    rows = build_rows(_upcoming(), twelve_hour=True)
    assert rows[0].time_label == "3:09 PM"
    assert rows[0].next_label == "Sat 01 Jan 3:09 PM"
    assert rows[1].next_label == "Sun 02 Jan 12:30 AM"
    assert rows[1].time_label == "12:30 AM"


def test_bindings_cover_reload_and_toggle() -> None:
    key_to_action = {}
    for b in ClockApp.BINDINGS:
        key = getattr(b, "key", None)
        action = getattr(b, "action", None)
        if key:
            key_to_action[key] = action
    assert key_to_action.get("q") == "quit"
    assert key_to_action.get("r") == "reload"
    assert key_to_action.get("t") == "toggle_clock"


def test_app_reads_clock_preferences(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[clock]\ntimezone = "UTC"\ntwelve_hour = true\n\n[times]\ntea = "16:00"\n', encoding="utf-8")
    app = ClockApp(config_path)
    assert app.twelve_hour is True
    assert list(app.config.times) == ["tea"]
    assert app.config_manager.errors() == []


def test_build_issue_rows_names_entry_and_spec() -> None:
    issues = [
        ConfigIssue("file", "Invalid TOML: boom"),
        ConfigIssue("clock", "Invalid clock.timezone: Unknown time zone 'Mars'"),
        ConfigIssue("times", "Invalid time 'late' ('13:09 PM'): bad", "late", "13:09 PM"),
        ConfigIssue("times", "Time 'count' must be a string, got int", "count"),
    ]
    rows = build_issue_rows(issues)
    assert rows[0] == IssueRow(entry="file", spec="--", problem="Invalid TOML: boom")
    assert rows[1].entry == "[clock]"
    assert (rows[2].entry, rows[2].spec) == ("late", "13:09 PM")
    assert (rows[3].entry, rows[3].spec) == ("count", "--")


def test_app_keeps_config_issues_for_display(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[clock]\ntimezone = "UTC"\n\n[times]\nlate = "13:09 PM"\n', encoding="utf-8")
    app = ClockApp(config_path)
    rows = build_issue_rows(app.config_manager.issues())
    assert [(row.entry, row.spec) for row in rows] == [("late", "13:09 PM")]
