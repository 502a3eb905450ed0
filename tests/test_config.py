from datetime import timezone
import logging
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import tomllib

from timeofday.config import ClockConfig, ClockSettings, ConfigIssue, ConfigManager


def _write(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_missing_config_loads_defaults_without_writing(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.toml"
    manager = ConfigManager(path)
    config = manager.load()
    assert config.times == {}
    assert config.clock.timezone == ""
    assert manager.errors() == []
    assert not path.exists()
    assert not path.parent.exists()


def test_save_creates_missing_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "deeper" / "config.toml"
    manager = ConfigManager(path)
    manager.save(manager.load())
    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    assert raw["clock"]["twelve_hour"] is False
    assert raw["times"] == {}


def test_loads_zone_and_times(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.toml",
        """
[clock]
timezone = "America/New_York"
twelve_hour = true

[times]
standup = "9:30 AM"
"late dinner" = "21:15"
midnight = "24:00"
""",
    )
    manager = ConfigManager(path)
    config = manager.load()
    assert manager.errors() == []
    assert config.zone is ZoneInfo("America/New_York")
    assert config.clock.twelve_hour is True
    assert str(config.times["standup"]) == "09:30"
    assert str(config.times["late dinner"]) == "21:15"
    assert config.times["midnight"].hour == 0
    assert config.times["standup"].zone is config.zone


def test_invalid_entries_are_collected_and_skipped(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.toml",
        """
[clock]
timezone = "UTC"

[times]
good = "3:09 PM"
bad_pm = "13:09 PM"
bad_range = "25:00"
not_text = 5
""",
    )
    manager = ConfigManager(path)
    config = manager.load()
    assert list(config.times) == ["good"]
    errors = manager.errors()
    assert len(errors) == 3
    assert any("bad_pm" in message for message in errors)
    assert any("not_text" in message for message in errors)


def test_unknown_zone_falls_back_with_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.toml", '[clock]\ntimezone = "Mars/Olympus_Mons"\n')
    manager = ConfigManager(path)
    config = manager.load()
    assert config.zone is not None
    assert len(manager.errors()) == 1
    assert "clock.timezone" in manager.errors()[0]


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.toml", "[clock\n")
    manager = ConfigManager(path)
    config = manager.load()
    assert config.times == {}
    assert manager.errors()[0].startswith("Invalid TOML")
    assert manager.issues()[0].section == "file"


def test_clock_must_be_a_table(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.toml", 'clock = 5\n\n[times]\ntea = "16:00"\n')
    manager = ConfigManager(path)
    config = manager.load()
    assert manager.errors() == ["[clock] must be a table, got int"]
    assert config.clock.timezone == ""
    assert list(config.times) == ["tea"]


def test_times_must_be_a_table(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.toml", 'times = "3:09"\n\n[clock]\ntimezone = "UTC"\n')
    manager = ConfigManager(path)
    config = manager.load()
    assert manager.errors() == ["[times] must be a table, got str"]
    assert config.times == {}
    assert config.zone is timezone.utc


def test_issues_name_the_failing_entry(tmp_path: Path) -> None:
    path = _write(tmp_path / "config.toml", '[clock]\ntimezone = "UTC"\n\n[times]\nbad_pm = "13:09 PM"\nnot_text = 5\n')
    manager = ConfigManager(path)
    manager.load()
    issues = manager.issues()
    assert [(issue.section, issue.name, issue.spec) for issue in issues] == [
        ("times", "bad_pm", "13:09 PM"),
        ("times", "not_text", None),
    ]
    assert all(isinstance(issue, ConfigIssue) for issue in issues)


def test_problems_are_logged_at_info(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write(tmp_path / "config.toml", '[times]\nbad = "25:00"\n')
    with caplog.at_level(logging.DEBUG, logger="timeofday.config"):
        ConfigManager(path).load()
    records = [record for record in caplog.records if "bad" in record.getMessage()]
    assert len(records) == 1
    assert records[0].levelno == logging.INFO


def test_save_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    manager = ConfigManager(path)
    config = ClockConfig(clock=ClockSettings(timezone="UTC", twelve_hour=True), zone=timezone.utc)
    config.add("Stand \"up\"", "9:30 AM")
    config.add("tea", "4:00 PM")
    manager.save(config)

    reloaded = ConfigManager(path).load()
    assert reloaded.specs == {"Stand \"up\"": "9:30 AM", "tea": "4:00 PM"}
    assert reloaded.times["tea"].hour == 16
    assert reloaded.clock.twelve_hour is True


def test_remove_drops_time_and_spec() -> None:
    config = ClockConfig(clock=ClockSettings(timezone="UTC"), zone=timezone.utc)
    config.add("tea", "16:00")
    config.remove("tea")
    config.remove("missing")
    assert config.times == {}
    assert config.to_dict()["times"] == {}
