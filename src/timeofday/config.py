from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
import logging
from pathlib import Path
import tomllib

from .errors import TimeOfDayError
from .models import TimeOfDay
from .parser import parse_time_of_day
from .timeutils import UnknownZoneError, local_zone, resolve_zone

logger = logging.getLogger(__name__)


def _default_config_root() -> Path:
    return Path.home() / ".config" / "timeofday"


def default_config_path() -> Path:
    return _default_config_root() / "config.toml"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(slots=True)
class ClockSettings:
    timezone: str = ""
    twelve_hour: bool = False

    def resolve(self) -> tzinfo:
        # An empty name means the machine's zone, looked up explicitly here.
        if not self.timezone:
            return local_zone()
        return resolve_zone(self.timezone)


@dataclass(slots=True)
class ClockConfig:
    clock: ClockSettings
    zone: tzinfo
    times: dict[str, TimeOfDay] = field(default_factory=dict)
    specs: dict[str, str] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "ClockConfig":
        clock = ClockSettings()
        return cls(clock=clock, zone=clock.resolve())

    def add(self, name: str, spec: str) -> TimeOfDay:
        value = parse_time_of_day(spec, self.zone)
        self.times[name] = value
        self.specs[name] = spec
        return value

    def remove(self, name: str) -> None:
        self.times.pop(name, None)
        self.specs.pop(name, None)

    def to_dict(self) -> dict:
        return {
            "clock": {
                "timezone": self.clock.timezone,
                "twelve_hour": self.clock.twelve_hour,
            },
            "times": dict(self.specs),
        }


@dataclass(slots=True, frozen=True)
class ConfigIssue:
    """A problem found while loading the file.

    ``section`` is ``"file"``, ``"clock"`` or ``"times"``. ``name`` and ``spec``
    are set when the problem belongs to one ``[times]`` entry.
    """

    section: str
    message: str
    name: str | None = None
    spec: str | None = None


class ConfigManager:
    """Simple TOML configuration loader.

    Reading never touches the disk beyond the config file itself; the file and
    its directory are only created by ``save()``.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or default_config_path()
        self._issues: list[ConfigIssue] = []

    def errors(self) -> list[str]:
        return [issue.message for issue in self._issues]

    def issues(self) -> list[ConfigIssue]:
        return list(self._issues)

    def _record(self, section: str, message: str, name: str | None = None, spec: str | None = None) -> None:
        # The CLI and the TUI show these to the user themselves.
        logger.info("%s: %s", self.config_path, message)
        self._issues.append(ConfigIssue(section, message, name, spec))

    def load(self) -> ClockConfig:
        self._issues.clear()
        if not self.config_path.exists():
            logger.debug("No configuration at %s, using defaults", self.config_path)
            return ClockConfig.default()

        with self.config_path.open("rb") as handle:
            try:
                raw = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                self._record("file", f"Invalid TOML: {exc}")
                return ClockConfig.default()

        clock_cfg = raw.get("clock", {})
        times_cfg = raw.get("times", {})
        if not isinstance(clock_cfg, dict):
            self._record("clock", f"[clock] must be a table, got {type(clock_cfg).__name__}")
            clock_cfg = {}
        if not isinstance(times_cfg, dict):
            self._record("times", f"[times] must be a table, got {type(times_cfg).__name__}")
            times_cfg = {}

        clock = ClockSettings(
            timezone=str(clock_cfg.get("timezone", "") or ""),
            twelve_hour=bool(clock_cfg.get("twelve_hour", False)),
        )
        try:
            zone = clock.resolve()
        except UnknownZoneError as exc:
            self._record("clock", f"Invalid clock.timezone: {exc}")
            zone = local_zone()

        config = ClockConfig(clock=clock, zone=zone)
        for name, spec in times_cfg.items():
            if not isinstance(spec, str):
                self._record("times", f"Time '{name}' must be a string, got {type(spec).__name__}", name)
                continue
            try:
                config.add(name, spec)
            except TimeOfDayError as exc:
                self._record("times", f"Invalid time '{name}' ({spec!r}): {exc}", name, spec)
        logger.debug("Loaded %d time(s) from %s", len(config.times), self.config_path)
        return config

    def _write(self, config: ClockConfig) -> None:
        data = config.to_dict()
        lines = ["[clock]"]
        lines.append(f"timezone = {_quote(data['clock']['timezone'])}")
        lines.append(f"twelve_hour = {str(data['clock']['twelve_hour']).lower()}")
        lines.extend([
            "",
            "[times]",
        ])
        for name, spec in data["times"].items():
            lines.append(f"{_quote(name)} = {_quote(spec)}")
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def save(self, config: ClockConfig) -> None:
        self._write(config)
        logger.info("Wrote configuration to %s", self.config_path)
