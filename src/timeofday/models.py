from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Iterator

from .errors import TimeOfDayRangeError
from .timeutils import format_12h, resolve_zone, wall_clock

DEFAULT_ZONE: tzinfo = timezone.utc


def _check_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, not {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class TimeOfDay:
    """A wall-clock hour and minute in a zone, recurring every day.

    ``hour`` is always stored in 24-hour form in [0, 23]; ``24`` is accepted
    on construction as another name for midnight.
    """

    hour: int
    minute: int
    zone: tzinfo = DEFAULT_ZONE

    def __post_init__(self) -> None:
        hour = _check_int("hour", self.hour)
        minute = _check_int("minute", self.minute)
        if not 0 <= hour <= 24:
            raise TimeOfDayRangeError("hour", hour, 0, 24)
        if not 0 <= minute <= 59:
            raise TimeOfDayRangeError("minute", minute, 0, 59)
        object.__setattr__(self, "hour", hour % 24)
        object.__setattr__(self, "zone", resolve_zone(self.zone, DEFAULT_ZONE))

    @classmethod
    def new(cls, hour: int, minute: int, zone: tzinfo | str | None = None) -> "TimeOfDay":
        return cls(hour=hour, minute=minute, zone=zone)  # type: ignore[arg-type]

    @classmethod
    def parse(cls, spec: str, zone: tzinfo | str | None = None) -> "TimeOfDay":
        from .parser import parse_time_of_day

        return parse_time_of_day(spec, zone)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return (self.hour, self.minute) < (other.hour, other.minute)

    def format_12h(self) -> str:
        return format_12h(self.hour, self.minute)

    def to_time(self) -> time:
        return time(hour=self.hour, minute=self.minute, tzinfo=self.zone)

    def next(self, now: datetime | None = None) -> datetime:
        if now is None:
            now = datetime.now(self.zone)
        return self.next_after(now)

    def next_after(self, reference: datetime) -> datetime:
        """Return the first instant at or after ``reference`` with this hour and minute.

        A naive ``reference`` is read as wall-clock time in ``zone``.
        """
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=self.zone)
        local = reference.astimezone(self.zone)
        candidate = wall_clock(local.date(), self.hour, self.minute, self.zone)
        if candidate.astimezone(timezone.utc) < reference.astimezone(timezone.utc):
            candidate = wall_clock(local.date() + timedelta(days=1), self.hour, self.minute, self.zone)
        return candidate

    def occurrences(self, after: datetime, count: int | None = None) -> Iterator[datetime]:
        """Yield successive daily occurrences starting with ``next_after(after)``."""
        if count is not None and count < 0:
            raise ValueError("count must not be negative")
        produced = 0
        current = self.next_after(after)
        while count is None or produced < count:
            yield current
            produced += 1
            current = wall_clock(current.date() + timedelta(days=1), self.hour, self.minute, self.zone)
