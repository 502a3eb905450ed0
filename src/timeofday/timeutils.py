from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class UnknownZoneError(ValueError):
    """Raised when a zone name cannot be found in the IANA database."""


def local_zone() -> tzinfo:
    """Return the machine's current zone. Only called by the outer layers."""
    return datetime.now().astimezone().tzinfo or timezone.utc


def resolve_zone(zone: tzinfo | str | None, default: tzinfo | None = None) -> tzinfo:
    if zone is None:
        if default is None:
            raise UnknownZoneError("No zone given and no default zone supplied")
        return default
    if isinstance(zone, tzinfo):
        return zone
    name = zone.strip()
    if name.upper() in {"UTC", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownZoneError(f"Unknown time zone '{zone}'") from exc


def zone_name(zone: tzinfo) -> str:
    key = getattr(zone, "key", None)
    if key:
        return key
    return zone.tzname(None) or str(zone)


def wall_clock(day: date, hour: int, minute: int, zone: tzinfo) -> datetime:
    """Build ``day hour:minute`` in ``zone``.

    Wall times skipped by a DST transition are pushed forward by the size of
    the gap, the way the round trip through UTC resolves them.
    """
    moment = datetime.combine(day, time(hour=hour, minute=minute), tzinfo=zone)
    return moment.astimezone(timezone.utc).astimezone(zone)


def format_hhmm(value: time | datetime) -> str:
    return value.strftime("%H:%M")


def format_12h(hour: int, minute: int) -> str:
    meridiem = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display}:{minute:02d} {meridiem}"


def format_countdown(value: timedelta) -> str:
    total_seconds = max(int(value.total_seconds()), 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
