from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging

from .config import ClockConfig
from .models import TimeOfDay

logger = logging.getLogger(__name__)


def _until(at: datetime, now: datetime) -> timedelta:
    # Same-zone subtraction ignores DST offsets, so measure in UTC.
    return at.astimezone(timezone.utc) - now.astimezone(timezone.utc)


@dataclass(slots=True)
class UpcomingOccurrence:
    name: str
    time_of_day: TimeOfDay
    at: datetime
    remaining: timedelta


class Scheduler:
    def __init__(self, config: ClockConfig) -> None:
        self.config = config

    def _reference(self, reference: datetime | None) -> datetime:
        if reference is None:
            return datetime.now(self.config.zone)
        if reference.tzinfo is None:
            return reference.replace(tzinfo=self.config.zone)
        return reference

    def upcoming(self, reference: datetime | None = None) -> list[UpcomingOccurrence]:
        """Next occurrence of every configured time, soonest first."""
        now = self._reference(reference)
        items: list[UpcomingOccurrence] = []
        for name, value in self.config.times.items():
            at = value.next_after(now)
            items.append(UpcomingOccurrence(name=name, time_of_day=value, at=at, remaining=_until(at, now)))
        items.sort(key=lambda item: (item.at, item.name))
        return items

    def agenda(self, reference: datetime | None = None, *, days: int = 1) -> list[UpcomingOccurrence]:
        if days < 1:
            raise ValueError("days must be at least 1")
        now = self._reference(reference)
        horizon = now + timedelta(days=days)
        items: list[UpcomingOccurrence] = []
        for name, value in self.config.times.items():
            for at in value.occurrences(now):
                if at > horizon:
                    break
                items.append(UpcomingOccurrence(name=name, time_of_day=value, at=at, remaining=_until(at, now)))
        items.sort(key=lambda item: (item.at, item.name))
        logger.debug("Agenda for %d day(s) from %s has %d item(s)", days, now.isoformat(), len(items))
        return items
