from __future__ import annotations

from datetime import tzinfo

from .models import TimeOfDay
from .tokenizer import ParseErrorKind, TimeSpecParseError, TimeSpecTokens, tokenize_time_spec


def _to_int(label: str, token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise TimeSpecParseError(
            ParseErrorKind.INVALID_NUMBER,
            f"Could not parse {label} '{token}' as integer",
        )
    return int(token)


def resolve_tokens(tokens: TimeSpecTokens, zone: tzinfo | str | None = None) -> TimeOfDay:
    hour = _to_int("hour", tokens.hour)
    minute = _to_int("minute", tokens.minute)

    if tokens.meridiem and hour == 0:
        raise TimeSpecParseError(
            ParseErrorKind.MERIDIEM_HOUR_ZERO,
            "Cannot have meridiem and hour value of 0",
        )

    if tokens.meridiem == "AM":
        if hour == 12:
            hour = 0
    elif tokens.meridiem == "PM":
        if hour > 12:
            raise TimeSpecParseError(
                ParseErrorKind.PM_HOUR_OVER_12,
                "Cannot have hour greater than 12 with meridiem PM",
            )
        if hour != 12:
            hour += 12
    elif tokens.meridiem:
        raise TimeSpecParseError(
            ParseErrorKind.INVALID_MERIDIEM,
            f"Unknown meridiem '{tokens.meridiem}'",
        )

    return TimeOfDay.new(hour, minute, zone)


def parse_time_of_day(spec: str, zone: tzinfo | str | None = None) -> TimeOfDay:
    """Parse ``"3:09 PM"``, ``"03:09"`` or ``"24:00"`` into a :class:`TimeOfDay`."""
    return resolve_tokens(tokenize_time_spec(spec), zone)
