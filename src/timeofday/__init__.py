"""Recurring time-of-day values and their next calendar occurrence."""

from importlib.metadata import version, PackageNotFoundError

from .errors import TimeOfDayError, TimeOfDayRangeError
from .models import DEFAULT_ZONE, TimeOfDay
from .parser import parse_time_of_day, resolve_tokens
from .tokenizer import ParseErrorKind, TimeSpecParseError, TimeSpecTokens, tokenize_time_spec

try:
    __version__ = version("timeofday")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "DEFAULT_ZONE",
    "ParseErrorKind",
    "TimeOfDay",
    "TimeOfDayError",
    "TimeOfDayRangeError",
    "TimeSpecParseError",
    "TimeSpecTokens",
    "parse_time_of_day",
    "resolve_tokens",
    "tokenize_time_spec",
]
