from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .errors import TimeOfDayError


DIGITS = tuple("0123456789")
MINUTE_TENS = tuple("012345")
HOUR_TERMINATORS = (":", " ", "A", "P")
MERIDIEM_STARTS = (" ", "A", "P")


class ParseErrorKind(str, Enum):
    UNEXPECTED_CHARACTER = "unexpected_character"
    UNEXPECTED_END = "unexpected_end"
    INVALID_NUMBER = "invalid_number"
    INVALID_MERIDIEM = "invalid_meridiem"
    MERIDIEM_HOUR_ZERO = "meridiem_hour_zero"
    PM_HOUR_OVER_12 = "pm_hour_over_12"
    TRAILING_CHARACTERS = "trailing_characters"


class TimeSpecParseError(TimeOfDayError):
    """Raised when a time specification string is malformed."""

    def __init__(
        self,
        kind: ParseErrorKind,
        detail: str,
        *,
        position: int | None = None,
        at_end: bool = False,
        character: str | None = None,
        expected: tuple[str, ...] = (),
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.position = position
        self.at_end = at_end
        self.character = character
        self.expected = expected
        if position is not None:
            message = f"Parse error at position {position} (zero-indexed): {detail}"
        elif at_end:
            message = f"Unexpected end of input: {detail}"
        else:
            message = detail
        super().__init__(message)


class ScanState(IntEnum):
    HOUR_FIRST = 0
    HOUR_SECOND = 1
    COLON = 2
    MINUTE_FIRST = 3
    MINUTE_SECOND = 4
    MERIDIEM_FIRST = 5
    MERIDIEM_SECOND = 6
    TRAILING = 7


@dataclass(slots=True)
class TimeSpecTokens:
    hour: str = ""
    minute: str = ""
    meridiem: str = ""


def _format_expected(expected: tuple[str, ...]) -> str:
    return ", ".join(f"'{value}'" for value in expected)


def _expect(char: str, position: int, expected: tuple[str, ...]) -> None:
    if char in expected:
        return
    raise TimeSpecParseError(
        ParseErrorKind.UNEXPECTED_CHARACTER,
        f"Invalid character '{char}': expected one of {_format_expected(expected)}",
        position=position,
        character=char,
        expected=expected,
    )


def tokenize_time_spec(spec: str) -> TimeSpecTokens:
    """Split a time spec like ``"3:09 PM"`` into hour, minute and meridiem tokens.

    The scan is a single pass over an explicit state machine. Two transitions
    (after the hour digits, and at the colon) look at the current character
    without consuming it so the next state can reinterpret the same position;
    this keeps the second hour digit and the colon optional.
    """
    chars = spec.strip().upper()
    tokens = TimeSpecTokens()
    state = ScanState.HOUR_FIRST
    pos = 0

    while pos < len(chars):
        char = chars[pos]
        if state is ScanState.HOUR_FIRST:
            _expect(char, pos, DIGITS)
            tokens.hour = char
        elif state is ScanState.HOUR_SECOND:
            _expect(char, pos, DIGITS + HOUR_TERMINATORS)
            if char in HOUR_TERMINATORS:
                state = ScanState.COLON
                continue
            tokens.hour += char
        elif state is ScanState.COLON:
            _expect(char, pos, HOUR_TERMINATORS)
            if char != ":":
                state = ScanState.MERIDIEM_FIRST
                continue
        elif state is ScanState.MINUTE_FIRST:
            _expect(char, pos, MINUTE_TENS)
            tokens.minute = char
        elif state is ScanState.MINUTE_SECOND:
            _expect(char, pos, DIGITS)
            tokens.minute += char
        elif state is ScanState.MERIDIEM_FIRST:
            _expect(char, pos, MERIDIEM_STARTS)
            if char == " ":
                pos += 1
                continue
            tokens.meridiem = char
        elif state is ScanState.MERIDIEM_SECOND:
            _expect(char, pos, ("M",))
            tokens.meridiem += char
        else:
            raise TimeSpecParseError(
                ParseErrorKind.TRAILING_CHARACTERS,
                f"Extra character '{char}': expected end of input",
                position=pos,
                character=char,
            )
        pos += 1
        state = ScanState(state + 1)

    if state in (ScanState.HOUR_FIRST, ScanState.MINUTE_FIRST, ScanState.MINUTE_SECOND):
        raise TimeSpecParseError(ParseErrorKind.UNEXPECTED_END, "expected number", at_end=True)
    if state is ScanState.MERIDIEM_SECOND:
        raise TimeSpecParseError(
            ParseErrorKind.UNEXPECTED_END, "expected 'M'", at_end=True, expected=("M",)
        )
    return tokens
