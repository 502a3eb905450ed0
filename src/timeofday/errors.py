from __future__ import annotations


class TimeOfDayError(ValueError):
    """Base class for every error raised while building a time of day."""


class TimeOfDayRangeError(TimeOfDayError):
    def __init__(self, field: str, value: int, lower: int, upper: int) -> None:
        self.field = field
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"{field.capitalize()} integer must be between {lower} and {upper}, inclusive (got {value})"
        )
