"""
Clock and duration arithmetic for event windows and volunteered time.

Times travel in two forms: the 24-hour wire form ``H:MM`` used by the admin
event form and by durations, and the display form ``h:MM A.M.`` / ``h:MM P.M.``
that appears inside slot tokens.
"""

import re
from dataclasses import dataclass

from .constants import AM, PM, MINUTES_PER_HOUR, HOURS_PER_DAY
from ...exceptions import FormatError

_DISPLAY_RE = re.compile(r"^(\d{1,2}):(\d{2}) (A\.M\.|P\.M\.)$")
_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_DURATION_RE = re.compile(r"^(-?)(\d+):(\d{2})$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour < HOURS_PER_DAY:
            raise FormatError(f"Hour out of range: {self.hour}")
        if not 0 <= self.minute < MINUTES_PER_HOUR:
            raise FormatError(f"Minute out of range: {self.minute}")

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * MINUTES_PER_HOUR + self.minute

    def __str__(self):
        return format_clock(self)


@dataclass(frozen=True)
class Duration:
    """Signed span of time; minutes are always kept in [0, 59]."""
    hours: int
    minutes: int

    @classmethod
    def from_minutes(cls, total: int) -> "Duration":
        hours, minutes = divmod(total, MINUTES_PER_HOUR)
        return cls(hours, minutes)

    @classmethod
    def parse(cls, value: str) -> "Duration":
        match = _DURATION_RE.match(value.strip())
        if not match:
            raise FormatError(f"Invalid duration: {value!r}")
        sign, hours, minutes = match.groups()
        if int(minutes) >= MINUTES_PER_HOUR:
            raise FormatError(f"Invalid duration: {value!r}")
        total = int(hours) * MINUTES_PER_HOUR + int(minutes)
        return cls.from_minutes(-total if sign else total)

    @property
    def total_minutes(self) -> int:
        return self.hours * MINUTES_PER_HOUR + self.minutes

    @property
    def is_negative(self) -> bool:
        return self.total_minutes < 0

    def __str__(self):
        total = self.total_minutes
        hours, minutes = divmod(abs(total), MINUTES_PER_HOUR)
        sign = "-" if total < 0 else ""
        return f"{sign}{hours}:{minutes:02d}"


ZERO_DURATION = Duration(0, 0)


def parse_display_time(value: str) -> TimeOfDay:
    """Parse ``h:MM A.M.`` / ``h:MM P.M.`` into a TimeOfDay."""
    match = _DISPLAY_RE.match(value.strip())
    if not match:
        raise FormatError(f"Invalid display time: {value!r}")
    hour, minute, modifier = int(match.group(1)), int(match.group(2)), match.group(3)
    if not 1 <= hour <= 12:
        raise FormatError(f"Display hour must be between 1 and 12: {value!r}")
    if minute >= MINUTES_PER_HOUR:
        raise FormatError(f"Display minute must be between 0 and 59: {value!r}")

    # 12 A.M. is midnight, 12 P.M. is noon
    if modifier == AM:
        hour = 0 if hour == 12 else hour
    else:
        hour = 12 if hour == 12 else hour + 12
    return TimeOfDay(hour, minute)


def to_display(time: TimeOfDay) -> str:
    if time.hour == 0:
        hour = 12
    elif time.hour > 12:
        hour = time.hour - 12
    else:
        hour = time.hour
    modifier = PM if time.hour >= 12 else AM
    return f"{hour}:{time.minute:02d} {modifier}"


def parse_clock(value: str) -> TimeOfDay:
    """Parse the 24-hour ``H:MM`` form; a leading zero on the hour is accepted."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise FormatError(f"Invalid time: {value!r}")
    return TimeOfDay(int(match.group(1)), int(match.group(2)))


def format_clock(time: TimeOfDay) -> str:
    return f"{time.hour}:{time.minute:02d}"


def to_military(time: TimeOfDay) -> float:
    """
    Sortable decimal ``hour + minute / 100``.

    Only meaningful for ordering times within a day: 9:59 gives 9.59, which is
    not 9 and 59/60 hours. Never use it for arithmetic.
    """
    return time.hour + time.minute / 100


def duration_between(start: TimeOfDay, end: TimeOfDay) -> Duration:
    hours = end.hour - start.hour
    minutes = end.minute - start.minute
    while minutes < 0:
        hours -= 1
        minutes += MINUTES_PER_HOUR
    # Crossing midnight
    if hours < 0:
        hours += HOURS_PER_DAY
    return Duration(hours, minutes)


def add_duration(a: Duration, b: Duration) -> Duration:
    hours = a.hours + b.hours
    minutes = a.minutes + b.minutes
    while minutes >= MINUTES_PER_HOUR:
        hours += 1
        minutes -= MINUTES_PER_HOUR
    return Duration(hours, minutes)


def subtract_duration(a: Duration, b: Duration) -> Duration:
    """Difference ``a - b``; the result is not clamped and may be negative."""
    hours = a.hours - b.hours
    minutes = a.minutes - b.minutes
    while minutes < 0:
        hours -= 1
        minutes += MINUTES_PER_HOUR
    return Duration(hours, minutes)


def add_minutes(time: TimeOfDay, minutes: int) -> TimeOfDay:
    """Advance a time by whole minutes, carrying into hours (same day only)."""
    hour = time.hour
    minute = time.minute + minutes
    while minute >= MINUTES_PER_HOUR:
        hour += 1
        minute -= MINUTES_PER_HOUR
    return TimeOfDay(hour, minute)
