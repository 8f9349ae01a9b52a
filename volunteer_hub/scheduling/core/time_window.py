"""
Event window representation and the date form used in claimed slot tokens.
"""

import re
from dataclasses import dataclass
from datetime import date as date_type
from typing import Optional

from .constants import MONTH_ABBREVIATIONS, RANGE_SEPARATOR
from .time_arithmetic import TimeOfDay, Duration, duration_between, to_display
from ...exceptions import FormatError

_EVENT_DATE_RE = re.compile(r"^([A-Z][a-z]{2}) (\d{1,2}), (\d{4})$")


@dataclass(frozen=True)
class EventWindow:
    """A [start, end) span within a single day, optionally pinned to a date."""
    start: TimeOfDay
    end: TimeOfDay
    date: Optional[date_type] = None

    def __post_init__(self):
        if not self.start < self.end:
            raise FormatError(
                f"Window start {self.start} must be before end {self.end}"
            )

    def duration(self) -> Duration:
        return duration_between(self.start, self.end)

    def display_range(self) -> str:
        return f"{to_display(self.start)}{RANGE_SEPARATOR}{to_display(self.end)}"

    def __repr__(self):
        return f"EventWindow({self.display_range()})"


def format_event_date(value: date_type) -> str:
    """Render a date as ``Mon DD, YYYY`` with a zero-padded day."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day:02d}, {value.year}"


def parse_event_date(value: str) -> date_type:
    match = _EVENT_DATE_RE.match(value.strip())
    if not match or match.group(1) not in MONTH_ABBREVIATIONS:
        raise FormatError(f"Invalid event date: {value!r}")
    month = MONTH_ABBREVIATIONS.index(match.group(1)) + 1
    try:
        return date_type(int(match.group(3)), month, int(match.group(2)))
    except ValueError as e:
        raise FormatError(f"Invalid event date: {value!r}") from e
