"""
Slot token encoding.

An unclaimed increment is stored on its event as::

    <eventIdHex> <start> - <end>            e.g. "65a1...9f 9:00 A.M. - 10:00 A.M."

and, once reserved, on the user with the event date in front::

    <Mon DD, YYYY> <eventIdHex> <start> - <end>

The date and display times contain spaces themselves, so tokens are matched
against anchored patterns rather than split on whitespace.
"""

import re
from dataclasses import dataclass
from datetime import date as date_type
from typing import Optional

from ..core.time_arithmetic import TimeOfDay, parse_display_time
from ..core.time_window import EventWindow, format_event_date, parse_event_date
from ...exceptions import FormatError, MalformedTokenError

_OWNER_RE = re.compile(r"^[0-9a-f]+$")
_DISPLAY = r"\d{1,2}:\d{2} [AP]\.M\."
_BODY = rf"([0-9a-f]+) ({_DISPLAY}) - ({_DISPLAY})"
_UNCLAIMED_RE = re.compile(rf"^{_BODY}$")
_CLAIMED_RE = re.compile(rf"^([A-Z][a-z]{{2}} \d{{2}}, \d{{4}}) {_BODY}$")

UNCLAIMED = "unclaimed"
CLAIMED = "claimed"


@dataclass(frozen=True)
class SlotToken:
    event_id: str
    start: TimeOfDay
    end: TimeOfDay
    claimed_on: Optional[date_type] = None

    @property
    def is_claimed(self) -> bool:
        return self.claimed_on is not None

    @property
    def window(self) -> EventWindow:
        return EventWindow(self.start, self.end, self.claimed_on)

    def encode(self) -> str:
        return encode(self.event_id, self.window, self.claimed_on)


def encode(owner_id: str, window: EventWindow, claimed_on: Optional[date_type] = None) -> str:
    if not _OWNER_RE.match(owner_id):
        raise FormatError(f"Slot owner id must be lowercase hex: {owner_id!r}")
    token = f"{owner_id} {window.display_range()}"
    if claimed_on is not None:
        token = f"{format_event_date(claimed_on)} {token}"
    return token


def decode(token: str, claimed: Optional[bool] = None) -> SlotToken:
    """
    Parse a token back into its fields.

    ``claimed`` selects the expected form; ``None`` accepts either.
    """
    if claimed is None:
        claimed = _CLAIMED_RE.match(token) is not None
    expected = CLAIMED if claimed else UNCLAIMED

    match = (_CLAIMED_RE if claimed else _UNCLAIMED_RE).match(token)
    if not match:
        raise MalformedTokenError(token, expected)

    groups = match.groups()
    try:
        if claimed:
            claimed_on = parse_event_date(groups[0])
            groups = groups[1:]
        else:
            claimed_on = None
        slot = SlotToken(
            event_id=groups[0],
            start=parse_display_time(groups[1]),
            end=parse_display_time(groups[2]),
            claimed_on=claimed_on,
        )
    except FormatError as e:
        raise MalformedTokenError(token, expected) from e

    if not slot.start < slot.end:
        raise MalformedTokenError(token, expected)
    return slot


def claim(token: str, on_date: date_type) -> str:
    """Turn an unclaimed event token into the form stored on a user."""
    slot = decode(token, claimed=False)
    return encode(slot.event_id, slot.window, on_date)


def release(token: str) -> str:
    """Strip the date from a claimed token so it can go back to its event."""
    slot = decode(token, claimed=True)
    return encode(slot.event_id, slot.window)
