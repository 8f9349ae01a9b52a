"""
Overlap checks between a candidate slot and a user's reservations.
"""

from datetime import date as date_type
from typing import Optional, Sequence

from ..core.time_arithmetic import to_military
from ..core.time_window import EventWindow
from ..utils.slot_codec import decode


def windows_overlap(a: EventWindow, b: EventWindow) -> bool:
    """Same-day half-open overlap, compared on the military decimal form."""
    if a.display_range() == b.display_range():
        return True
    return (to_military(a.start) < to_military(b.end)
            and to_military(b.start) < to_military(a.end))


def find_conflict(candidate_date: date_type, candidate_window: EventWindow,
                  existing_reservations: Sequence[str]) -> Optional[str]:
    """
    Return the first reservation that clashes with the candidate, or None.

    The first entry of a user's reservations is the seed placed there at
    registration and is never a slot.
    """
    for token in existing_reservations[1:]:
        existing = decode(token, claimed=True)
        if existing.claimed_on != candidate_date:
            continue
        if windows_overlap(candidate_window, existing.window):
            return token
    return None


def conflicts(candidate_date: date_type, candidate_window: EventWindow,
              existing_reservations: Sequence[str]) -> bool:
    return find_conflict(candidate_date, candidate_window, existing_reservations) is not None
