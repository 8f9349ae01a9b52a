"""
Partitioning of an event window into volunteer increments.
"""

from typing import List

from ..core.time_arithmetic import add_minutes
from ..core.time_window import EventWindow
from ..utils.slot_codec import encode
from ...exceptions import FormatError


def partition(window: EventWindow, volunteer_count: int) -> List[EventWindow]:
    """
    Split ``window`` into contiguous increments, one per volunteer.

    The increment length is ``total_minutes / volunteer_count`` and is not
    rounded up front: the cursor accumulates the exact value and each boundary
    is the start plus the truncated accumulated minutes. The loop stops as soon
    as the cursor reaches the end's hour or ``volunteer_count`` increments have
    been emitted, so the last increment may stop short of ``window.end``.

    A volunteer count of zero yields the whole window as a single increment.
    """
    if volunteer_count < 0:
        raise FormatError(f"Volunteer count cannot be negative: {volunteer_count}")
    if volunteer_count == 0:
        return [window]

    total_minutes = window.duration().total_minutes
    increment = total_minutes / volunteer_count
    if increment < 1:
        raise FormatError(
            f"Cannot split {total_minutes} minutes between {volunteer_count} volunteers"
        )

    increments = []
    previous = window.start
    while True:
        # k * total / n, truncated, without float drift
        accumulated = total_minutes * (len(increments) + 1) // volunteer_count
        current = add_minutes(window.start, accumulated)
        increments.append(EventWindow(previous, current, window.date))
        previous = current
        if current.hour == window.end.hour or len(increments) == volunteer_count:
            break

    return increments


def partition_tokens(event_id: str, window: EventWindow, volunteer_count: int) -> List[str]:
    """Partition a window and encode every increment as an unclaimed slot token."""
    return [encode(event_id, increment) for increment in partition(window, volunteer_count)]
