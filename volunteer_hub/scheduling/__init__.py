"""
Volunteer Hub Scheduling Engine

Splits event windows into volunteer increments, encodes them as slot tokens,
detects overlapping reservations and keeps the volunteer and donation
counters on users and events consistent.
"""

from .core.time_arithmetic import TimeOfDay, Duration
from .core.time_window import EventWindow
from .core.ledger import ReservationLedger, ledger
from .algorithms.partition import partition, partition_tokens
from .utils.slot_codec import SlotToken
from .constraints.overlap import conflicts

__version__ = "1.0.0"
