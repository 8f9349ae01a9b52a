"""
Reservation ledger: the only code that mutates slot pools, reservation lists
and the volunteer and donation counters on users and events.

Each operation decodes and validates its whole input before touching any
field, so a rejected request leaves both aggregates exactly as they were.
Collections are replaced rather than mutated in place.
"""

import logging
from datetime import date as date_type
from typing import List, Optional, Sequence

from .time_arithmetic import Duration, add_duration, subtract_duration
from ..constraints.overlap import find_conflict
from ..utils.slot_codec import decode, encode
from ...exceptions import (
    ConflictError, FormatError, NoSelectionError, NotFoundError, PermissionDeniedError
)
from ...models import UserStatus

logger = logging.getLogger(__name__)


def _unique(tokens: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(tokens))


def _check_amount(amount: int):
    if amount is None or amount <= 0:
        raise FormatError(f"Donation amount must be positive: {amount}")


class ReservationLedger:
    """Applies reserve, cancel and donate operations to users and events."""

    def reserve(self, user, event, chosen_slots: Sequence[str],
                on_date: Optional[date_type] = None) -> List[str]:
        """
        Move the chosen unclaimed slots from ``event`` to ``user``.

        ``on_date`` may be omitted; when given it must be the event's date.
        Returns the claimed tokens now held by the user.
        """
        # 1. Nothing selected
        if not chosen_slots:
            raise NoSelectionError("Please select at least one time slot",
                                   notification="alreadyVolunteered")

        if not event.active:
            raise PermissionDeniedError(f"Event {event.id} has been cancelled")

        if on_date is not None and on_date != event.date:
            raise FormatError(f"Event {event.id} takes place on {event.date}, not {on_date}")
        on_date = event.date
        chosen = _unique(chosen_slots)

        # 2. Every slot must still be in the event's pool
        decoded = []
        for token in chosen:
            slot = decode(token, claimed=False)
            if slot.event_id != event.id or token not in event.slots:
                raise NotFoundError(f"Time slot is no longer available: {token}",
                                    notification="slotUnavailable")
            decoded.append(slot)

        # 3. Clashes with anything the user already holds
        for slot in decoded:
            clash = find_conflict(on_date, slot.window, user.reserved_slots)
            if clash is not None:
                logger.warning(f"User {user.id} reservation {slot.window!r} on {on_date} clashes with {clash!r}")
                raise ConflictError(
                    f"You are already volunteering at that time on {on_date}",
                    details={"conflicts_with": clash},
                )

        # 4. Apply
        claimed = [encode(slot.event_id, slot.window, on_date) for slot in decoded]
        volunteered = Duration.parse(user.volunteered_time)
        for slot in decoded:
            volunteered = add_duration(volunteered, slot.window.duration())

        event.slots = [token for token in event.slots if token not in chosen]
        event.volunteers_needed -= len(decoded)
        event.volunteers_attending += len(decoded)

        user.reserved_slots = list(user.reserved_slots) + claimed
        user.volunteered_time = str(volunteered)
        if event.id not in user.reserved_events:
            user.reserved_events = list(user.reserved_events) + [event.id]

        logger.info(f"User {user.id} reserved {len(claimed)} slot(s) on event {event.id}")
        return claimed

    def cancel(self, user, event, chosen_slots: Sequence[str],
               remaining_count: Optional[int] = None) -> List[str]:
        """
        Return the chosen claimed slots from ``user`` to ``event``'s pool.

        ``remaining_count`` is how many of the user's slots on this event are
        live before the cancellation. It is checked against the slots the user
        actually holds. Once none are left the event leaves the user's
        reserved events.
        """
        if not chosen_slots:
            raise NoSelectionError("Please select at least one checkbox",
                                   notification="permissionDenied")

        chosen = _unique(chosen_slots)
        held = user.reserved_slots[1:]

        decoded = []
        for token in chosen:
            slot = decode(token, claimed=True)
            if token not in held or slot.event_id != event.id:
                raise NotFoundError(f"No reservation {token!r} on event {event.id}")
            decoded.append(slot)

        live_count = sum(
            1 for token in held if decode(token, claimed=True).event_id == event.id
        )
        if remaining_count is not None and remaining_count != live_count:
            raise FormatError(
                f"Remaining count {remaining_count} does not match the "
                f"{live_count} slot(s) held on event {event.id}"
            )

        released = [encode(slot.event_id, slot.window) for slot in decoded]
        volunteered = Duration.parse(user.volunteered_time)
        for slot in decoded:
            volunteered = subtract_duration(volunteered, slot.window.duration())

        user.reserved_slots = [token for token in user.reserved_slots if token not in chosen]
        user.volunteered_time = str(volunteered)
        if volunteered.is_negative:
            logger.warning(f"User {user.id} volunteered time is negative after cancel: {volunteered}")

        event.slots = list(event.slots) + released
        event.volunteers_needed += len(decoded)
        event.volunteers_attending -= len(decoded)

        if live_count - len(decoded) == 0 and event.id in user.reserved_events:
            user.reserved_events = [eid for eid in user.reserved_events if eid != event.id]

        logger.info(f"User {user.id} cancelled {len(released)} slot(s) on event {event.id}")
        return released

    def donate(self, user, event, amount: int):
        _check_amount(amount)
        event.donations_needed -= amount
        event.donations_received += amount
        self._record_donation(user, amount)
        logger.info(f"User {user.id} donated {amount} to event {event.id}")

    def donate_to_org(self, organization, amount: int, user=None):
        """Unrestricted donation to the organization itself."""
        _check_amount(amount)
        organization.received_donations += amount
        if user is not None:
            self._record_donation(user, amount)
        logger.info(f"Organization {organization.id} received {amount}")

    def _record_donation(self, user, amount: int):
        user.given_donations += amount
        # Anyone who has donated is shown as a donor; admins keep their status
        if user.status == UserStatus.VOLUNTEER:
            user.status = UserStatus.DONOR


ledger = ReservationLedger()
