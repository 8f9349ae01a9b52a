"""
Volunteer operations exposed to the API.

Each public function loads the aggregates it needs, hands them to the
reservation ledger and commits once. Users, events and organizations are
version-checked on write, so a request that lost a race is rolled back and
reported as a ConcurrentUpdateError for the caller to retry as a whole.
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..config import ORGANIZATION_NAME
from ..exceptions import ConcurrentUpdateError, FormatError, NotFoundError, VolunteerHubError
from ..models import Event, Organization, User, new_object_id
from ..schemas import EventDetail, EventOut, OperationResult, UserSchema
from ..scheduling.algorithms.partition import partition_tokens
from ..scheduling.core.ledger import ledger
from ..scheduling.core.time_arithmetic import format_clock, parse_clock, to_display
from ..scheduling.core.time_window import EventWindow, format_event_date

logger = logging.getLogger(__name__)


@contextmanager
def _transaction(db: Session, action: str):
    """Commit on success; roll back on any engine error or lost race."""
    try:
        yield
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning(f"Concurrent update detected during {action}")
        raise ConcurrentUpdateError(
            "This record was changed by another request, please try again"
        ) from e
    except VolunteerHubError:
        db.rollback()
        raise


# ============================================================================
# Lookups
# ============================================================================

def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None:
        raise NotFoundError(f"Event {event_id} not found")
    return event

def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user

def list_events(db: Session, include_inactive: bool = False) -> List[Event]:
    query = db.query(Event)
    if not include_inactive:
        query = query.filter(Event.active == True)
    return query.order_by(Event.date.asc(), Event.start_time.asc()).all()

def get_user_events(db: Session, user: User) -> List[Event]:
    """Events the user holds at least one slot on, in the order they were joined."""
    if not user.reserved_events:
        return []
    events = db.query(Event).filter(Event.id.in_(user.reserved_events)).all()
    by_id = {event.id: event for event in events}
    return [by_id[event_id] for event_id in user.reserved_events if event_id in by_id]

def get_event_detail(event: Event) -> EventDetail:
    """Event with its date and times rendered for display."""
    return EventDetail(
        **EventOut.model_validate(event).model_dump(),
        display_date=format_event_date(event.date),
        display_start_time=to_display(parse_clock(event.start_time)),
        display_end_time=to_display(parse_clock(event.end_time)),
    )

def _find_organization(db: Session) -> Optional[Organization]:
    return db.query(Organization).filter(Organization.name == ORGANIZATION_NAME).first()

def get_or_create_organization(db: Session) -> Organization:
    """Return the organization row, creating it on first use.

    The name is unique, so when two requests race to create it the loser
    rolls back and reads the winner's row.
    """
    organization = _find_organization(db)
    if organization is not None:
        return organization

    organization = Organization(name=ORGANIZATION_NAME, received_donations=0)
    db.add(organization)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Organization {ORGANIZATION_NAME} was created by another request")
        organization = _find_organization(db)
        if organization is None:
            raise
        return organization
    db.refresh(organization)
    logger.info(f"Created organization {organization.name} ({organization.id})")
    return organization


# ============================================================================
# Admin operations
# ============================================================================

def create_event(db: Session, name: str, event_date: date, start: str, end: str,
                 location: Optional[str], description: Optional[str],
                 volunteer_count: int, donation_target: int = 0) -> OperationResult:
    # The id is needed before partitioning since every slot token carries it
    event_id = new_object_id()
    try:
        window = EventWindow(parse_clock(start), parse_clock(end), event_date)
        slots = partition_tokens(event_id, window, volunteer_count)
    except FormatError as e:
        logger.warning(f"Event {name!r} not created: {e.message}")
        raise FormatError(e.message, notification="failureNotCreated") from e

    event = Event(
        id=event_id,
        name=name,
        date=event_date,
        start_time=format_clock(window.start),
        end_time=format_clock(window.end),
        location=location,
        description=description,
        active=True,
        slots=slots,
        volunteers_needed=volunteer_count,
        volunteers_attending=0,
        donations_needed=donation_target,
        donations_received=0,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(f"Created event {event.id} {name!r} with {len(slots)} slot(s)")
    return OperationResult(
        success=True,
        notification="successCreated",
        message="Event was successfully created",
        event=EventOut.model_validate(event),
        slots=list(event.slots),
    )

def _set_event_active(db: Session, event_id: str, active: bool) -> OperationResult:
    event = get_event(db, event_id)
    with _transaction(db, f"{'reschedule' if active else 'cancel'} event {event_id}"):
        event.active = active
    logger.info(f"Event {event_id} {'rescheduled' if active else 'cancelled'}")
    return OperationResult(
        success=True,
        notification="successCancelled",
        message="Event was rescheduled" if active else "Event was cancelled",
        event=EventOut.model_validate(event),
    )

def cancel_event(db: Session, event_id: str) -> OperationResult:
    return _set_event_active(db, event_id, False)

def reschedule_event(db: Session, event_id: str) -> OperationResult:
    return _set_event_active(db, event_id, True)

def set_user_active(db: Session, user_id: int, is_active: bool) -> User:
    user = get_user(db, user_id)
    with _transaction(db, f"update status of user {user_id}"):
        user.is_active = is_active
    logger.info(f"User {user.username} {'activated' if is_active else 'deactivated'}")
    return user


# ============================================================================
# Volunteer operations
# ============================================================================

def reserve_slots(db: Session, user_id: int, event_id: str, tokens: Sequence[str],
                  event_date: Optional[date] = None) -> OperationResult:
    user = get_user(db, user_id)
    event = get_event(db, event_id)
    with _transaction(db, f"reserve on event {event_id}"):
        claimed = ledger.reserve(user, event, tokens, event_date)
    return OperationResult(
        success=True,
        notification="successVolunteeredOrDonated",
        message="Thank you for volunteering",
        event=EventOut.model_validate(event),
        user=UserSchema.model_validate(user),
        slots=claimed,
    )

def cancel_slots(db: Session, user_id: int, event_id: str, tokens: Sequence[str],
                 remaining_count: Optional[int] = None) -> OperationResult:
    user = get_user(db, user_id)
    event = get_event(db, event_id)
    with _transaction(db, f"cancel on event {event_id}"):
        released = ledger.cancel(user, event, tokens, remaining_count)
    return OperationResult(
        success=True,
        notification="successCancelled",
        message="Your time slots were cancelled",
        event=EventOut.model_validate(event),
        user=UserSchema.model_validate(user),
        slots=released,
    )

def donate(db: Session, user_id: int, event_id: str, amount: int) -> OperationResult:
    user = get_user(db, user_id)
    event = get_event(db, event_id)
    with _transaction(db, f"donation to event {event_id}"):
        ledger.donate(user, event, amount)
    return OperationResult(
        success=True,
        notification="successVolunteeredOrDonated",
        message="Thank you for your donation",
        event=EventOut.model_validate(event),
        user=UserSchema.model_validate(user),
    )

def donate_to_org(db: Session, org_id: Optional[str], amount: int,
                  user_id: Optional[int] = None) -> OperationResult:
    if org_id is None:
        organization = get_or_create_organization(db)
    else:
        organization = db.query(Organization).filter(Organization.id == org_id).first()
        if organization is None:
            raise NotFoundError(f"Organization {org_id} not found")
    user = get_user(db, user_id) if user_id is not None else None

    with _transaction(db, f"donation to organization {organization.id}"):
        ledger.donate_to_org(organization, amount, user)
    return OperationResult(
        success=True,
        notification="thanksForDonation",
        message=f"Thank you for donating to {organization.name}",
        user=UserSchema.model_validate(user) if user is not None else None,
    )
