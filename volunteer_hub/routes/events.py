"""Events API: browse events, reserve and cancel time slots, donate."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import EventOut, EventDetail, SlotSelection, CancelSelection, DonationRequest, OperationResult
from ..auth import get_current_user
from ..services import volunteer_service

router = APIRouter(tags=["events"])


@router.get("/", response_model=List[EventOut])
def list_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return volunteer_service.list_events(db)

@router.get("/{event_id}", response_model=EventDetail)
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    event = volunteer_service.get_event(db, event_id)
    return volunteer_service.get_event_detail(event)

@router.post("/{event_id}/reserve", response_model=OperationResult)
def reserve_slots(
    event_id: str,
    selection: SlotSelection,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Reserve one or more unclaimed slots of an event"""
    return volunteer_service.reserve_slots(
        db, current_user.id, event_id, selection.slots, selection.date
    )

@router.post("/{event_id}/cancel", response_model=OperationResult)
def cancel_slots(
    event_id: str,
    selection: CancelSelection,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Give reserved slots back to the event"""
    return volunteer_service.cancel_slots(
        db, current_user.id, event_id, selection.slots, selection.remaining_count
    )

@router.post("/{event_id}/donate", response_model=OperationResult)
def donate(
    event_id: str,
    donation: DonationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return volunteer_service.donate(db, current_user.id, event_id, donation.amount)
