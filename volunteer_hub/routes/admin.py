from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User, Event, UserRole
from ..schemas import UserInfo, EventCreate, EventOut, OperationResult, OrganizationOut
from ..auth import require_admin
from ..services import volunteer_service

router = APIRouter(tags=["admin"])

# ============================================================================
# Events
# ============================================================================

@router.post("/events", response_model=OperationResult)
def create_event(event: EventCreate, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Create an event and split it into volunteer slots (admin only)"""
    return volunteer_service.create_event(
        db,
        name=event.name,
        event_date=event.date,
        start=event.start_time,
        end=event.end_time,
        location=event.location,
        description=event.description,
        volunteer_count=event.volunteer_count,
        donation_target=event.donation_target,
    )

@router.get("/events", response_model=list[EventOut])
def get_all_events(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """All events including cancelled ones (admin only)"""
    return volunteer_service.list_events(db, include_inactive=True)

@router.post("/events/{event_id}/cancel", response_model=OperationResult)
def cancel_event(event_id: str, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    return volunteer_service.cancel_event(db, event_id)

@router.post("/events/{event_id}/reschedule", response_model=OperationResult)
def reschedule_event(event_id: str, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    return volunteer_service.reschedule_event(db, event_id)

# ============================================================================
# Users
# ============================================================================

@router.get("/dashboard")
def admin_dashboard(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Admin dashboard overview"""
    organization = volunteer_service.get_or_create_organization(db)
    return {
        "admin_user": current_user.username,
        "organization": OrganizationOut.model_validate(organization),
        "total_users": db.query(User).count(),
        "active_users": db.query(User).filter(User.is_active == True).count(),
        "active_events": db.query(Event).filter(Event.active == True).count(),
        "cancelled_events": db.query(Event).filter(Event.active == False).count(),
    }

@router.get("/users", response_model=list[UserInfo])
def get_all_users(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Get all users (admin only)"""
    return db.query(User).filter(User.role != UserRole.ADMIN).all()

@router.put("/users/{user_id}/status")
def update_user_status(
    user_id: int,
    is_active: bool,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Activate or deactivate a user account (admin only)"""
    if user_id == current_user.id and not is_active:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own account")

    user = volunteer_service.set_user_active(db, user_id, is_active)
    status_text = "activated" if is_active else "deactivated"
    return {"message": f"User {user.username} {status_text}", "is_active": user.is_active}
