import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from ..config import ADMIN_USERNAME
from ..database import get_db
from ..models import User, UserRole, UserStatus, new_object_id
from ..schemas import UserCreate, RefreshTokenRequest, UserLogin, TokenResponse, UserSchema, EventDetail
from ..auth import (
    create_token_pair,
    verify_refresh_token,
    verify_password,
    get_current_user,
    get_password_hash
)
from ..services import volunteer_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# ============================================================================
# POST ENDPOINTS (Create/Login)
# ============================================================================

@router.post("/register", response_model=UserSchema)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    db_user = db.query(User).filter(User.username == user.username).first()
    if db_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot use that account"
        )

    is_admin = user.username == ADMIN_USERNAME
    db_user = User(
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        hashed_password=get_password_hash(user.password),
        is_active=True,
        role=UserRole.ADMIN if is_admin else UserRole.USER,
        status=UserStatus.ADMIN if is_admin else UserStatus.VOLUNTEER,
        given_donations=0,
        volunteered_time="0:00",
        reserved_slots=[new_object_id()],
        reserved_events=[],
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info(f"Registered {'admin' if is_admin else 'user'} {db_user.username}")
    return db_user

@router.post("/login", response_model=TokenResponse)
def login_user(user_data: UserLogin, db: Session = Depends(get_db)):
    """Login with username and password"""
    db_user = db.query(User).filter(User.username == user_data.username).first()
    if not db_user or not verify_password(user_data.password, db_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not db_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been deactivated"
        )
    return create_token_pair(db_user)

@router.post("/refresh", response_model=TokenResponse)
def refresh_token(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Refresh access token using refresh token"""
    username = verify_refresh_token(request.refresh_token)

    # Role comes from the database, not the old token
    db_user = db.query(User).filter(User.username == username).first()
    if not db_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    if not db_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been deactivated"
        )
    return create_token_pair(db_user)

# ============================================================================
# GET ENDPOINTS (Read)
# ============================================================================

@router.get("/me", response_model=UserSchema)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user

@router.get("/me/events", response_model=List[EventDetail])
def get_my_events(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Events the current user has reserved slots on"""
    events = volunteer_service.get_user_events(db, current_user)
    return [volunteer_service.get_event_detail(event) for event in events]
