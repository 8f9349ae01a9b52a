from pydantic import BaseModel, Field
from datetime import date as date_type
from typing import Optional, List
from .models import UserRole, UserStatus

# ----------------- User Schemas ---------------------

class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

class UserLogin(BaseModel):
    username: str
    password: str

class RefreshTokenRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    role: UserRole

class UserSchema(BaseModel):
    id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool
    role: UserRole
    status: UserStatus
    given_donations: int
    volunteered_time: str
    reserved_slots: List[str]
    reserved_events: List[str]

    class Config:
        from_attributes = True

class UserInfo(BaseModel):
    id: int
    username: str
    is_active: bool
    role: UserRole
    status: UserStatus

    class Config:
        from_attributes = True

# ----------------- Event Schemas ---------------------

class EventCreate(BaseModel):
    name: str
    date: date_type
    start_time: str = Field(description="24-hour start time, e.g. 09:00")
    end_time: str = Field(description="24-hour end time, e.g. 17:30")
    location: Optional[str] = None
    description: Optional[str] = None
    volunteer_count: int = Field(ge=0)
    donation_target: int = Field(default=0, ge=0)

class EventOut(BaseModel):
    id: str
    name: str
    date: date_type
    start_time: str
    end_time: str
    location: Optional[str] = None
    description: Optional[str] = None
    active: bool
    slots: List[str]
    volunteers_needed: int
    volunteers_attending: int
    donations_needed: int
    donations_received: int

    class Config:
        from_attributes = True

class EventDetail(EventOut):
    display_date: str
    display_start_time: str
    display_end_time: str

class SlotSelection(BaseModel):
    slots: List[str] = Field(default_factory=list)
    date: Optional[date_type] = None

class CancelSelection(BaseModel):
    slots: List[str] = Field(default_factory=list)
    remaining_count: Optional[int] = None

class DonationRequest(BaseModel):
    amount: int = Field(gt=0)

# ----------------- Organization Schemas ---------------------

class OrganizationOut(BaseModel):
    id: str
    name: str
    received_donations: int

    class Config:
        from_attributes = True

class OrganizationDonation(DonationRequest):
    organization_id: Optional[str] = None

# ----------------- Results ---------------------

class OperationResult(BaseModel):
    success: bool
    notification: str
    message: str
    event: Optional[EventOut] = None
    user: Optional[UserSchema] = None
    slots: List[str] = Field(default_factory=list)
