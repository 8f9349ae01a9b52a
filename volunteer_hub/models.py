from sqlalchemy import String, Integer, Boolean, Enum, Date, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.ext.mutable import MutableList
from datetime import date as date_type
from typing import List, Optional
import enum
import secrets

from .database import Base


def new_object_id() -> str:
    """24-character lowercase hex id, safe to embed in slot tokens."""
    return secrets.token_hex(12)

# Enums

class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"

class UserStatus(str, enum.Enum):
    VOLUNTEER = "Volunteer"
    DONOR = "Donor"
    ADMIN = "Admin"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String, unique=True, index=True)
    first_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    hashed_password: Mapped[str] = mapped_column(String)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.USER)
    status: Mapped[UserStatus] = mapped_column(Enum(UserStatus), default=UserStatus.VOLUNTEER)

    given_donations: Mapped[int] = mapped_column(Integer, default=0)
    volunteered_time: Mapped[str] = mapped_column(String, default="0:00")  # H:MM, may be negative

    # First entry is a seed id, every later entry a claimed slot token
    reserved_slots: Mapped[List[str]] = mapped_column(
        MutableList.as_mutable(JSON), default=lambda: [new_object_id()]
    )
    reserved_events: Mapped[List[str]] = mapped_column(MutableList.as_mutable(JSON), default=list)

    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version_id}


class Event(Base):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String)
    date: Mapped[date_type] = mapped_column(Date)
    start_time: Mapped[str] = mapped_column(String)  # H:MM, 24-hour
    end_time: Mapped[str] = mapped_column(String)
    location: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Unclaimed slot tokens, in partition order until cancellations append
    slots: Mapped[List[str]] = mapped_column(MutableList.as_mutable(JSON), default=list)

    volunteers_needed: Mapped[int] = mapped_column(Integer, default=0)
    volunteers_attending: Mapped[int] = mapped_column(Integer, default=0)
    donations_needed: Mapped[int] = mapped_column(Integer, default=0)
    donations_received: Mapped[int] = mapped_column(Integer, default=0)

    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version_id}


class Organization(Base):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String, unique=True)
    received_donations: Mapped[int] = mapped_column(Integer, default=0)

    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version_id}
