"""Data models for the LinkGo client"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Profile role enumeration"""
    manager = "manager"
    talent = "talent"


class TalentRole(str, Enum):
    """Role a talent is booked for"""
    referee = "referee"
    coach = "coach"


class BookingStatus(str, Enum):
    """Booking status enumeration"""
    requested = "requested"
    accepted = "accepted"
    declined = "declined"
    cancelled = "cancelled"


class BookingAction(str, Enum):
    """Actions a participant can take on a requested booking"""
    accept = "accept"
    decline = "decline"
    cancel = "cancel"

    @property
    def status(self) -> BookingStatus:
        return ACTION_STATUS[self]


ACTION_STATUS = {
    BookingAction.accept: BookingStatus.accepted,
    BookingAction.decline: BookingStatus.declined,
    BookingAction.cancel: BookingStatus.cancelled,
}


# Session models
class SessionInfo(BaseModel):
    """Reduced session shape handed to UI code"""
    user: Optional[Dict[str, Any]] = Field(None, description="Opaque user record")
    access_token: Optional[str] = Field(None, description="JWT for the current session")
    expires_at: Optional[int] = Field(None, description="Expiry as unix timestamp")


# Profile models
class Profile(BaseModel):
    """Profile row schema"""
    id: str = Field(..., description="Auth user id")
    role: UserRole = Field(..., description="manager or talent")
    full_name: Optional[str] = Field(None, description="Display name")
    region: Optional[str] = Field(None, description="Home region")
    bio: Optional[str] = Field(None, description="Free text bio")
    created_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """Partial profile write; unset fields are left out of the payload"""
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = None
    region: Optional[str] = None
    bio: Optional[str] = None


# Catalog models
class TalentCatalogEntry(BaseModel):
    """Row of the v_talent_catalog view"""
    id: str
    full_name: Optional[str] = None
    region: Optional[str] = None
    is_referee: bool = False
    is_coach: bool = False
    experience_years: Optional[int] = None
    primary_levels: List[str] = Field(default_factory=list)
    travel_km: Optional[int] = None
    hourly_rate: Optional[int] = None


CATALOG_COLUMNS = ",".join(TalentCatalogEntry.model_fields)


class CatalogQuery(BaseModel):
    """Filters and page window for the catalog listing"""
    model_config = ConfigDict(extra="forbid")

    q: Optional[str] = None
    region: Optional[str] = None
    role: Optional[TalentRole] = None
    limit: int = Field(..., ge=1)
    offset: int = Field(0, ge=0)


# Booking models
class BookingRequest(BaseModel):
    """Input for a new booking request"""
    model_config = ConfigDict(extra="forbid")

    talent_id: str = Field(..., min_length=1)
    role_at_booking: TalentRole
    start_ts: datetime
    end_ts: datetime
    location: Optional[str] = None
    message: Optional[str] = None

    def to_row(self, manager_id: str) -> Dict[str, Any]:
        row = self.model_dump(mode="json")
        row["manager_id"] = manager_id
        row["status"] = BookingStatus.requested.value
        return row


class BookingListQuery(BaseModel):
    """Filters and page window for listing a user's bookings"""
    model_config = ConfigDict(extra="forbid")

    role: UserRole
    status: Optional[BookingStatus] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    limit: int = Field(..., ge=1)
    offset: int = Field(0, ge=0)


class Booking(BaseModel):
    """Booking row schema"""
    id: Optional[str] = None
    manager_id: str
    talent_id: str
    role_at_booking: TalentRole
    status: BookingStatus = BookingStatus.requested
    start_ts: datetime
    end_ts: datetime
    location: Optional[str] = None
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None


# Seed-only rows
class TalentDetails(BaseModel):
    """talent_details row written by the dev seed"""
    talent_id: Optional[str] = None
    is_referee: bool = False
    is_coach: bool = False
    experience_years: int = 0
    primary_levels: List[str] = Field(default_factory=list)
    travel_km: Optional[int] = None
    hourly_rate: Optional[int] = None


class Availability(BaseModel):
    """Weekly availability slot"""
    talent_id: str
    weekday: int = Field(..., ge=0, le=6)
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    notes: str = ""


class Team(BaseModel):
    """Team owned by a manager"""
    manager_id: str
    club_name: str
    team_name: str
    age_group: Optional[str] = None
    level: Optional[str] = None
    region: Optional[str] = None
