"""Pydantic schemas for Bookings."""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from app.models.booking import BookingStatus, BookingType
from app.schemas.common import reject_null, to_naive_utc


class BookingCreate(BaseModel):
    """Schema for creating a booking."""
    lead_id: Optional[str] = None
    user_id: Optional[str] = None
    scheduled_at: datetime
    duration: int = Field(30, gt=0, le=480)  # minutes
    type: BookingType = BookingType.CONSULTATION
    status: BookingStatus = BookingStatus.SCHEDULED
    meeting_link: Optional[str] = None
    notes: Optional[str] = None

    normalize_scheduled_at = field_validator("scheduled_at")(to_naive_utc)

    class Config:
        use_enum_values = True


class BookingUpdate(BaseModel):
    """Partial booking update (reschedule, status change, notes)."""
    lead_id: Optional[str] = None
    user_id: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0, le=480)
    type: Optional[BookingType] = None
    status: Optional[BookingStatus] = None
    meeting_link: Optional[str] = None
    notes: Optional[str] = None

    not_null = field_validator("scheduled_at", "duration", "type", "status", mode="before")(reject_null)
    normalize_scheduled_at = field_validator("scheduled_at")(to_naive_utc)

    class Config:
        use_enum_values = True


class BookingOut(BaseModel):
    """Schema for returning booking details."""
    id: str
    lead_id: Optional[str] = None
    user_id: Optional[str] = None
    scheduled_at: datetime
    duration: int
    type: str
    status: str
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
