"""Pydantic schemas for email sequences, templates and sends."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.email import EmailSendStatus
from app.schemas.common import reject_null, to_naive_utc


class EmailSequenceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: bool = True
    trigger_event: str = Field(..., min_length=1, max_length=100)  # lead_capture, consultation_booked, ...


class EmailSequenceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    trigger_event: Optional[str] = Field(None, min_length=1, max_length=100)

    not_null = field_validator("name", "is_active", "trigger_event", mode="before")(reject_null)


class EmailSequenceOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    trigger_event: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EmailTemplateCreate(BaseModel):
    sequence_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=500)
    content: str
    day_delay: int = Field(0, ge=0)
    order: int


class EmailTemplateUpdate(BaseModel):
    sequence_id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    subject: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = None
    day_delay: Optional[int] = Field(None, ge=0)
    order: Optional[int] = None

    not_null = field_validator("name", "subject", "content", "day_delay", "order", mode="before")(reject_null)


class EmailTemplateOut(BaseModel):
    id: str
    sequence_id: Optional[str] = None
    name: str
    subject: str
    content: str
    day_delay: int
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EmailSendCreate(BaseModel):
    template_id: str
    lead_id: Optional[str] = None
    user_id: Optional[str] = None


class EmailSendUpdate(BaseModel):
    """Tracking update: open / click timestamps and delivery status."""
    opened_at: Optional[datetime] = None
    clicked_at: Optional[datetime] = None
    status: Optional[EmailSendStatus] = None

    not_null = field_validator("status", mode="before")(reject_null)
    normalize_timestamps = field_validator("opened_at", "clicked_at")(to_naive_utc)

    class Config:
        use_enum_values = True


class EmailSendOut(BaseModel):
    id: str
    template_id: str
    lead_id: Optional[str] = None
    user_id: Optional[str] = None
    sent_at: datetime
    opened_at: Optional[datetime] = None
    clicked_at: Optional[datetime] = None
    status: str

    class Config:
        from_attributes = True
