"""Pydantic schemas for Leads."""

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from app.models.lead import LeadStatus
from app.schemas.common import reject_null


class LeadCapture(BaseModel):
    """Public landing-page form. Status and score are assigned server-side."""
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: Optional[str] = None
    email: EmailStr
    phone: Optional[str] = None
    age: Optional[str] = None
    investment_budget: Optional[str] = None
    money_ready_available: bool = False
    source: Optional[str] = "website"
    notes: Optional[str] = None


class LeadCreate(LeadCapture):
    """Full insert schema used by staff tooling and the storage layer."""
    status: LeadStatus = LeadStatus.NEW
    score: int = Field(0, ge=0, le=100)
    user_id: Optional[str] = None

    class Config:
        use_enum_values = True


class LeadUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    age: Optional[str] = None
    investment_budget: Optional[str] = None
    money_ready_available: Optional[bool] = None
    source: Optional[str] = None
    status: Optional[LeadStatus] = None
    score: Optional[int] = Field(None, ge=0, le=100)
    notes: Optional[str] = None
    user_id: Optional[str] = None

    not_null = field_validator(
        "first_name", "email", "money_ready_available", "status", "score", mode="before"
    )(reject_null)

    class Config:
        use_enum_values = True


class LeadOut(BaseModel):
    """Schema for returning lead details."""
    id: str
    first_name: str
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    age: Optional[str] = None
    investment_budget: Optional[str] = None
    money_ready_available: bool
    source: Optional[str] = None
    status: str
    score: int
    notes: Optional[str] = None
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
