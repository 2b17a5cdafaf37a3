"""Pydantic schemas for Investments."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.investment import InvestmentStatus
from app.schemas.common import reject_null, to_naive_utc


class InvestmentCreate(BaseModel):
    """Request body for a new holding. The owner comes from the session, not the body."""
    fund_name: str = Field(..., min_length=1, max_length=255)
    fund_description: Optional[str] = None
    amount: float = Field(..., gt=0)
    current_value: Optional[float] = Field(None, ge=0)
    return_percentage: Optional[float] = None
    status: InvestmentStatus = InvestmentStatus.ACTIVE
    investment_date: Optional[datetime] = None

    normalize_investment_date = field_validator("investment_date")(to_naive_utc)

    class Config:
        use_enum_values = True


class InvestmentUpdate(BaseModel):
    """Manual revaluation or status change."""
    fund_name: Optional[str] = Field(None, min_length=1, max_length=255)
    fund_description: Optional[str] = None
    amount: Optional[float] = Field(None, gt=0)
    current_value: Optional[float] = Field(None, ge=0)
    return_percentage: Optional[float] = None
    status: Optional[InvestmentStatus] = None
    investment_date: Optional[datetime] = None

    not_null = field_validator("fund_name", "amount", "status", "investment_date", mode="before")(reject_null)
    normalize_investment_date = field_validator("investment_date")(to_naive_utc)

    class Config:
        use_enum_values = True


class InvestmentOut(BaseModel):
    id: str
    user_id: str
    fund_name: str
    fund_description: Optional[str] = None
    amount: float
    current_value: Optional[float] = None
    return_percentage: Optional[float] = None
    status: str
    investment_date: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
