"""Pydantic schemas for the payment bridge."""

from pydantic import BaseModel, Field


class PaymentIntentCreate(BaseModel):
    """Amount in major currency units (rand, not cents)."""
    amount: float = Field(..., gt=0, le=100_000_000)


class PaymentIntentOut(BaseModel):
    client_secret: str
