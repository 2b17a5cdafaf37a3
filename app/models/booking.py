"""Booking model for consultation scheduling."""

from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from app.core.database import Base


class BookingType(str, enum.Enum):
    CONSULTATION = "consultation"
    PORTFOLIO_REVIEW = "portfolio_review"
    FOLLOW_UP = "follow_up"


class BookingStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lead_id = Column(String(36), ForeignKey("leads.id"), nullable=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    # Meeting details
    scheduled_at = Column(DateTime, nullable=False, index=True)
    duration = Column(Integer, nullable=False, default=30)  # minutes
    type = Column(String(50), nullable=False, default=BookingType.CONSULTATION.value)
    status = Column(String(50), nullable=False, default=BookingStatus.SCHEDULED.value, index=True)
    meeting_link = Column(String(1000), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    lead = relationship("Lead", back_populates="bookings")
    user = relationship("User", back_populates="bookings")
