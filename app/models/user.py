"""User model for admin, investor and converted-lead accounts."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from app.core.database import Base


class UserRole(str, enum.Enum):
    LEAD = "lead"
    INVESTOR = "investor"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(1000), nullable=True)
    role = Column(String(50), nullable=False, default=UserRole.LEAD.value)
    stripe_customer_id = Column(String(255), nullable=True)
    stripe_subscription_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    leads = relationship("Lead", back_populates="user")
    investments = relationship("Investment", back_populates="user")
    bookings = relationship("Booking", back_populates="user")
    email_sends = relationship("EmailSend", back_populates="user")
