"""Lead model: a prospective investor captured by the landing page."""
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class LeadStatus(str, enum.Enum):
    """Lead status enum."""
    NEW = "new"
    QUALIFIED = "qualified"
    CONSULTATION = "consultation"
    CLOSED = "closed"
    LOST = "lost"


class Lead(Base):
    """Lead model."""
    __tablename__ = "leads"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    age = Column(String(10), nullable=True)
    investment_budget = Column(String(100), nullable=True)
    money_ready_available = Column(Boolean, nullable=False, default=False)
    source = Column(String(100), nullable=True)
    # Plain string column; the allowed values are enforced by the request schemas
    status = Column(String(50), nullable=False, default=LeadStatus.NEW.value, index=True)
    score = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="leads")
    bookings = relationship("Booking", back_populates="lead")
    email_sends = relationship("EmailSend", back_populates="lead")
