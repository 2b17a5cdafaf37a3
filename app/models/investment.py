"""Investment model: one holding in an investor's portfolio."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from app.core.database import Base


class InvestmentStatus(str, enum.Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    PENDING = "pending"


class Investment(Base):
    __tablename__ = "investments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    fund_name = Column(String(255), nullable=False)
    fund_description = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    current_value = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    return_percentage = Column(Numeric(5, 2, asdecimal=False), nullable=True)
    status = Column(String(50), nullable=False, default=InvestmentStatus.ACTIVE.value, index=True)
    investment_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="investments")
