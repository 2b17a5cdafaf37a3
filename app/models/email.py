"""Email campaign bookkeeping: sequences, their ordered templates, and sends."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.database import Base


class EmailSendStatus(str, enum.Enum):
    SENT = "sent"
    DELIVERED = "delivered"
    OPENED = "opened"
    CLICKED = "clicked"
    FAILED = "failed"


class EmailSequence(Base):
    __tablename__ = "email_sequences"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    trigger_event = Column(String(100), nullable=False)  # lead_capture, consultation_booked, ...
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    templates = relationship("EmailTemplate", back_populates="sequence", order_by="EmailTemplate.order")


class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sequence_id = Column(String(36), ForeignKey("email_sequences.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    day_delay = Column(Integer, nullable=False, default=0)
    order = Column("order", Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    sequence = relationship("EmailSequence", back_populates="templates")
    sends = relationship("EmailSend", back_populates="template")


class EmailSend(Base):
    __tablename__ = "email_sends"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    template_id = Column(String(36), ForeignKey("email_templates.id"), nullable=False, index=True)
    lead_id = Column(String(36), ForeignKey("leads.id"), nullable=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    sent_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    opened_at = Column(DateTime, nullable=True)
    clicked_at = Column(DateTime, nullable=True)
    status = Column(String(50), nullable=False, default=EmailSendStatus.SENT.value, index=True)

    template = relationship("EmailTemplate", back_populates="sends")
    lead = relationship("Lead", back_populates="email_sends")
    user = relationship("User", back_populates="email_sends")
