from app.models.user import User, UserRole
from app.models.lead import Lead, LeadStatus
from app.models.investment import Investment, InvestmentStatus
from app.models.booking import Booking, BookingStatus, BookingType
from app.models.email import EmailSend, EmailSendStatus, EmailSequence, EmailTemplate

__all__ = [
    "User",
    "UserRole",
    "Lead",
    "LeadStatus",
    "Investment",
    "InvestmentStatus",
    "Booking",
    "BookingStatus",
    "BookingType",
    "EmailSequence",
    "EmailTemplate",
    "EmailSend",
    "EmailSendStatus",
]
