"""Demo data for the admin dashboard."""

import logging
from datetime import datetime, timedelta

from app.models.booking import BookingStatus, BookingType
from app.models.lead import LeadStatus
from app.schemas.booking import BookingCreate
from app.schemas.email import EmailSequenceCreate, EmailTemplateCreate
from app.schemas.lead import LeadCreate
from app.services.scoring import score_lead
from app.storage import Storage

logger = logging.getLogger(__name__)

SAMPLE_LEADS = [
    {
        "first_name": "Sarah",
        "last_name": "Williams",
        "email": "sarah.williams@example.com",
        "phone": "+27 82 123 4567",
        "investment_budget": "500k+",
        "money_ready_available": True,
        "status": LeadStatus.QUALIFIED,
        "source": "website",
    },
    {
        "first_name": "Michael",
        "last_name": "Roberts",
        "email": "michael.roberts@example.com",
        "phone": "+27 83 234 5678",
        "investment_budget": "100k-500k",
        "status": LeadStatus.CONSULTATION,
        "source": "referral",
    },
    {
        "first_name": "Lisa",
        "last_name": "Chen",
        "email": "lisa.chen@example.com",
        "phone": "+27 84 345 6789",
        "investment_budget": "50k-100k",
        "status": LeadStatus.NEW,
        "source": "linkedin",
    },
    {
        "first_name": "David",
        "last_name": "Thompson",
        "email": "david.thompson@example.com",
        "phone": "+27 85 456 7890",
        "investment_budget": "500k+",
        "money_ready_available": True,
        "status": LeadStatus.CLOSED,
        "source": "website",
    },
]

WELCOME_TEMPLATES = [
    ("Welcome", "Welcome to PE Capital - Your Investment Journey Starts Here",
     "Thank you for downloading our investment guide..."),
    ("Private Equity 101", "Private Equity 101: Understanding the Basics",
     "In this email, we'll cover the fundamentals of private equity..."),
]


async def create_sample_data(storage: Storage) -> dict:
    """Populate leads, two bookings, and a welcome sequence with its templates."""
    leads = []
    for lead in SAMPLE_LEADS:
        leads.append(await storage.create_lead(
            LeadCreate(score=score_lead(lead["investment_budget"]), **lead)
        ))

    tomorrow = (datetime.utcnow() + timedelta(days=1)).replace(hour=10, minute=0, second=0, microsecond=0)
    next_week = (datetime.utcnow() + timedelta(days=7)).replace(hour=14, minute=0, second=0, microsecond=0)
    bookings = [
        await storage.create_booking(BookingCreate(
            lead_id=leads[0].id,
            scheduled_at=tomorrow,
            duration=60,
            type=BookingType.CONSULTATION,
            status=BookingStatus.SCHEDULED,
        )),
        await storage.create_booking(BookingCreate(
            lead_id=leads[1].id,
            scheduled_at=next_week,
            duration=45,
            type=BookingType.PORTFOLIO_REVIEW,
            status=BookingStatus.SCHEDULED,
        )),
    ]

    sequence = await storage.create_email_sequence(EmailSequenceCreate(
        name="Welcome Series",
        description="7-email sequence for new leads",
        is_active=True,
        trigger_event="lead_capture",
    ))
    for position, (name, subject, content) in enumerate(WELCOME_TEMPLATES, start=1):
        await storage.create_email_template(EmailTemplateCreate(
            sequence_id=sequence.id,
            name=name,
            subject=subject,
            content=content,
            day_delay=(position - 1) * 2,
            order=position,
        ))

    logger.info(
        "Sample data created: %d leads, %d bookings, sequence %s",
        len(leads), len(bookings), sequence.id,
    )
    return {
        "leads": len(leads),
        "bookings": len(bookings),
        "email_sequences": 1,
        "email_templates": len(WELCOME_TEMPLATES),
    }
