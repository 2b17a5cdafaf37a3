"""Storage contract shared by the in-memory and SQL backends.

Every operation is async and returns ORM model instances (`app.models`),
so route handlers serialize records the same way whichever backend is
active. Update operations merge only the fields a caller explicitly set
and raise `NotFoundError` for unknown ids.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.models import Booking, EmailSend, EmailSequence, EmailTemplate, Investment, Lead, User
from app.schemas.analytics import EmailStats, InvestmentStats, LeadStats
from app.schemas.auth import UserCreate, UserUpdate
from app.schemas.booking import BookingCreate, BookingUpdate
from app.schemas.email import (
    EmailSendUpdate,
    EmailSequenceCreate,
    EmailSequenceUpdate,
    EmailTemplateCreate,
    EmailTemplateUpdate,
)
from app.schemas.investment import InvestmentCreate, InvestmentUpdate
from app.schemas.lead import LeadCreate, LeadUpdate

DEFAULT_PAGE_SIZE = 50


class StorageError(Exception):
    """Base class for storage failures."""


class NotFoundError(StorageError):
    """Raised when an update targets an id that does not exist."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} not found: {record_id}")


class IntegrityViolation(StorageError):
    """Raised when a write references a missing row or breaks a constraint."""


def percentage(part: int, whole: int) -> float:
    """`part` as a percentage of `whole`, 0 when `whole` is 0."""
    return part / whole * 100 if whole > 0 else 0.0


class Storage(ABC):
    """CRUD repository over users, leads, investments, bookings and email records."""

    # User operations
    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    async def update_user(self, user_id: str, data: UserUpdate) -> User: ...

    async def update_user_stripe_info(
        self,
        user_id: str,
        stripe_customer_id: str,
        stripe_subscription_id: Optional[str] = None,
    ) -> User:
        """Link a user to their payment-processor customer (and subscription)."""
        return await self.update_user(
            user_id,
            UserUpdate(
                stripe_customer_id=stripe_customer_id,
                stripe_subscription_id=stripe_subscription_id,
            ),
        )

    # Lead operations
    @abstractmethod
    async def create_lead(self, data: LeadCreate) -> Lead: ...

    @abstractmethod
    async def get_leads(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Lead]: ...

    @abstractmethod
    async def get_lead(self, lead_id: str) -> Optional[Lead]: ...

    @abstractmethod
    async def update_lead(self, lead_id: str, data: LeadUpdate) -> Lead: ...

    # Investment operations
    @abstractmethod
    async def create_investment(self, user_id: str, data: InvestmentCreate) -> Investment: ...

    @abstractmethod
    async def get_investments_by_user(self, user_id: str) -> List[Investment]: ...

    @abstractmethod
    async def get_investment(self, investment_id: str) -> Optional[Investment]: ...

    @abstractmethod
    async def update_investment(self, investment_id: str, data: InvestmentUpdate) -> Investment: ...

    # Booking operations
    @abstractmethod
    async def create_booking(self, data: BookingCreate) -> Booking: ...

    @abstractmethod
    async def get_bookings(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Booking]: ...

    @abstractmethod
    async def get_bookings_by_user(self, user_id: str) -> List[Booking]: ...

    @abstractmethod
    async def update_booking(self, booking_id: str, data: BookingUpdate) -> Booking: ...

    # Email operations
    @abstractmethod
    async def create_email_sequence(self, data: EmailSequenceCreate) -> EmailSequence: ...

    @abstractmethod
    async def get_email_sequences(self) -> List[EmailSequence]: ...

    @abstractmethod
    async def update_email_sequence(self, sequence_id: str, data: EmailSequenceUpdate) -> EmailSequence: ...

    @abstractmethod
    async def create_email_template(self, data: EmailTemplateCreate) -> EmailTemplate: ...

    @abstractmethod
    async def get_email_templates_by_sequence(self, sequence_id: str) -> List[EmailTemplate]: ...

    @abstractmethod
    async def update_email_template(self, template_id: str, data: EmailTemplateUpdate) -> EmailTemplate: ...

    @abstractmethod
    async def create_email_send(
        self,
        template_id: str,
        lead_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> EmailSend: ...

    @abstractmethod
    async def update_email_send(self, send_id: str, data: EmailSendUpdate) -> EmailSend: ...

    # Analytics operations
    @abstractmethod
    async def get_lead_stats(self) -> LeadStats: ...

    @abstractmethod
    async def get_investment_stats(self) -> InvestmentStats: ...

    @abstractmethod
    async def get_email_stats(self) -> EmailStats: ...

    async def close(self) -> None:
        """Release backend resources. No-op unless the backend holds connections."""
