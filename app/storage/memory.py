"""In-process storage backend for development, demos and tests.

Records live in one dict per entity, keyed by id, on the instance itself,
so every application (and every test) owns an isolated store. Column
defaults declared on the ORM models are applied on create, so records look
exactly like rows read back from the SQL backend. Callers always receive
copies, never the stored instances. Foreign keys are not checked.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import inspect

from app.core.database import Base
from app.models import (
    Booking,
    EmailSend,
    EmailSequence,
    EmailTemplate,
    Investment,
    Lead,
    LeadStatus,
    User,
    UserRole,
)
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
from app.storage.base import DEFAULT_PAGE_SIZE, NotFoundError, Storage, percentage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _new_record(model: Type[ModelT], values: Dict[str, Any]) -> ModelT:
    """Build a transient model instance, filling unset columns from their defaults."""
    record = model(**values)
    for attr in inspect(model).column_attrs:
        column = attr.columns[0]
        if getattr(record, attr.key) is not None or column.default is None:
            continue
        default = column.default
        if default.is_callable:
            setattr(record, attr.key, default.arg(None))
        elif default.is_scalar:
            setattr(record, attr.key, default.arg)
    if getattr(record, "id", None) is None:
        record.id = str(uuid.uuid4())
    return record


def _copy(record: Optional[ModelT]) -> Optional[ModelT]:
    """Detached copy of a stored record's column values."""
    if record is None:
        return None
    model = type(record)
    return model(**{attr.key: getattr(record, attr.key) for attr in inspect(model).column_attrs})


def _newest_first(records: Iterable[ModelT], key: str) -> List[ModelT]:
    # Equal timestamps fall back to id descending, as the SQL backend orders them
    ordered = sorted(records, key=lambda r: (getattr(r, key), r.id), reverse=True)
    return [_copy(r) for r in ordered]


class MemoryStorage(Storage):
    """Dict-backed implementation of the storage contract."""

    def __init__(self) -> None:
        self.users: Dict[str, User] = {}
        self.leads: Dict[str, Lead] = {}
        self.investments: Dict[str, Investment] = {}
        self.bookings: Dict[str, Booking] = {}
        self.email_sequences: Dict[str, EmailSequence] = {}
        self.email_templates: Dict[str, EmailTemplate] = {}
        self.email_sends: Dict[str, EmailSend] = {}

    def _insert(self, table: Dict[str, ModelT], model: Type[ModelT], values: Dict[str, Any]) -> ModelT:
        record = _new_record(model, values)
        table[record.id] = record
        return _copy(record)

    def _update(self, table: Dict[str, ModelT], entity: str, record_id: str, values: Dict[str, Any]) -> ModelT:
        record = table.get(record_id)
        if record is None:
            raise NotFoundError(entity, record_id)
        for key, value in values.items():
            setattr(record, key, value)
        if hasattr(record, "updated_at"):
            record.updated_at = datetime.utcnow()
        return _copy(record)

    # User operations
    async def get_user(self, user_id: str) -> Optional[User]:
        return _copy(self.users.get(user_id))

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return _copy(next((u for u in self.users.values() if u.username == username), None))

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return _copy(next((u for u in self.users.values() if u.email == email), None))

    async def create_user(self, data: UserCreate) -> User:
        user = self._insert(self.users, User, data.model_dump(exclude_none=True))
        logger.info("Created user %s (%s, role=%s)", user.id, user.username, user.role)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        return self._update(self.users, "User", user_id, data.model_dump(exclude_unset=True))

    # Lead operations
    async def create_lead(self, data: LeadCreate) -> Lead:
        return self._insert(self.leads, Lead, data.model_dump(exclude_none=True))

    async def get_leads(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Lead]:
        return _newest_first(self.leads.values(), "created_at")[offset:offset + limit]

    async def get_lead(self, lead_id: str) -> Optional[Lead]:
        return _copy(self.leads.get(lead_id))

    async def update_lead(self, lead_id: str, data: LeadUpdate) -> Lead:
        return self._update(self.leads, "Lead", lead_id, data.model_dump(exclude_unset=True))

    # Investment operations
    async def create_investment(self, user_id: str, data: InvestmentCreate) -> Investment:
        values = data.model_dump(exclude_none=True)
        values["user_id"] = user_id
        return self._insert(self.investments, Investment, values)

    async def get_investments_by_user(self, user_id: str) -> List[Investment]:
        owned = (inv for inv in self.investments.values() if inv.user_id == user_id)
        return _newest_first(owned, "investment_date")

    async def get_investment(self, investment_id: str) -> Optional[Investment]:
        return _copy(self.investments.get(investment_id))

    async def update_investment(self, investment_id: str, data: InvestmentUpdate) -> Investment:
        return self._update(
            self.investments, "Investment", investment_id, data.model_dump(exclude_unset=True)
        )

    # Booking operations
    async def create_booking(self, data: BookingCreate) -> Booking:
        return self._insert(self.bookings, Booking, data.model_dump(exclude_none=True))

    async def get_bookings(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Booking]:
        return _newest_first(self.bookings.values(), "scheduled_at")[offset:offset + limit]

    async def get_bookings_by_user(self, user_id: str) -> List[Booking]:
        owned = (b for b in self.bookings.values() if b.user_id == user_id)
        return _newest_first(owned, "scheduled_at")

    async def update_booking(self, booking_id: str, data: BookingUpdate) -> Booking:
        return self._update(self.bookings, "Booking", booking_id, data.model_dump(exclude_unset=True))

    # Email operations
    async def create_email_sequence(self, data: EmailSequenceCreate) -> EmailSequence:
        return self._insert(self.email_sequences, EmailSequence, data.model_dump(exclude_none=True))

    async def get_email_sequences(self) -> List[EmailSequence]:
        return _newest_first(self.email_sequences.values(), "created_at")

    async def update_email_sequence(self, sequence_id: str, data: EmailSequenceUpdate) -> EmailSequence:
        return self._update(
            self.email_sequences, "EmailSequence", sequence_id, data.model_dump(exclude_unset=True)
        )

    async def create_email_template(self, data: EmailTemplateCreate) -> EmailTemplate:
        return self._insert(self.email_templates, EmailTemplate, data.model_dump(exclude_none=True))

    async def get_email_templates_by_sequence(self, sequence_id: str) -> List[EmailTemplate]:
        templates = [t for t in self.email_templates.values() if t.sequence_id == sequence_id]
        return [_copy(t) for t in sorted(templates, key=lambda t: (t.order, t.id))]

    async def update_email_template(self, template_id: str, data: EmailTemplateUpdate) -> EmailTemplate:
        return self._update(
            self.email_templates, "EmailTemplate", template_id, data.model_dump(exclude_unset=True)
        )

    async def create_email_send(
        self,
        template_id: str,
        lead_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> EmailSend:
        return self._insert(
            self.email_sends,
            EmailSend,
            {"template_id": template_id, "lead_id": lead_id, "user_id": user_id},
        )

    async def update_email_send(self, send_id: str, data: EmailSendUpdate) -> EmailSend:
        return self._update(self.email_sends, "EmailSend", send_id, data.model_dump(exclude_unset=True))

    # Analytics operations
    async def get_lead_stats(self) -> LeadStats:
        statuses = [lead.status for lead in self.leads.values()]
        return LeadStats(
            total=len(statuses),
            new=statuses.count(LeadStatus.NEW.value),
            qualified=statuses.count(LeadStatus.QUALIFIED.value),
            consultation=statuses.count(LeadStatus.CONSULTATION.value),
            closed=statuses.count(LeadStatus.CLOSED.value),
            lost=statuses.count(LeadStatus.LOST.value),
        )

    async def get_investment_stats(self) -> InvestmentStats:
        investments = list(self.investments.values())
        return InvestmentStats(
            total_investments=len(investments),
            total_amount=sum(float(inv.amount) for inv in investments),
            total_current_value=sum(float(inv.current_value or 0) for inv in investments),
            active_investors=sum(1 for u in self.users.values() if u.role == UserRole.INVESTOR.value),
        )

    async def get_email_stats(self) -> EmailStats:
        sends = list(self.email_sends.values())
        sent = len(sends)
        opened = sum(1 for s in sends if s.opened_at is not None)
        clicked = sum(1 for s in sends if s.clicked_at is not None)
        return EmailStats(
            total_sent=sent,
            total_opened=opened,
            total_clicked=clicked,
            open_rate=percentage(opened, sent),
            click_rate=percentage(clicked, sent),
        )
