"""Relational storage backend on async SQLAlchemy.

Each operation opens its own session from the injected session factory and
commits before returning, so returned instances are detached snapshots
(`expire_on_commit=False`).
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

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
from app.storage.base import (
    DEFAULT_PAGE_SIZE,
    IntegrityViolation,
    NotFoundError,
    Storage,
    percentage,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class DatabaseStorage(Storage):
    """SQL implementation of the storage contract."""

    def __init__(self, session_factory: async_sessionmaker, engine: Optional[AsyncEngine] = None):
        self._session_factory = session_factory
        self._engine = engine

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    async def _insert(self, model: Type[ModelT], values: Dict[str, Any]) -> ModelT:
        record = model(**values)
        async with self._session_factory() as db:
            db.add(record)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                logger.warning("Rejected %s insert: %s", model.__name__, e.orig)
                raise IntegrityViolation(f"Failed to create {model.__name__}") from e
            await db.refresh(record)
        return record

    async def _update(self, model: Type[ModelT], record_id: str, values: Dict[str, Any]) -> ModelT:
        async with self._session_factory() as db:
            record = await db.get(model, record_id)
            if record is None:
                raise NotFoundError(model.__name__, record_id)
            for key, value in values.items():
                setattr(record, key, value)
            if hasattr(record, "updated_at"):
                record.updated_at = datetime.utcnow()
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                logger.warning("Rejected %s update %s: %s", model.__name__, record_id, e.orig)
                raise IntegrityViolation(f"Failed to update {model.__name__}") from e
            await db.refresh(record)
        return record

    async def _one(self, stmt) -> Optional[Any]:
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

    async def _all(self, stmt) -> List[Any]:
        async with self._session_factory() as db:
            result = await db.execute(stmt)
            return list(result.scalars().all())

    async def _count(self, db: AsyncSession, stmt) -> int:
        return (await db.execute(stmt)).scalar() or 0

    # User operations
    async def get_user(self, user_id: str) -> Optional[User]:
        async with self._session_factory() as db:
            return await db.get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self._one(select(User).where(User.username == username).limit(1))

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self._one(select(User).where(User.email == email).limit(1))

    async def create_user(self, data: UserCreate) -> User:
        user = await self._insert(User, data.model_dump(exclude_none=True))
        logger.info("Created user %s (%s, role=%s)", user.id, user.username, user.role)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        return await self._update(User, user_id, data.model_dump(exclude_unset=True))

    # Lead operations
    async def create_lead(self, data: LeadCreate) -> Lead:
        return await self._insert(Lead, data.model_dump(exclude_none=True))

    async def get_leads(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Lead]:
        stmt = (
            select(Lead)
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._all(stmt)

    async def get_lead(self, lead_id: str) -> Optional[Lead]:
        async with self._session_factory() as db:
            return await db.get(Lead, lead_id)

    async def update_lead(self, lead_id: str, data: LeadUpdate) -> Lead:
        return await self._update(Lead, lead_id, data.model_dump(exclude_unset=True))

    # Investment operations
    async def create_investment(self, user_id: str, data: InvestmentCreate) -> Investment:
        values = data.model_dump(exclude_none=True)
        values["user_id"] = user_id
        return await self._insert(Investment, values)

    async def get_investments_by_user(self, user_id: str) -> List[Investment]:
        stmt = (
            select(Investment)
            .where(Investment.user_id == user_id)
            .order_by(Investment.investment_date.desc(), Investment.id.desc())
        )
        return await self._all(stmt)

    async def get_investment(self, investment_id: str) -> Optional[Investment]:
        async with self._session_factory() as db:
            return await db.get(Investment, investment_id)

    async def update_investment(self, investment_id: str, data: InvestmentUpdate) -> Investment:
        return await self._update(Investment, investment_id, data.model_dump(exclude_unset=True))

    # Booking operations
    async def create_booking(self, data: BookingCreate) -> Booking:
        return await self._insert(Booking, data.model_dump(exclude_none=True))

    async def get_bookings(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Booking]:
        stmt = (
            select(Booking)
            .order_by(Booking.scheduled_at.desc(), Booking.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._all(stmt)

    async def get_bookings_by_user(self, user_id: str) -> List[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.scheduled_at.desc(), Booking.id.desc())
        )
        return await self._all(stmt)

    async def update_booking(self, booking_id: str, data: BookingUpdate) -> Booking:
        return await self._update(Booking, booking_id, data.model_dump(exclude_unset=True))

    # Email operations
    async def create_email_sequence(self, data: EmailSequenceCreate) -> EmailSequence:
        return await self._insert(EmailSequence, data.model_dump(exclude_none=True))

    async def get_email_sequences(self) -> List[EmailSequence]:
        stmt = select(EmailSequence).order_by(EmailSequence.created_at.desc(), EmailSequence.id.desc())
        return await self._all(stmt)

    async def update_email_sequence(self, sequence_id: str, data: EmailSequenceUpdate) -> EmailSequence:
        return await self._update(EmailSequence, sequence_id, data.model_dump(exclude_unset=True))

    async def create_email_template(self, data: EmailTemplateCreate) -> EmailTemplate:
        return await self._insert(EmailTemplate, data.model_dump(exclude_none=True))

    async def get_email_templates_by_sequence(self, sequence_id: str) -> List[EmailTemplate]:
        stmt = (
            select(EmailTemplate)
            .where(EmailTemplate.sequence_id == sequence_id)
            .order_by(EmailTemplate.order, EmailTemplate.id)
        )
        return await self._all(stmt)

    async def update_email_template(self, template_id: str, data: EmailTemplateUpdate) -> EmailTemplate:
        return await self._update(EmailTemplate, template_id, data.model_dump(exclude_unset=True))

    async def create_email_send(
        self,
        template_id: str,
        lead_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> EmailSend:
        return await self._insert(
            EmailSend,
            {"template_id": template_id, "lead_id": lead_id, "user_id": user_id},
        )

    async def update_email_send(self, send_id: str, data: EmailSendUpdate) -> EmailSend:
        return await self._update(EmailSend, send_id, data.model_dump(exclude_unset=True))

    # Analytics operations
    async def get_lead_stats(self) -> LeadStats:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Lead.status, func.count(Lead.id)).group_by(Lead.status)
            )
            by_status = {status: count for status, count in result.all()}

        return LeadStats(
            total=sum(by_status.values()),
            new=by_status.get(LeadStatus.NEW.value, 0),
            qualified=by_status.get(LeadStatus.QUALIFIED.value, 0),
            consultation=by_status.get(LeadStatus.CONSULTATION.value, 0),
            closed=by_status.get(LeadStatus.CLOSED.value, 0),
            lost=by_status.get(LeadStatus.LOST.value, 0),
        )

    async def get_investment_stats(self) -> InvestmentStats:
        async with self._session_factory() as db:
            totals = (
                await db.execute(
                    select(
                        func.count(Investment.id),
                        func.coalesce(func.sum(Investment.amount), 0),
                        func.coalesce(func.sum(Investment.current_value), 0),
                    )
                )
            ).one()
            active_investors = await self._count(
                db, select(func.count(User.id)).where(User.role == UserRole.INVESTOR.value)
            )

        count, total_amount, total_current_value = totals
        return InvestmentStats(
            total_investments=count or 0,
            total_amount=float(total_amount or 0),
            total_current_value=float(total_current_value or 0),
            active_investors=active_investors,
        )

    async def get_email_stats(self) -> EmailStats:
        async with self._session_factory() as db:
            sent = await self._count(db, select(func.count(EmailSend.id)))
            opened = await self._count(
                db, select(func.count(EmailSend.id)).where(EmailSend.opened_at.is_not(None))
            )
            clicked = await self._count(
                db, select(func.count(EmailSend.id)).where(EmailSend.clicked_at.is_not(None))
            )

        return EmailStats(
            total_sent=sent,
            total_opened=opened,
            total_clicked=clicked,
            open_rate=percentage(opened, sent),
            click_rate=percentage(clicked, sent),
        )
