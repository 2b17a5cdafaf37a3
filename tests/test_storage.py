"""Storage contract tests, run against both the in-memory and SQL backends."""

from datetime import datetime, timedelta

import pytest

from app.models.user import UserRole
from app.schemas.auth import UserCreate
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
from app.storage import IntegrityViolation, MemoryStorage, NotFoundError


async def _user(store, username="alice", role=UserRole.INVESTOR):
    return await store.create_user(UserCreate(
        username=username,
        email=f"{username}@example.com",
        password="not-a-real-hash",
        role=role,
    ))


async def _lead(store, first_name="Ann", **extra):
    return await store.create_lead(LeadCreate(first_name=first_name, email="ann@example.com", **extra))


@pytest.mark.asyncio
async def test_create_lead_applies_defaults(backend):
    """A minimal lead gets an id, status new, score 0 and timestamps."""
    lead = await _lead(backend)

    assert lead.id
    assert lead.status == "new"
    assert lead.score == 0
    assert lead.money_ready_available is False
    assert lead.created_at is not None
    assert lead.updated_at is not None
    assert await backend.get_lead(lead.id) is not None


@pytest.mark.asyncio
async def test_get_lead_unknown_returns_none(backend):
    assert await backend.get_lead("does-not-exist") is None


@pytest.mark.asyncio
async def test_leads_newest_first_with_pagination(backend):
    """Leads list newest first; limit and offset page through them."""
    for name in ("First", "Second", "Third"):
        await _lead(backend, first_name=name)

    everything = await backend.get_leads()
    assert [lead.first_name for lead in everything] == ["Third", "Second", "First"]

    page = await backend.get_leads(limit=1, offset=1)
    assert [lead.first_name for lead in page] == ["Second"]
    assert await backend.get_leads(limit=10, offset=5) == []


@pytest.mark.asyncio
async def test_update_lead_merges_only_set_fields(backend):
    lead = await _lead(backend, phone="+27 82 000 0000", investment_budget="500k+")

    updated = await backend.update_lead(lead.id, LeadUpdate(status="qualified", notes="Called back"))

    assert updated.status == "qualified"
    assert updated.notes == "Called back"
    assert updated.phone == "+27 82 000 0000"
    assert updated.investment_budget == "500k+"
    assert updated.updated_at >= lead.updated_at


@pytest.mark.asyncio
async def test_update_unknown_ids_raise_not_found(backend):
    """Every update operation reports unknown ids the same way."""
    with pytest.raises(NotFoundError):
        await backend.update_lead("missing", LeadUpdate(notes="x"))
    with pytest.raises(NotFoundError):
        await backend.update_investment("missing", InvestmentUpdate(current_value=1.0))
    with pytest.raises(NotFoundError):
        await backend.update_booking("missing", BookingUpdate(status="completed"))
    with pytest.raises(NotFoundError):
        await backend.update_email_sequence("missing", EmailSequenceUpdate(is_active=False))
    with pytest.raises(NotFoundError):
        await backend.update_email_template("missing", EmailTemplateUpdate(subject="x"))
    with pytest.raises(NotFoundError):
        await backend.update_email_send("missing", EmailSendUpdate(status="opened"))


@pytest.mark.asyncio
async def test_user_lookup_and_stripe_linkage(backend):
    user = await _user(backend)

    assert (await backend.get_user_by_username("alice")).id == user.id
    assert (await backend.get_user_by_email("alice@example.com")).id == user.id
    assert await backend.get_user_by_username("bob") is None

    linked = await backend.update_user_stripe_info(user.id, "cus_123")
    assert linked.stripe_customer_id == "cus_123"
    assert linked.stripe_subscription_id is None
    assert (await backend.get_user(user.id)).stripe_customer_id == "cus_123"


@pytest.mark.asyncio
async def test_investments_scoped_to_owner(backend):
    alice = await _user(backend, "alice")
    bob = await _user(backend, "bob")
    now = datetime.utcnow()
    older = await backend.create_investment(alice.id, InvestmentCreate(
        fund_name="Growth Fund", amount=1000, investment_date=now - timedelta(days=30),
    ))
    newer = await backend.create_investment(alice.id, InvestmentCreate(
        fund_name="Income Fund", amount=500, investment_date=now,
    ))
    await backend.create_investment(bob.id, InvestmentCreate(fund_name="Other", amount=10))

    mine = await backend.get_investments_by_user(alice.id)
    assert [inv.id for inv in mine] == [newer.id, older.id]
    assert older.status == "active"
    assert older.user_id == alice.id

    revalued = await backend.update_investment(older.id, InvestmentUpdate(current_value=1250, return_percentage=25))
    assert revalued.current_value == 1250
    assert revalued.amount == 1000
    assert (await backend.get_investment(older.id)).return_percentage == 25


@pytest.mark.asyncio
async def test_bookings_order_and_user_filter(backend):
    user = await _user(backend)
    soon = datetime.utcnow() + timedelta(days=1)
    later = soon + timedelta(days=6)
    first = await backend.create_booking(BookingCreate(scheduled_at=soon, user_id=user.id))
    second = await backend.create_booking(BookingCreate(scheduled_at=later))

    assert first.duration == 30
    assert first.type == "consultation"
    assert first.status == "scheduled"
    assert [b.id for b in await backend.get_bookings()] == [second.id, first.id]
    assert [b.id for b in await backend.get_bookings(limit=1, offset=1)] == [first.id]
    assert [b.id for b in await backend.get_bookings_by_user(user.id)] == [first.id]

    done = await backend.update_booking(first.id, BookingUpdate(status="completed"))
    assert done.status == "completed"
    assert done.scheduled_at == soon


@pytest.mark.asyncio
async def test_templates_listed_in_send_order(backend):
    sequence = await backend.create_email_sequence(EmailSequenceCreate(
        name="Welcome Series", trigger_event="lead_capture",
    ))
    for order in (3, 1, 2):
        await backend.create_email_template(EmailTemplateCreate(
            sequence_id=sequence.id, name=f"Email {order}", subject="Hi", content="...", order=order,
        ))

    templates = await backend.get_email_templates_by_sequence(sequence.id)
    assert [t.order for t in templates] == [1, 2, 3]
    assert await backend.get_email_templates_by_sequence("other") == []
    assert [s.id for s in await backend.get_email_sequences()] == [sequence.id]
    assert sequence.is_active is True


@pytest.mark.asyncio
async def test_lead_stats_follow_status_changes(backend):
    first = await _lead(backend)
    await _lead(backend)
    await _lead(backend)
    await backend.update_lead(first.id, LeadUpdate(status="lost"))

    stats = await backend.get_lead_stats()

    assert stats.total == 3
    assert stats.new == 2
    assert stats.lost == 1
    assert stats.qualified == 0
    assert stats.consultation == 0
    assert stats.closed == 0


@pytest.mark.asyncio
async def test_email_stats_empty(backend):
    """No sends means zero rates, not a division error."""
    stats = await backend.get_email_stats()

    assert stats.total_sent == 0
    assert stats.open_rate == 0
    assert stats.click_rate == 0


@pytest.mark.asyncio
async def test_email_stats_rates(backend):
    template = await backend.create_email_template(EmailTemplateCreate(
        name="Welcome", subject="Hi", content="...", order=1,
    ))
    sends = [await backend.create_email_send(template.id) for _ in range(3)]
    opened_at = datetime.utcnow()
    await backend.update_email_send(sends[0].id, EmailSendUpdate(opened_at=opened_at, status="opened"))
    await backend.update_email_send(sends[1].id, EmailSendUpdate(opened_at=opened_at, clicked_at=opened_at))

    stats = await backend.get_email_stats()

    assert sends[0].status == "sent"
    assert sends[0].sent_at is not None
    assert stats.total_sent == 3
    assert stats.total_opened == 2
    assert stats.total_clicked == 1
    assert stats.open_rate == pytest.approx(200 / 3)
    assert stats.click_rate == pytest.approx(100 / 3)


@pytest.mark.asyncio
async def test_investment_stats(backend):
    investor = await _user(backend, "inv", UserRole.INVESTOR)
    await _user(backend, "boss", UserRole.ADMIN)
    await backend.create_investment(investor.id, InvestmentCreate(fund_name="A", amount=1000, current_value=1100))
    await backend.create_investment(investor.id, InvestmentCreate(fund_name="B", amount=500))

    stats = await backend.get_investment_stats()

    assert stats.total_investments == 2
    assert stats.total_amount == 1500
    assert stats.total_current_value == 1100
    assert stats.active_investors == 1


@pytest.mark.asyncio
async def test_investment_stats_empty(backend):
    stats = await backend.get_investment_stats()

    assert stats.total_investments == 0
    assert stats.total_amount == 0
    assert stats.active_investors == 0


@pytest.mark.asyncio
async def test_foreign_keys_enforced_by_database(backend):
    """The SQL backend rejects dangling references; the memory store does not check them."""
    if isinstance(backend, MemoryStorage):
        send = await backend.create_email_send("no-such-template")
        assert send.template_id == "no-such-template"
        return

    with pytest.raises(IntegrityViolation):
        await backend.create_email_send("no-such-template")
    with pytest.raises(IntegrityViolation):
        await backend.create_booking(BookingCreate(scheduled_at=datetime.utcnow(), lead_id="no-such-lead"))


@pytest.mark.asyncio
async def test_lead_pages_are_disjoint_and_contiguous(backend):
    for i in range(5):
        await _lead(backend, first_name=f"Lead {i}")

    first_page = await backend.get_leads(limit=2, offset=0)
    second_page = await backend.get_leads(limit=2, offset=2)
    everything = await backend.get_leads()

    assert len(first_page) == 2
    assert len(second_page) == 2
    assert {lead.id for lead in first_page}.isdisjoint(lead.id for lead in second_page)
    assert [lead.id for lead in first_page + second_page] == [lead.id for lead in everything[:4]]


@pytest.mark.asyncio
async def test_closing_a_lead_moves_its_count(backend):
    lead = await _lead(backend)
    await backend.update_lead(lead.id, LeadUpdate(status="qualified"))
    before = await backend.get_lead_stats()

    await backend.update_lead(lead.id, LeadUpdate(status="closed"))
    after = await backend.get_lead_stats()

    assert (before.qualified, before.closed) == (1, 0)
    assert (after.qualified, after.closed) == (0, 1)
    assert after.total == before.total


@pytest.mark.asyncio
async def test_returned_records_are_snapshots(backend):
    """Records handed out by the store do not change under later writes, and vice versa."""
    created = await _lead(backend)

    await backend.update_lead(created.id, LeadUpdate(status="closed"))
    assert created.status == "new"

    fetched = await backend.get_lead(created.id)
    fetched.notes = "edited outside the store"
    listed = (await backend.get_leads())[0]
    listed.status = "lost"

    stored = await backend.get_lead(created.id)
    assert stored.status == "closed"
    assert stored.notes is None


@pytest.mark.asyncio
async def test_equal_timestamps_order_by_id_descending(backend):
    """Ties on the sort timestamp list the same way on every backend."""
    slot = datetime(2030, 1, 15, 10, 0)
    created = [
        await backend.create_booking(BookingCreate(scheduled_at=slot, notes=f"B{i}"))
        for i in range(8)
    ]

    listed = await backend.get_bookings()
    expected = sorted((b.id for b in created), reverse=True)
    assert [b.id for b in listed] == expected

    pages = await backend.get_bookings(limit=3, offset=0) + await backend.get_bookings(limit=5, offset=3)
    assert [b.id for b in pages] == expected


@pytest.mark.asyncio
async def test_email_rates_are_not_rounded(backend):
    template = await backend.create_email_template(EmailTemplateCreate(
        name="Welcome", subject="Hi", content="...", order=1,
    ))
    sends = [await backend.create_email_send(template.id) for _ in range(3)]
    await backend.update_email_send(sends[0].id, EmailSendUpdate(opened_at=datetime.utcnow()))

    stats = await backend.get_email_stats()

    assert stats.open_rate == pytest.approx(100 / 3)
    assert stats.open_rate != 33.3
    assert stats.click_rate == 0
