"""Tests for consultation booking endpoints."""

from datetime import datetime, timedelta

import pytest


def _booking_payload(days_ahead=1, **overrides):
    payload = {
        "scheduled_at": (datetime.utcnow() + timedelta(days=days_ahead)).replace(microsecond=0).isoformat(),
        "duration": 60,
        "type": "consultation",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_booking_public(client):
    resp = await client.post("/api/bookings", json=_booking_payload())

    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "scheduled"
    assert data["duration"] == 60
    assert data["type"] == "consultation"


@pytest.mark.asyncio
async def test_create_booking_defaults(client):
    payload = {"scheduled_at": "2030-01-15T10:00:00"}

    resp = await client.post("/api/bookings", json=payload)

    assert resp.status_code == 201
    assert resp.json()["duration"] == 30
    assert resp.json()["type"] == "consultation"


@pytest.mark.asyncio
async def test_create_booking_normalizes_timezone(client):
    """Offsets are converted to UTC before storing."""
    resp = await client.post("/api/bookings", json={"scheduled_at": "2030-01-15T12:00:00+02:00"})

    assert resp.status_code == 201
    assert resp.json()["scheduled_at"] == "2030-01-15T10:00:00"


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"duration": 0},
    {"duration": 1000},
    {"type": "coffee"},
    {"scheduled_at": "next tuesday"},
])
async def test_create_booking_invalid(client, overrides):
    resp = await client.post("/api/bookings", json=_booking_payload(**overrides))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_list_bookings_latest_first(client, admin_headers):
    await client.post("/api/bookings", json=_booking_payload(days_ahead=1, notes="soon"))
    await client.post("/api/bookings", json=_booking_payload(days_ahead=7, notes="later"))

    resp = await client.get("/api/bookings", headers=admin_headers)

    assert resp.status_code == 200
    assert [b["notes"] for b in resp.json()] == ["later", "soon"]


@pytest.mark.asyncio
async def test_list_bookings_requires_auth(client):
    resp = await client.get("/api/bookings")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_my_bookings(client, investor_user, investor_headers):
    await client.post("/api/bookings", json=_booking_payload(user_id=investor_user.id, notes="mine"))
    await client.post("/api/bookings", json=_booking_payload(notes="someone else"))

    resp = await client.get("/api/bookings/mine", headers=investor_headers)

    assert resp.status_code == 200
    assert [b["notes"] for b in resp.json()] == ["mine"]


@pytest.mark.asyncio
async def test_update_booking_status(client, admin_headers):
    created = (await client.post("/api/bookings", json=_booking_payload())).json()

    resp = await client.put(
        f"/api/bookings/{created['id']}", json={"status": "completed"}, headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    assert resp.json()["scheduled_at"] == created["scheduled_at"]


@pytest.mark.asyncio
async def test_update_unknown_booking(client, admin_headers):
    resp = await client.put("/api/bookings/missing", json={"status": "cancelled"}, headers=admin_headers)
    assert resp.status_code == 404
