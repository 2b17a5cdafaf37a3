"""Tests for the Stripe payment intent bridge."""

import pytest
import stripe
from unittest.mock import patch, MagicMock

from app.services.payments import to_minor_units


def test_to_minor_units():
    assert to_minor_units(100) == 10000
    assert to_minor_units(19.99) == 1999


@pytest.mark.asyncio
async def test_payment_intent_unconfigured(client):
    """Without a secret key the bridge reports 503."""
    with patch("app.core.config.settings.STRIPE_API_KEY", ""):
        resp = await client.post("/api/create-payment-intent", json={"amount": 100})

    assert resp.status_code == 503


@pytest.mark.asyncio
async def test_payment_intent_anonymous(client):
    intent = MagicMock(id="pi_123", client_secret="pi_123_secret_abc")
    with patch("app.core.config.settings.STRIPE_API_KEY", "sk_test_123"), \
            patch("stripe.PaymentIntent.create", return_value=intent) as create:
        resp = await client.post("/api/create-payment-intent", json={"amount": 250.5})

    assert resp.status_code == 200
    assert resp.json() == {"client_secret": "pi_123_secret_abc"}
    kwargs = create.call_args.kwargs
    assert kwargs["amount"] == 25050
    assert kwargs["currency"] == "zar"
    assert kwargs["metadata"] == {"type": "investment"}
    assert "customer" not in kwargs


@pytest.mark.asyncio
async def test_payment_intent_links_customer(client, storage, investor_user, investor_headers):
    """A logged-in caller gets a Stripe customer on first payment, reused afterwards."""
    intent = MagicMock(id="pi_1", client_secret="secret_1")
    customer = MagicMock(id="cus_abc")
    with patch("app.core.config.settings.STRIPE_API_KEY", "sk_test_123"), \
            patch("stripe.Customer.create", return_value=customer) as create_customer, \
            patch("stripe.PaymentIntent.create", return_value=intent) as create_intent:
        first = await client.post("/api/create-payment-intent", json={"amount": 10}, headers=investor_headers)
        second = await client.post("/api/create-payment-intent", json={"amount": 20}, headers=investor_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert create_customer.call_count == 1
    assert create_intent.call_args.kwargs["customer"] == "cus_abc"
    assert (await storage.get_user(investor_user.id)).stripe_customer_id == "cus_abc"


@pytest.mark.asyncio
async def test_payment_intent_stripe_error(client):
    error = stripe.InvalidRequestError("Amount too small", param="amount")
    with patch("app.core.config.settings.STRIPE_API_KEY", "sk_test_123"), \
            patch("stripe.PaymentIntent.create", side_effect=error):
        resp = await client.post("/api/create-payment-intent", json={"amount": 1})

    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Error creating payment intent:")
    assert "Amount too small" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_payment_intent_rejects_bad_amount(client):
    resp = await client.post("/api/create-payment-intent", json={"amount": -5})
    assert resp.status_code == 400
