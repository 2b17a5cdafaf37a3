"""Stripe payment bridge for investment deposits."""

import logging
import stripe
from typing import Optional

from app.core.config import settings
from app.models.user import User
from app.storage import Storage

logger = logging.getLogger(__name__)


class PaymentsNotConfigured(Exception):
    """Raised when no Stripe secret key is configured."""


class PaymentError(Exception):
    """Raised when Stripe rejects a request; carries the processor's message."""


def _configure_stripe() -> None:
    if not settings.STRIPE_API_KEY:
        raise PaymentsNotConfigured("Payment processing is not configured. Please contact support.")
    stripe.api_key = settings.STRIPE_API_KEY


def to_minor_units(amount: float) -> int:
    """Convert rand to cents."""
    return int(round(amount * 100))


async def ensure_customer(user: User, storage: Storage) -> str:
    """Return the user's Stripe customer id, creating and linking one if needed."""
    if user.stripe_customer_id:
        return user.stripe_customer_id

    _configure_stripe()
    try:
        customer = stripe.Customer.create(
            email=user.email,
            name=" ".join(filter(None, [user.first_name, user.last_name])) or user.username,
            metadata={"user_id": str(user.id)},
        )
    except stripe.StripeError as e:
        logger.error("Stripe error creating customer for user %s: %s", user.id, e)
        raise PaymentError(getattr(e, "user_message", None) or str(e)) from e

    await storage.update_user_stripe_info(user.id, customer.id)
    logger.info("Created Stripe customer %s for user %s", customer.id, user.id)
    return customer.id


async def create_payment_intent(amount: float, customer_id: Optional[str] = None) -> str:
    """Create a payment intent and return its client secret.

    Raises PaymentsNotConfigured when Stripe has no secret key and
    PaymentError when Stripe rejects the request. No retries.
    """
    _configure_stripe()

    params = {
        "amount": to_minor_units(amount),
        "currency": settings.PAYMENT_CURRENCY,
        "metadata": {"type": "investment"},
    }
    if customer_id:
        params["customer"] = customer_id

    try:
        intent = stripe.PaymentIntent.create(**params)
    except stripe.StripeError as e:
        logger.error("Stripe error creating payment intent: %s", e)
        raise PaymentError(getattr(e, "user_message", None) or str(e)) from e

    logger.info("Created payment intent %s for %d %s", intent.id, params["amount"], params["currency"])
    return intent.client_secret
