"""Payment endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import get_current_user_optional, get_storage
from app.models.user import User
from app.schemas.payment import PaymentIntentCreate, PaymentIntentOut
from app.services.payments import (
    PaymentError,
    PaymentsNotConfigured,
    create_payment_intent,
    ensure_customer,
)
from app.storage import Storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create-payment-intent", response_model=PaymentIntentOut)
async def create_payment_intent_endpoint(
    payment: PaymentIntentCreate,
    storage: Storage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """Create a Stripe payment intent for an investment deposit.

    Returns the client secret the frontend uses to confirm the card payment.
    Logged-in callers are linked to a Stripe customer on first payment.
    """
    try:
        customer_id = await ensure_customer(current_user, storage) if current_user else None
        client_secret = await create_payment_intent(payment.amount, customer_id=customer_id)
    except PaymentsNotConfigured as e:
        logger.warning("Payment intent requested but Stripe is not configured")
        raise HTTPException(status_code=503, detail=str(e))
    except PaymentError as e:
        raise HTTPException(status_code=500, detail=f"Error creating payment intent: {e}")

    return {"client_secret": client_secret}
