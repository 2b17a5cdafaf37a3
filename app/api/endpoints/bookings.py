"""Consultation booking endpoints.

Bookings are not checked for overlapping slots; staff review the calendar
by hand.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.deps import get_current_user, get_storage
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingOut, BookingUpdate
from app.storage import NotFoundError, Storage, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=BookingOut, status_code=201)
async def create_booking(
    booking: BookingCreate,
    storage: Storage = Depends(get_storage),
):
    """Book a consultation (public booking form)."""
    try:
        db_booking = await storage.create_booking(booking)
    except StorageError as e:
        logger.error("Error creating booking: %s", e)
        raise HTTPException(status_code=400, detail="Failed to create booking")

    logger.info(
        "Created booking %s: %s at %s (%d min)",
        db_booking.id, db_booking.type, db_booking.scheduled_at, db_booking.duration,
    )
    return db_booking


@router.get("", response_model=List[BookingOut])
async def list_bookings(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """List bookings, latest scheduled first."""
    return await storage.get_bookings(limit=limit, offset=offset)


@router.get("/mine", response_model=List[BookingOut])
async def list_my_bookings(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Bookings linked to the authenticated user."""
    return await storage.get_bookings_by_user(current_user.id)


@router.put("/{booking_id}", response_model=BookingOut)
async def update_booking(
    booking_id: str,
    updates: BookingUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Reschedule a booking or change its status."""
    try:
        booking = await storage.update_booking(booking_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    except StorageError as e:
        logger.error("Error updating booking %s: %s", booking_id, e)
        raise HTTPException(status_code=400, detail="Failed to update booking")

    logger.info("Updated booking %s status=%s", booking_id, booking.status)
    return booking
