"""Admin-only maintenance endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import get_storage, require_admin
from app.models.user import User
from app.services.sample_data import create_sample_data
from app.storage import Storage, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create-sample-data")
async def create_sample_data_endpoint(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require_admin),
):
    """Fill the dashboard with demo leads, bookings and an email sequence."""
    try:
        created = await create_sample_data(storage)
    except StorageError as e:
        logger.error("Error creating sample data: %s", e)
        raise HTTPException(status_code=500, detail="Failed to create sample data")

    logger.info("Sample data created by %s", admin.username)
    return {"message": "Sample data created successfully", "created": created}
