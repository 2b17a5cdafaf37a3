"""Investor portal endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import get_current_user, get_storage, require_admin
from app.models.user import User
from app.schemas.investment import InvestmentCreate, InvestmentOut, InvestmentUpdate
from app.storage import NotFoundError, Storage, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=InvestmentOut, status_code=201)
async def create_investment(
    investment: InvestmentCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Record a holding for the authenticated user."""
    try:
        db_investment = await storage.create_investment(current_user.id, investment)
    except StorageError as e:
        logger.error("Error creating investment for user %s: %s", current_user.id, e)
        raise HTTPException(status_code=400, detail="Failed to create investment")

    logger.info(
        "Created investment %s for user %s: %s %.2f",
        db_investment.id, current_user.id, investment.fund_name, investment.amount,
    )
    return db_investment


@router.get("", response_model=List[InvestmentOut])
async def list_my_investments(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Portfolio of the authenticated user, most recent first."""
    return await storage.get_investments_by_user(current_user.id)


@router.put("/{investment_id}", response_model=InvestmentOut)
async def update_investment(
    investment_id: str,
    updates: InvestmentUpdate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require_admin),
):
    """Manual revaluation of a holding."""
    try:
        investment = await storage.update_investment(investment_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Investment not found")
    except StorageError as e:
        logger.error("Error updating investment %s: %s", investment_id, e)
        raise HTTPException(status_code=400, detail="Failed to update investment")

    logger.info("Investment %s updated by %s", investment_id, admin.username)
    return investment
