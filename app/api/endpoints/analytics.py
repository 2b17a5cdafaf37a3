"""Analytics endpoints for the admin dashboard.

- GET /api/analytics/leads → lead counts per funnel status
- GET /api/analytics/investments → holdings totals and investor count
- GET /api/analytics/emails → send / open / click totals and rates
"""

import logging

from fastapi import APIRouter, Depends

from app.core.deps import get_current_user, get_storage
from app.schemas.analytics import EmailStats, InvestmentStats, LeadStats
from app.storage import Storage

router = APIRouter(dependencies=[Depends(get_current_user)])
logger = logging.getLogger(__name__)


@router.get("/leads", response_model=LeadStats)
async def lead_stats(storage: Storage = Depends(get_storage)):
    return await storage.get_lead_stats()


@router.get("/investments", response_model=InvestmentStats)
async def investment_stats(storage: Storage = Depends(get_storage)):
    return await storage.get_investment_stats()


@router.get("/emails", response_model=EmailStats)
async def email_stats(storage: Storage = Depends(get_storage)):
    return await storage.get_email_stats()
