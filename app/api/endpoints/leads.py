"""Leads endpoints for lead capture and CRM.

- POST /api/leads → Public landing-page capture (score computed server-side)
- GET /api/leads → Page of leads, newest first
- GET /api/leads/{id} → One lead
- PUT /api/leads/{id} → Partial update (status, score, notes, ...)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, HTTPException

from app.core.deps import get_current_user, get_storage
from app.models.lead import LeadStatus
from app.models.user import User
from app.schemas.lead import LeadCapture, LeadCreate, LeadOut, LeadUpdate
from app.services.scoring import score_lead
from app.storage import NotFoundError, Storage, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=LeadOut, status_code=201)
async def create_lead(
    lead: LeadCapture,
    storage: Storage = Depends(get_storage),
):
    """Capture a new lead from the public form."""
    score = score_lead(lead.investment_budget)
    try:
        db_lead = await storage.create_lead(
            LeadCreate(**lead.model_dump(), status=LeadStatus.NEW, score=score)
        )
    except StorageError as e:
        logger.error("Error creating lead for %s: %s", lead.email, e)
        raise HTTPException(status_code=400, detail="Failed to create lead")

    logger.info(
        "Created lead %s: %s (%s) budget=%s score=%d",
        db_lead.id,
        lead.first_name,
        lead.email,
        lead.investment_budget or "unspecified",
        score,
    )
    return db_lead


@router.get("", response_model=List[LeadOut])
async def list_leads(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """List leads, newest first. Filtering happens client-side."""
    return await storage.get_leads(limit=limit, offset=offset)


@router.get("/{lead_id}", response_model=LeadOut)
async def get_lead(
    lead_id: str,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    lead = await storage.get_lead(lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.put("/{lead_id}", response_model=LeadOut)
async def update_lead(
    lead_id: str,
    updates: LeadUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Update a lead. Any status may move to any other status."""
    try:
        lead = await storage.update_lead(lead_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Lead not found")
    except StorageError as e:
        logger.error("Error updating lead %s: %s", lead_id, e)
        raise HTTPException(status_code=400, detail="Failed to update lead")

    logger.info(
        "Updated lead %s by %s: %s",
        lead_id,
        current_user.username,
        ", ".join(sorted(updates.model_fields_set)) or "no fields",
    )
    return lead
