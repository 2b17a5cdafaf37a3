"""Email campaign bookkeeping endpoints.

- GET/POST /api/email-sequences, PUT /api/email-sequences/{id}
- GET /api/email-templates/{sequence_id}, POST /api/email-templates, PUT /api/email-templates/{id}
- POST /api/email-sends, PUT /api/email-sends/{id} → open / click tracking

Nothing here delivers mail; these are records for the dashboard.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import get_current_user, get_storage
from app.schemas.email import (
    EmailSendCreate,
    EmailSendOut,
    EmailSendUpdate,
    EmailSequenceCreate,
    EmailSequenceOut,
    EmailSequenceUpdate,
    EmailTemplateCreate,
    EmailTemplateOut,
    EmailTemplateUpdate,
)
from app.storage import NotFoundError, Storage, StorageError

router = APIRouter(dependencies=[Depends(get_current_user)])
logger = logging.getLogger(__name__)


# ============================================================================
# SEQUENCES
# ============================================================================

@router.get("/email-sequences", response_model=List[EmailSequenceOut])
async def list_email_sequences(storage: Storage = Depends(get_storage)):
    return await storage.get_email_sequences()


@router.post("/email-sequences", response_model=EmailSequenceOut, status_code=201)
async def create_email_sequence(
    sequence: EmailSequenceCreate,
    storage: Storage = Depends(get_storage),
):
    try:
        db_sequence = await storage.create_email_sequence(sequence)
    except StorageError as e:
        logger.error("Error creating email sequence: %s", e)
        raise HTTPException(status_code=400, detail="Failed to create email sequence")

    logger.info("Created email sequence %s (%s)", db_sequence.id, db_sequence.name)
    return db_sequence


@router.put("/email-sequences/{sequence_id}", response_model=EmailSequenceOut)
async def update_email_sequence(
    sequence_id: str,
    updates: EmailSequenceUpdate,
    storage: Storage = Depends(get_storage),
):
    try:
        return await storage.update_email_sequence(sequence_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Email sequence not found")
    except StorageError as e:
        logger.error("Error updating email sequence %s: %s", sequence_id, e)
        raise HTTPException(status_code=400, detail="Failed to update email sequence")


# ============================================================================
# TEMPLATES
# ============================================================================

@router.get("/email-templates/{sequence_id}", response_model=List[EmailTemplateOut])
async def list_email_templates(sequence_id: str, storage: Storage = Depends(get_storage)):
    """Templates of one sequence in send order."""
    return await storage.get_email_templates_by_sequence(sequence_id)


@router.post("/email-templates", response_model=EmailTemplateOut, status_code=201)
async def create_email_template(
    template: EmailTemplateCreate,
    storage: Storage = Depends(get_storage),
):
    try:
        db_template = await storage.create_email_template(template)
    except StorageError as e:
        logger.error("Error creating email template: %s", e)
        raise HTTPException(status_code=400, detail="Failed to create email template")

    logger.info("Created email template %s (sequence=%s, order=%d)",
                db_template.id, db_template.sequence_id, db_template.order)
    return db_template


@router.put("/email-templates/{template_id}", response_model=EmailTemplateOut)
async def update_email_template(
    template_id: str,
    updates: EmailTemplateUpdate,
    storage: Storage = Depends(get_storage),
):
    try:
        return await storage.update_email_template(template_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Email template not found")
    except StorageError as e:
        logger.error("Error updating email template %s: %s", template_id, e)
        raise HTTPException(status_code=400, detail="Failed to update email template")


# ============================================================================
# SENDS
# ============================================================================

@router.post("/email-sends", response_model=EmailSendOut, status_code=201)
async def create_email_send(
    send: EmailSendCreate,
    storage: Storage = Depends(get_storage),
):
    """Record that a template went out to a lead and/or user."""
    try:
        return await storage.create_email_send(send.template_id, send.lead_id, send.user_id)
    except StorageError as e:
        logger.error("Error recording email send for template %s: %s", send.template_id, e)
        raise HTTPException(status_code=400, detail="Failed to record email send")


@router.put("/email-sends/{send_id}", response_model=EmailSendOut)
async def update_email_send(
    send_id: str,
    updates: EmailSendUpdate,
    storage: Storage = Depends(get_storage),
):
    """Record an open or click."""
    try:
        return await storage.update_email_send(send_id, updates)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Email send not found")
    except StorageError as e:
        logger.error("Error updating email send %s: %s", send_id, e)
        raise HTTPException(status_code=400, detail="Failed to update email send")
