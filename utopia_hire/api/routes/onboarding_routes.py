"""
Onboarding Routes

POST /onboarding/mark-complete - Skip the wizard (first_login = false)
POST /onboarding/complete      - Finish the wizard and generate a resume
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, update
from starlette.concurrency import run_in_threadpool

from utopia_hire.core.auth import get_current_user
from utopia_hire.db.postgres import execute_write
from utopia_hire.db.tables import profiles
from utopia_hire.schemas.schemas import CompleteOnboardingRequest, MessageResponse
from utopia_hire.services.webhook_client import WebhookClient, get_webhook_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


def _set_first_login_done(user_id: int) -> None:
    execute_write(
        update(profiles)
        .where(profiles.c.user_id == user_id)
        .values(first_login=False, updated_at=func.now())
    )


def resume_fields(webhook_data) -> dict:
    """Profile columns to update from a create-resume webhook answer."""
    if not isinstance(webhook_data, dict):
        return {}
    values = {}
    if webhook_data.get("resume_url"):
        values["resume_url"] = webhook_data["resume_url"]
    if webhook_data.get("latex_code"):
        values["resume_latex"] = webhook_data["latex_code"]
        values["is_resume_latex"] = True
    return values


@router.post("/mark-complete", response_model=MessageResponse)
async def mark_onboarding_complete(user: dict = Depends(get_current_user)):
    _set_first_login_done(user["user_id"])
    return MessageResponse(message="Onboarding marked as complete")


@router.post("/complete")
async def complete_onboarding(
    request: Optional[CompleteOnboardingRequest] = None,
    user: dict = Depends(get_current_user),
    webhooks: WebhookClient = Depends(get_webhook_client)
):
    """
    Mark onboarding done, then wait for the create-resume workflow.
    The generated resume URL / LaTeX source are saved on the profile when returned.
    """
    user_id = user["user_id"]
    _set_first_login_done(user_id)

    try:
        data = await run_in_threadpool(webhooks.create_resume, user_id)
    except Exception as e:
        logger.error("Create-resume webhook failed for user %s (has_resume=%s): %s", user_id, bool(request and request.has_resume), e)
        raise HTTPException(status_code=500, detail="Failed to generate resume. Please try again.")

    values = resume_fields(data)
    if values:
        try:
            execute_write(update(profiles).where(profiles.c.user_id == user_id).values(**values))
        except Exception as e:
            logger.error("Failed to update profile %s with resume data: %s", user_id, e)

    return {"success": True, "data": data}
