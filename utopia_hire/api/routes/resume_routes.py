"""
Resume & Matching Routes (n8n workflows)

POST /compile-latex    - Compile edited LaTeX into a PDF resume
POST /generate-resume  - Regenerate the resume from the profile
GET  /summary          - AI summary of the profile
POST /match-jobs       - Semantic job search
"""

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from utopia_hire.core.auth import get_current_user
from utopia_hire.core.errors import APIError, WebhookError
from utopia_hire.schemas.schemas import CompileLatexRequest, MatchJobsRequest
from utopia_hire.services.webhook_client import WebhookClient, get_webhook_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Resume & Matching"])


def _require_api_key(webhooks: WebhookClient) -> None:
    if not webhooks.is_configured:
        raise HTTPException(status_code=500, detail="N8N API key not configured")


@router.post("/compile-latex")
async def compile_latex(
    request: CompileLatexRequest,
    user: dict = Depends(get_current_user),
    webhooks: WebhookClient = Depends(get_webhook_client)
):
    if not request.latex_code:
        raise HTTPException(status_code=400, detail="Missing required fields")

    try:
        data = await run_in_threadpool(webhooks.compile_latex, user["user_id"], request.latex_code)
    except (WebhookError, httpx.HTTPError) as e:
        logger.error("LaTeX compilation failed for user %s: %s", user["user_id"], e)
        raise HTTPException(status_code=500, detail="Failed to compile LaTeX. Please check your code.")

    data = data if isinstance(data, dict) else {}
    return {"success": True, "resume_url": data.get("resume_url") or data.get("pdf_url")}


@router.post("/generate-resume")
async def generate_resume(
    user: dict = Depends(get_current_user),
    webhooks: WebhookClient = Depends(get_webhook_client)
):
    try:
        data = await run_in_threadpool(webhooks.create_resume, user["user_id"])
    except (WebhookError, httpx.HTTPError) as e:
        logger.error("Resume generation failed for user %s: %s", user["user_id"], e)
        raise HTTPException(status_code=500, detail="Failed to generate resume. Please try again.")

    return {"success": True, "data": data}


@router.get("/summary")
async def get_summary(
    user: dict = Depends(get_current_user),
    webhooks: WebhookClient = Depends(get_webhook_client)
):
    _require_api_key(webhooks)
    try:
        return await run_in_threadpool(webhooks.summarize, user["user_id"])
    except WebhookError as e:
        raise APIError(e.status_code, "Failed to get summary from n8n", details=e.body)


@router.post("/match-jobs")
async def match_jobs(
    request: MatchJobsRequest,
    user: dict = Depends(get_current_user),
    webhooks: WebhookClient = Depends(get_webhook_client)
):
    """Forwards page, page_size, query and every filter that is set as query parameters."""
    _require_api_key(webhooks)
    if not request.query:
        raise HTTPException(status_code=400, detail="Query parameter is required")

    params = request.model_dump(exclude_none=True)
    try:
        return await run_in_threadpool(webhooks.match_jobs, params)
    except WebhookError as e:
        raise APIError(e.status_code, "Failed to get jobs from n8n", details=e.body)
