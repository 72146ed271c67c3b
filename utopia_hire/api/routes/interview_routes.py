"""
AI Mock Interview Routes

GET  /interview?job_offers_id=           - Generate a mock interview for a job
POST /evaluate-interview?job_offers_id=  - Evaluate the candidate's answers
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from utopia_hire.api.routes.job_routes import get_job_or_404
from utopia_hire.core.auth import get_current_user
from utopia_hire.core.errors import APIError
from utopia_hire.schemas.schemas import EvaluationRequest, InterviewQuestionResponse
from utopia_hire.services.ai_service import AIService, get_ai_service
from utopia_hire.services.mongo_service import DocumentStore, get_document_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["AI Interview"])


def _require_job_id(job_offers_id: Optional[int]) -> int:
    if not job_offers_id:
        raise HTTPException(status_code=400, detail="Missing job_offers_id parameter")
    return job_offers_id


@router.get("/interview")
async def generate_interview(
    job_offers_id: Optional[int] = Query(None),
    user: dict = Depends(get_current_user),
    ai: AIService = Depends(get_ai_service),
    documents: DocumentStore = Depends(get_document_store)
):
    """18-25 questions in 4-6 sections, tailored to the job."""
    job = get_job_or_404(_require_job_id(job_offers_id))

    try:
        interview = await run_in_threadpool(ai.generate_interview, job)
    except Exception as e:
        logger.error("Error generating interview for job %s: %s", job["id"], e)
        raise APIError(500, "Failed to generate interview", details=str(e))

    try:
        documents.interviews.insert(user["user_id"], job["id"], interview)
    except Exception as e:
        logger.error("Failed to store interview for job %s: %s", job["id"], e)

    return {"output": {"interview": interview}}


@router.post("/evaluate-interview")
async def evaluate_interview(
    body: EvaluationRequest,
    job_offers_id: Optional[int] = Query(None),
    user: dict = Depends(get_current_user),
    ai: AIService = Depends(get_ai_service),
    documents: DocumentStore = Depends(get_document_store)
):
    """
    Feedback for each answer. When the model output cannot be parsed every
    response gets placeholder feedback instead of an error.
    """
    _require_job_id(job_offers_id)
    if not isinstance(body.responses, list):
        raise HTTPException(status_code=400, detail="Invalid request body")
    try:
        responses = [InterviewQuestionResponse.model_validate(r).model_dump() for r in body.responses]
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid request body")

    job = get_job_or_404(job_offers_id)

    try:
        evaluations = await run_in_threadpool(ai.evaluate_interview, job, body.job_title, responses)
    except Exception as e:
        logger.error("Error evaluating interview for job %s: %s", job["id"], e)
        raise APIError(500, "Failed to evaluate interview", details=str(e))

    try:
        documents.evaluations.insert(user["user_id"], job["id"], responses, evaluations)
    except Exception as e:
        logger.error("Failed to store interview evaluation for job %s: %s", job["id"], e)

    # Shape expected by the interview page
    return [{"output": evaluations}]
