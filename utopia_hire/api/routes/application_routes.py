"""
Application Routes

POST  /applications                       - Apply to a job
GET   /applications                       - Current user's applications
GET   /jobs/{job_id}/applications         - Applicants of a job (poster only)
PATCH /applications/{application_id}      - Change application status (poster only)
POST  /applications/{application_id}/analyze - AI analysis of one candidate
POST  /jobs/{job_id}/analyze-candidates   - AI insights for the whole candidate pool
"""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool

from utopia_hire.core.auth import get_current_user
from utopia_hire.db.postgres import execute_write, fetch_all, fetch_one, get_db_session
from utopia_hire.db.tables import job_applications, job_offers, profiles
from utopia_hire.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, ApplicationStatus, ApplicationStatusUpdate,
    ApplicationSubmitResponse
)
from utopia_hire.services.ai_service import AIService, get_ai_service
from utopia_hire.services.mongo_service import DocumentStore, get_document_store
from utopia_hire.services.profile_service import load_applicant_summary, load_candidate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Applications"])

VALID_STATUSES = {s.value for s in ApplicationStatus}

JOB_SUMMARY_COLUMNS = [
    job_offers.c.title, job_offers.c.company_name, job_offers.c.company_logo,
    job_offers.c.location, job_offers.c.employment_type, job_offers.c.status,
]


def get_owned_job(job_id: int, user_id: int) -> dict:
    job = fetch_one(select(job_offers).where(job_offers.c.id == job_id))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job["posted_by"] != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    return job


def get_application_for_poster(application_id: int, user_id: int) -> dict:
    """Application + its job; 404 if missing, 403 unless the caller posted the job."""
    application = fetch_one(select(job_applications).where(job_applications.c.id == application_id))
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    job = fetch_one(select(job_offers).where(job_offers.c.id == application["job_id"]))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job["posted_by"] != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    application["job"] = job
    return application


@router.post("/applications", response_model=ApplicationSubmitResponse)
async def apply_to_job(data: ApplicationCreate, user: dict = Depends(get_current_user)):
    if not data.job_id or not data.email or not data.phone:
        raise HTTPException(status_code=400, detail="Missing required fields")

    user_id = user["user_id"]
    if not fetch_one(select(job_offers.c.id).where(job_offers.c.id == data.job_id)):
        raise HTTPException(status_code=404, detail="Job not found")

    already_applied = HTTPException(status_code=400, detail="You have already applied to this job")
    if fetch_one(
        select(job_applications.c.id)
        .where(job_applications.c.job_id == data.job_id, job_applications.c.user_id == user_id)
    ):
        raise already_applied

    try:
        with get_db_session() as db:
            row = db.execute(
                insert(job_applications)
                .values(
                    job_id=data.job_id,
                    user_id=user_id,
                    cover_letter=data.cover_letter,
                    resume_url=data.resume_url,
                    status="pending",
                )
                .returning(job_applications)
            ).fetchone()
            application = dict(row._mapping)

            # Keep the latest contact info on the profile
            db.execute(
                update(profiles)
                .where(profiles.c.user_id == user_id)
                .values(email=data.email, phone=data.phone, updated_at=func.now())
            )
            db.execute(
                update(job_offers)
                .where(job_offers.c.id == data.job_id)
                .values(applications_count=job_offers.c.applications_count + 1)
            )
    except IntegrityError:
        raise already_applied

    return ApplicationSubmitResponse(application=application)


@router.get("/applications")
async def list_my_applications(user: dict = Depends(get_current_user)):
    """Applications of the current user, each with a summary of its job."""
    rows = fetch_all(
        select(job_applications, *[c.label(f"job_{c.name}") for c in JOB_SUMMARY_COLUMNS])
        .join(job_offers, job_offers.c.id == job_applications.c.job_id)
        .where(job_applications.c.user_id == user["user_id"])
        .order_by(job_applications.c.applied_at.desc(), job_applications.c.id.desc())
    )

    applications = []
    for row in rows:
        job = {c.name: row.pop(f"job_{c.name}") for c in JOB_SUMMARY_COLUMNS}
        job["id"] = row["job_id"]
        applications.append({**row, "job": job})
    return applications


@router.get("/jobs/{job_id}/applications")
async def list_job_applications(job_id: int, user: dict = Depends(get_current_user)):
    """Applicants with profile, latest experiences, education and skills."""
    get_owned_job(job_id, user["user_id"])

    applications = fetch_all(
        select(job_applications)
        .where(job_applications.c.job_id == job_id)
        .order_by(job_applications.c.applied_at.desc(), job_applications.c.id.desc())
    )
    details = await asyncio.gather(*(load_applicant_summary(app["user_id"]) for app in applications))
    return [{**app, **detail} for app, detail in zip(applications, details)]


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    user: dict = Depends(get_current_user)
):
    if not data.status:
        raise HTTPException(status_code=400, detail="Status is required")
    if data.status not in VALID_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")

    get_application_for_poster(application_id, user["user_id"])

    return execute_write(
        update(job_applications)
        .where(job_applications.c.id == application_id)
        .values(status=data.status, updated_at=func.now())
        .returning(job_applications)
    )


# ============================================================
# AI CANDIDATE ANALYSIS
# ============================================================

@router.post("/applications/{application_id}/analyze")
async def analyze_application(
    application_id: int,
    user: dict = Depends(get_current_user),
    ai: AIService = Depends(get_ai_service),
    documents: DocumentStore = Depends(get_document_store)
):
    application = get_application_for_poster(application_id, user["user_id"])
    job = application["job"]

    candidate = await load_candidate(application["user_id"])
    try:
        analysis = await run_in_threadpool(ai.analyze_candidate, job, candidate)
    except Exception as e:
        logger.error("Error analyzing candidate for application %s: %s", application_id, e)
        raise HTTPException(status_code=500, detail="Failed to analyze candidate")

    try:
        documents.analyses.upsert(application_id, job["id"], analysis)
    except Exception as e:
        logger.error("Failed to store analysis for application %s: %s", application_id, e)

    profile = candidate["profile"] or {}
    return {
        **analysis,
        "candidateName": profile.get("full_name") or "Anonymous",
        "analyzedAt": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/jobs/{job_id}/analyze-candidates")
async def analyze_candidates(
    job_id: int,
    user: dict = Depends(get_current_user),
    ai: AIService = Depends(get_ai_service)
):
    """Short insights for every applicant, generated in batches."""
    job = get_owned_job(job_id, user["user_id"])

    applications = fetch_all(
        select(job_applications.c.id, job_applications.c.user_id)
        .where(job_applications.c.job_id == job_id)
        .order_by(job_applications.c.applied_at, job_applications.c.id)
    )
    if not applications:
        return {"poolOverview": "No applications received yet for this position.", "insights": []}

    candidates = await asyncio.gather(*(load_candidate(app["user_id"]) for app in applications))
    for app, candidate in zip(applications, candidates):
        candidate["applicationId"] = app["id"]

    insights = await run_in_threadpool(ai.analyze_candidate_pool, job, list(candidates))

    total = len(applications)
    return {
        "insights": insights,
        "poolOverview": (
            f"Analyzed {total} candidate{'s' if total > 1 else ''}. "
            "Review individual insights below for detailed analysis."
        ),
        "metadata": {
            "totalCandidates": total,
            "analyzedCandidates": len(insights),
            "isLimited": False,
        },
    }
