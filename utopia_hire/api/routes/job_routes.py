"""
Job Routes

POST   /jobs           - Create job posting (optionally for an owned organization)
GET    /jobs           - List jobs with filters
GET    /jobs/{job_id}  - Get job details (counts a view)
PATCH  /jobs/{job_id}  - Update job (poster only)
DELETE /jobs/{job_id}  - Delete job and its knowledge documents (poster only)
GET    /my-jobs        - Jobs posted by the current user
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, func, insert, select, update
from starlette.concurrency import run_in_threadpool

from utopia_hire.core.auth import get_current_user
from utopia_hire.db.postgres import execute_write, fetch_all, fetch_one
from utopia_hire.db.tables import job_offers, organizations
from utopia_hire.schemas.schemas import (
    JobCreate, JobCreatedResponse, JobListResponse, JobResponse, JobUpdate, MessageResponse
)
from utopia_hire.services.mongo_service import DocumentStore, get_document_store
from utopia_hire.services.webhook_client import WebhookClient, get_webhook_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Jobs"])

# Organization column -> job column used when the job body leaves it empty
ORGANIZATION_COMPANY_FIELDS = {
    "name": "company_name",
    "logo_url": "company_logo",
    "website": "company_website",
    "description": "company_description",
}


def get_job_or_404(job_id: int) -> dict:
    job = fetch_one(select(job_offers).where(job_offers.c.id == job_id))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("/jobs", response_model=JobCreatedResponse, status_code=201)
async def create_job(
    job: JobCreate,
    user: dict = Depends(get_current_user),
    webhooks: WebhookClient = Depends(get_webhook_client)
):
    """
    Create a new job posting.

    When organization_id is given the caller must own that organization;
    its name/logo/website/description fill any missing company fields.
    """
    values = job.model_dump()

    if job.organization_id:
        org = fetch_one(select(organizations).where(organizations.c.id == job.organization_id))
        if not org:
            raise HTTPException(status_code=404, detail="Organization not found")
        if org["owner_id"] != user["user_id"]:
            raise HTTPException(
                status_code=403,
                detail="You do not have permission to post jobs for this organization"
            )
        for org_field, job_field in ORGANIZATION_COMPANY_FIELDS.items():
            if not values.get(job_field):
                values[job_field] = org[org_field]

    if values["status"] == "active":
        values["published_at"] = func.now()

    created = execute_write(
        insert(job_offers).values(**values, posted_by=user["user_id"]).returning(job_offers)
    )

    # n8n ingests the posting into the knowledge base (best-effort)
    await run_in_threadpool(webhooks.notify_job_created, created["id"])

    return JobCreatedResponse(message="Job offer created successfully", job=created)


@router.get("/jobs", response_model=JobListResponse)
async def list_jobs(
    status: str = Query("active"),
    employment_type: Optional[str] = Query(None),
    is_remote: Optional[bool] = Query(None),
    location: Optional[str] = Query(None, description="Case-insensitive substring"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0)
):
    """List job postings with filters and pagination."""
    query = select(job_offers).where(job_offers.c.status == status)

    if employment_type:
        query = query.where(job_offers.c.employment_type == employment_type)
    if is_remote:
        query = query.where(job_offers.c.is_remote.is_(True))
    if location:
        query = query.where(job_offers.c.location.ilike(f"%{location}%"))

    query = (
        query.order_by(job_offers.c.published_at.desc().nullslast(), job_offers.c.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return JobListResponse(jobs=fetch_all(query))


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job(job_id: int, user: dict = Depends(get_current_user)):
    """Get details of a specific job."""
    job = get_job_or_404(job_id)

    # Keep updated_at: a view is not an edit
    execute_write(
        update(job_offers)
        .where(job_offers.c.id == job_id)
        .values(views_count=job_offers.c.views_count + 1, updated_at=job_offers.c.updated_at)
    )
    return job


@router.patch("/jobs/{job_id}", response_model=JobResponse)
async def update_job(job_id: int, data: JobUpdate, user: dict = Depends(get_current_user)):
    job = get_job_or_404(job_id)
    if job["posted_by"] != user["user_id"]:
        raise HTTPException(status_code=403, detail="You do not have permission to update this job")

    values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    if not values:
        raise HTTPException(status_code=400, detail="No valid fields to update")

    if values.get("status") == "active" and not job["published_at"]:
        values["published_at"] = func.now()

    return execute_write(
        update(job_offers)
        .where(job_offers.c.id == job_id)
        .values(**values, updated_at=func.now())
        .returning(job_offers)
    )


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: int,
    user: dict = Depends(get_current_user),
    documents: DocumentStore = Depends(get_document_store)
):
    owned = fetch_one(
        select(job_offers.c.id).where(job_offers.c.id == job_id, job_offers.c.posted_by == user["user_id"])
    )
    if not owned:
        raise HTTPException(status_code=404, detail="Job not found")

    try:
        removed = documents.job_documents.delete_for_job(job_id)
        logger.info("Deleted %d knowledge documents for job %s", removed, job_id)
    except Exception as e:
        logger.error("Error deleting job documents for job %s: %s", job_id, e)

    deleted = execute_write(
        delete(job_offers).where(job_offers.c.id == job_id, job_offers.c.posted_by == user["user_id"])
    )
    if not deleted:
        raise HTTPException(status_code=404, detail="Job not found")
    return MessageResponse(message="Job deleted successfully")


@router.get("/my-jobs", response_model=List[JobResponse])
async def list_my_jobs(
    status: Optional[str] = Query(None, description="Job status, or 'all'"),
    user: dict = Depends(get_current_user)
):
    query = select(job_offers).where(job_offers.c.posted_by == user["user_id"])
    if status and status != "all":
        query = query.where(job_offers.c.status == status)
    return fetch_all(query.order_by(job_offers.c.created_at.desc(), job_offers.c.id.desc()))
