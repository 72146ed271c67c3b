"""
Organization Routes

GET    /organizations           - List own organizations
POST   /organizations           - Create organization
GET    /organizations/{id}      - Get organization (owner only)
PATCH  /organizations/{id}      - Update organization (owner only)
DELETE /organizations/{id}      - Delete organization and its jobs (owner only)
GET    /organizations/{id}/jobs - Jobs of the organization (owner only)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, func, insert, select, update

from utopia_hire.core.auth import get_current_user
from utopia_hire.db.postgres import execute_write, fetch_all, fetch_one
from utopia_hire.db.tables import job_offers, organizations
from utopia_hire.schemas.schemas import (
    JobResponse, MessageResponse, OrganizationCreate, OrganizationResponse, OrganizationUpdate
)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


def get_owned_organization(org_id: int, user_id: int) -> dict:
    """Fetch an organization; 404 if missing, 403 if the caller does not own it."""
    org = fetch_one(select(organizations).where(organizations.c.id == org_id))
    if not org:
        raise HTTPException(status_code=404, detail="Organization not found")
    if org["owner_id"] != user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    return org


@router.get("", response_model=List[OrganizationResponse])
async def list_organizations(user: dict = Depends(get_current_user)):
    return fetch_all(
        select(organizations)
        .where(organizations.c.owner_id == user["user_id"])
        .order_by(organizations.c.created_at.desc(), organizations.c.id.desc())
    )


@router.post("", response_model=OrganizationResponse, status_code=201)
async def create_organization(data: OrganizationCreate, user: dict = Depends(get_current_user)):
    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Organization name is required")

    values = data.model_dump()
    values["name"] = data.name.strip()
    return execute_write(
        insert(organizations)
        .values(**values, owner_id=user["user_id"], is_active=True)
        .returning(organizations)
    )


@router.get("/{org_id}", response_model=OrganizationResponse)
async def get_organization(org_id: int, user: dict = Depends(get_current_user)):
    return get_owned_organization(org_id, user["user_id"])


@router.patch("/{org_id}", response_model=OrganizationResponse)
async def update_organization(org_id: int, data: OrganizationUpdate, user: dict = Depends(get_current_user)):
    """Only fields present in the body are updated."""
    org = get_owned_organization(org_id, user["user_id"])

    values = data.model_dump(exclude_unset=True)
    for required_field in ("name", "is_active"):
        if values.get(required_field, False) is None:
            del values[required_field]
    if "name" in values:
        if not values["name"].strip():
            raise HTTPException(status_code=400, detail="Organization name is required")
        values["name"] = values["name"].strip()
    for list_field in ("company_culture", "benefits"):
        if list_field in values and values[list_field] is None:
            values[list_field] = []
    if not values:
        return org

    return execute_write(
        update(organizations)
        .where(organizations.c.id == org_id)
        .values(**values, updated_at=func.now())
        .returning(organizations)
    )


@router.delete("/{org_id}", response_model=MessageResponse)
async def delete_organization(org_id: int, user: dict = Depends(get_current_user)):
    """Deleting an organization cascades to its job offers."""
    get_owned_organization(org_id, user["user_id"])
    execute_write(delete(organizations).where(organizations.c.id == org_id))
    return MessageResponse(message="Organization deleted successfully")


@router.get("/{org_id}/jobs", response_model=List[JobResponse])
async def list_organization_jobs(
    org_id: int,
    status: Optional[str] = Query(None, description="Job status, or 'all'"),
    user: dict = Depends(get_current_user)
):
    get_owned_organization(org_id, user["user_id"])

    query = select(job_offers).where(job_offers.c.organization_id == org_id)
    if status and status != "all":
        query = query.where(job_offers.c.status == status)
    return fetch_all(query.order_by(job_offers.c.created_at.desc(), job_offers.c.id.desc()))
