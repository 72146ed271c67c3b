"""
Profile Routes

GET  /profile                       - Get own profile
PUT  /profile                       - Update basic info (upsert)
GET  /profile/full                  - Profile + all sections + preferences
GET  /profile/preferences           - Get values & preferences
PUT  /profile/preferences           - Upsert values & preferences
GET  /profile/{section}             - List a resume section
POST /profile/{section}             - Add a row to a section
PUT  /profile/{section}/{item_id}   - Replace a row
DELETE /profile/{section}/{item_id} - Delete a row
POST /profile-feedback              - AI analysis of the profile

Sections: experiences, education, skills, projects, certifications, languages
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy import delete, func, insert, select, update
from starlette.concurrency import run_in_threadpool

from utopia_hire.core.auth import get_current_user
from utopia_hire.db.postgres import execute_write, fetch_all, get_db_session
from utopia_hire.db.tables import SECTION_TABLES, profiles, values_and_preferences
from utopia_hire.schemas.schemas import (
    CertificationIn, EducationIn, ExperienceIn, LanguageIn, MessageResponse,
    PreferencesIn, PreferencesResponse, ProfileResponse, ProfileUpdate, ProjectIn, SkillIn
)
from utopia_hire.services.ai_service import AIService, get_ai_service
from utopia_hire.services.profile_service import get_profile, load_feedback_context, load_full_profile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Profile"])

SECTION_SCHEMAS = {
    "experiences": ExperienceIn,
    "education": EducationIn,
    "skills": SkillIn,
    "projects": ProjectIn,
    "certifications": CertificationIn,
    "languages": LanguageIn,
}


def _section_table(section: str):
    table = SECTION_TABLES.get(section)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Unknown profile section '{section}'")
    return table


def _section_order(table):
    if table.name == "experiences":
        return table.c.start_date.desc()
    if table.name == "education":
        return table.c.start_year.desc()
    return table.c.id


def _validate_section(section: str, payload: dict) -> dict:
    try:
        item = SECTION_SCHEMAS[section].model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", []))
        message = f"Invalid {field}: {first.get('msg')}" if field else first.get("msg")
        raise HTTPException(status_code=400, detail=message)
    return item.model_dump()


# ============================================================
# BASIC INFO
# ============================================================

@router.get("/profile", response_model=ProfileResponse)
async def read_profile(user: dict = Depends(get_current_user)):
    profile = get_profile(user["user_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, user: dict = Depends(get_current_user)):
    """Update basic info. Creates the profile row if it does not exist yet."""
    values = data.model_dump(exclude_unset=True)

    with get_db_session() as db:
        exists = db.execute(select(profiles.c.user_id).where(profiles.c.user_id == user["user_id"])).fetchone()
        if exists:
            db.execute(
                update(profiles)
                .where(profiles.c.user_id == user["user_id"])
                .values(**values, updated_at=func.now())
            )
        else:
            db.execute(insert(profiles).values(user_id=user["user_id"], **values))

    return get_profile(user["user_id"])


@router.get("/profile/full")
async def read_full_profile(user: dict = Depends(get_current_user)):
    """Profile and every section, read concurrently."""
    full = await load_full_profile(user["user_id"])
    if not full["profile"]:
        raise HTTPException(status_code=404, detail="Profile not found")
    return full


# ============================================================
# VALUES & PREFERENCES
# ============================================================

@router.get("/profile/preferences", response_model=Optional[PreferencesResponse])
async def read_preferences(user: dict = Depends(get_current_user)):
    rows = fetch_all(select(values_and_preferences).where(values_and_preferences.c.user_id == user["user_id"]))
    return rows[0] if rows else None


@router.put("/profile/preferences", response_model=PreferencesResponse)
async def upsert_preferences(data: PreferencesIn, user: dict = Depends(get_current_user)):
    """One preferences row per user: update it if present, insert otherwise."""
    values = data.model_dump()
    where = values_and_preferences.c.user_id == user["user_id"]

    with get_db_session() as db:
        exists = db.execute(select(values_and_preferences.c.id).where(where)).fetchone()
        if exists:
            db.execute(update(values_and_preferences).where(where).values(**values, updated_at=func.now()))
        else:
            db.execute(insert(values_and_preferences).values(user_id=user["user_id"], **values))

    return fetch_all(select(values_and_preferences).where(where))[0]


# ============================================================
# RESUME SECTIONS
# ============================================================

@router.get("/profile/{section}")
async def list_section(section: str, user: dict = Depends(get_current_user)):
    table = _section_table(section)
    return fetch_all(
        select(table).where(table.c.user_id == user["user_id"]).order_by(_section_order(table))
    )


@router.post("/profile/{section}", status_code=201)
async def add_section_item(section: str, payload: dict = Body(...), user: dict = Depends(get_current_user)):
    table = _section_table(section)
    values = _validate_section(section, payload)
    return execute_write(insert(table).values(user_id=user["user_id"], **values).returning(table))


@router.put("/profile/{section}/{item_id}")
async def update_section_item(
    section: str,
    item_id: int,
    payload: dict = Body(...),
    user: dict = Depends(get_current_user)
):
    table = _section_table(section)
    values = _validate_section(section, payload)
    row = execute_write(
        update(table)
        .where(table.c.id == item_id, table.c.user_id == user["user_id"])
        .values(**values)
        .returning(table)
    )
    if not row:
        raise HTTPException(status_code=404, detail="Item not found")
    return row


@router.delete("/profile/{section}/{item_id}", response_model=MessageResponse)
async def delete_section_item(section: str, item_id: int, user: dict = Depends(get_current_user)):
    table = _section_table(section)
    deleted = execute_write(delete(table).where(table.c.id == item_id, table.c.user_id == user["user_id"]))
    if not deleted:
        raise HTTPException(status_code=404, detail="Item not found")
    return MessageResponse(message="Item deleted successfully")


# ============================================================
# AI PROFILE FEEDBACK
# ============================================================

@router.post("/profile-feedback")
async def profile_feedback(
    user: dict = Depends(get_current_user),
    ai: AIService = Depends(get_ai_service)
):
    """Short markdown analysis of the caller's profile."""
    context = await load_feedback_context(user["user_id"])
    try:
        feedback = await run_in_threadpool(ai.profile_feedback, context)
    except Exception as e:
        logger.error("Error generating profile feedback for user %s: %s", user["user_id"], e)
        raise HTTPException(status_code=500, detail="Failed to generate feedback")
    return {"feedback": feedback}
