"""
Profile Service - read helpers shared by profile, application and AI routes.

Section reads for one user are independent, so they are issued together
with fetch_all_concurrently() and joined before the response is built.
"""

from typing import List, Optional

from sqlalchemy import func, select

from utopia_hire.db.postgres import fetch_all_concurrently, fetch_one
from utopia_hire.db.tables import (
    certifications, education, experiences, job_applications, languages,
    profiles, projects, skills, values_and_preferences
)

# Columns exposed about an applicant to employers
APPLICANT_COLUMNS = [
    profiles.c.full_name, profiles.c.email, profiles.c.phone, profiles.c.location,
    profiles.c.profile_picture, profiles.c.headline, profiles.c.bio,
    profiles.c.work_preference, profiles.c.resume_url,
]


def get_profile(user_id: int) -> Optional[dict]:
    return fetch_one(select(profiles).where(profiles.c.user_id == user_id))


def _first(rows: List[dict]) -> Optional[dict]:
    return rows[0] if rows else None


async def load_full_profile(user_id: int) -> dict:
    """Profile row plus every resume section and the preferences row."""
    (profile, experience_rows, education_rows, skill_rows, project_rows,
     certification_rows, language_rows, preference_rows) = await fetch_all_concurrently(
        select(profiles).where(profiles.c.user_id == user_id),
        select(experiences).where(experiences.c.user_id == user_id).order_by(experiences.c.start_date.desc()),
        select(education).where(education.c.user_id == user_id).order_by(education.c.start_year.desc()),
        select(skills).where(skills.c.user_id == user_id).order_by(skills.c.id),
        select(projects).where(projects.c.user_id == user_id).order_by(projects.c.id),
        select(certifications).where(certifications.c.user_id == user_id).order_by(certifications.c.year.desc()),
        select(languages).where(languages.c.user_id == user_id).order_by(languages.c.id),
        select(values_and_preferences).where(values_and_preferences.c.user_id == user_id),
    )
    return {
        "profile": _first(profile),
        "experiences": experience_rows,
        "education": education_rows,
        "skills": skill_rows,
        "projects": project_rows,
        "certifications": certification_rows,
        "languages": language_rows,
        "preferences": _first(preference_rows),
    }


async def load_feedback_context(user_id: int) -> dict:
    """Everything the profile feedback prompt needs, including the application count."""
    context = await load_full_profile(user_id)
    count = fetch_one(
        select(func.count().label("total"))
        .select_from(job_applications)
        .where(job_applications.c.user_id == user_id)
    )
    context["application_count"] = count["total"] if count else 0
    return context


async def load_candidate(user_id: int) -> dict:
    """Candidate view used by the AI analysis prompts."""
    profile, experience_rows, education_rows, skill_rows, project_rows, certification_rows = await fetch_all_concurrently(
        select(profiles.c.full_name, profiles.c.email, profiles.c.headline, profiles.c.location, profiles.c.bio)
        .where(profiles.c.user_id == user_id),
        select(experiences).where(experiences.c.user_id == user_id).order_by(experiences.c.start_date.desc()),
        select(education).where(education.c.user_id == user_id).order_by(education.c.start_year.desc()),
        select(skills.c.name).where(skills.c.user_id == user_id),
        select(projects.c.name, projects.c.description).where(projects.c.user_id == user_id),
        select(certifications.c.name, certifications.c.year)
        .where(certifications.c.user_id == user_id)
        .order_by(certifications.c.year.desc()),
    )
    return {
        "profile": _first(profile),
        "experiences": experience_rows,
        "education": education_rows,
        "skills": skill_rows,
        "projects": project_rows,
        "certifications": certification_rows,
    }


async def load_applicant_summary(user_id: int) -> dict:
    """Profile plus the latest 3 experiences, 2 education entries and 10 skills."""
    profile, experience_rows, education_rows, skill_rows = await fetch_all_concurrently(
        select(*APPLICANT_COLUMNS).where(profiles.c.user_id == user_id),
        select(experiences).where(experiences.c.user_id == user_id)
        .order_by(experiences.c.start_date.desc()).limit(3),
        select(education).where(education.c.user_id == user_id)
        .order_by(education.c.start_year.desc()).limit(2),
        select(skills).where(skills.c.user_id == user_id).limit(10),
    )
    return {
        "profiles": _first(profile),
        "experiences": experience_rows,
        "education": education_rows,
        "skills": skill_rows,
    }
