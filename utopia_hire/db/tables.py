"""
Relational schema - SQLAlchemy Core table definitions.

Tables:
- users, profiles: accounts and candidate basic info
- experiences, education, skills, projects, certifications, languages,
  values_and_preferences: resume sections (one user -> many rows)
- organizations: employer accounts
- job_offers: job postings (optionally owned by an organization)
- job_applications: candidate <-> job link with a status

List-valued columns (skills, benefits, ...) are stored as JSON so the same
schema runs on PostgreSQL and SQLite.
"""

from sqlalchemy import (
    JSON, Boolean, Column, Date, DateTime, Float, ForeignKey, Integer,
    MetaData, String, Table, Text, UniqueConstraint, func
)

metadata = MetaData()


def _user_fk() -> Column:
    return Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


def _created_at() -> Column:
    return Column("created_at", DateTime, server_default=func.now(), nullable=False)


def _updated_at() -> Column:
    return Column("updated_at", DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)


# ============================================================
# ACCOUNTS
# ============================================================

users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), unique=True, nullable=False, index=True),
    Column("password_hash", String(255), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    _created_at(),
)

profiles = Table(
    "profiles", metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("full_name", String(200)),
    Column("email", String(255)),
    Column("phone", String(50)),
    Column("location", String(200)),
    Column("title", String(200)),
    Column("headline", String(300)),
    Column("bio", Text),
    Column("work_preference", String(50)),
    Column("profile_picture", String(500)),
    Column("resume_url", String(500)),
    Column("resume_latex", Text),
    Column("is_resume_latex", Boolean, nullable=False, default=False),
    Column("first_login", Boolean, nullable=False, default=True),
    _created_at(),
    _updated_at(),
)


# ============================================================
# RESUME SECTIONS
# ============================================================

experiences = Table(
    "experiences", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _user_fk(),
    Column("title", String(200), nullable=False),
    Column("company", String(200), nullable=False),
    Column("location", String(200)),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date),
    Column("is_current", Boolean, nullable=False, default=False),
    Column("description", Text),
    Column("proof_link", String(500)),
    _created_at(),
)

education = Table(
    "education", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _user_fk(),
    Column("school", String(200), nullable=False),
    Column("degree", String(200), nullable=False),
    Column("field_of_study", String(200)),
    Column("start_year", Integer),
    Column("end_year", Integer),
    Column("description", Text),
    _created_at(),
)

skills = Table(
    "skills", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _user_fk(),
    Column("name", String(100), nullable=False),
    Column("category", String(100)),
    Column("proficiency", String(50)),
    _created_at(),
)

projects = Table(
    "projects", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _user_fk(),
    Column("name", String(200), nullable=False),
    Column("description", Text),
    Column("url", String(500)),
    Column("start_date", Date),
    Column("end_date", Date),
    _created_at(),
)

certifications = Table(
    "certifications", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _user_fk(),
    Column("name", String(200), nullable=False),
    Column("issuer", String(200)),
    Column("year", Integer),
    Column("expiry_date", Date),
    Column("url", String(500)),
    _created_at(),
)

languages = Table(
    "languages", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _user_fk(),
    Column("name", String(100), nullable=False),
    Column("proficiency", String(50)),
    _created_at(),
)

values_and_preferences = Table(
    "values_and_preferences", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("work_environment", String(100)),
    Column("company_size", String(50)),
    Column("industry_preferences", JSON, nullable=False, default=list),
    Column("role_preferences", JSON, nullable=False, default=list),
    Column("location_preferences", JSON, nullable=False, default=list),
    Column("remote_preference", String(50)),
    Column("salary_expectation", String(100)),
    Column("benefits_priorities", JSON, nullable=False, default=list),
    Column("core_values", JSON, nullable=False, default=list),
    Column("preferred_culture", Text),
    Column("open_to_relocation", Boolean, nullable=False, default=False),
    Column("career_goals", Text),
    _created_at(),
    _updated_at(),
)


# ============================================================
# EMPLOYERS & JOBS
# ============================================================

organizations = Table(
    "organizations", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String(200), nullable=False),
    Column("description", Text),
    Column("website", String(500)),
    Column("industry", String(100)),
    Column("size", String(50)),
    Column("founded_year", Integer),
    Column("contact_email", String(255)),
    Column("phone", String(50)),
    Column("address", String(300)),
    Column("city", String(100)),
    Column("country", String(100)),
    Column("logo_url", String(500)),
    Column("cover_image_url", String(500)),
    Column("linkedin_url", String(500)),
    Column("twitter_url", String(500)),
    Column("facebook_url", String(500)),
    Column("company_culture", JSON, nullable=False, default=list),
    Column("benefits", JSON, nullable=False, default=list),
    Column("is_active", Boolean, nullable=False, default=True),
    _created_at(),
    _updated_at(),
)

job_offers = Table(
    "job_offers", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("organization_id", Integer, ForeignKey("organizations.id", ondelete="CASCADE"), index=True),
    Column("posted_by", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),

    # Company info (copied from organization or given directly)
    Column("company_name", String(200)),
    Column("company_logo", String(500)),
    Column("company_website", String(500)),
    Column("company_description", Text),

    # Job details
    Column("title", String(200), nullable=False),
    Column("description", Text),
    Column("responsibilities", JSON, nullable=False, default=list),
    Column("employment_type", String(50)),
    Column("experience_level", String(50)),
    Column("location", String(200)),
    Column("is_remote", Boolean, nullable=False, default=False),
    Column("is_hybrid", Boolean, nullable=False, default=False),

    # Compensation
    Column("salary_min", Float),
    Column("salary_max", Float),
    Column("salary_currency", String(10), nullable=False, default="USD"),
    Column("salary_period", String(20)),

    # Requirements
    Column("required_skills", JSON, nullable=False, default=list),
    Column("preferred_skills", JSON, nullable=False, default=list),
    Column("required_experience_years", Integer),
    Column("education_requirements", JSON, nullable=False, default=list),
    Column("language_requirements", JSON),

    # Application details
    Column("application_deadline", DateTime),
    Column("positions_available", Integer, nullable=False, default=1),
    Column("application_url", String(500)),
    Column("contact_email", String(255)),

    # Additional information
    Column("benefits", JSON, nullable=False, default=list),
    Column("company_culture", JSON, nullable=False, default=list),
    Column("work_schedule", String(100)),
    Column("relocation_assistance", Boolean, nullable=False, default=False),
    Column("visa_sponsorship", Boolean, nullable=False, default=False),

    # Status & counters
    Column("status", String(20), nullable=False, default="draft", index=True),
    Column("published_at", DateTime),
    Column("views_count", Integer, nullable=False, default=0),
    Column("applications_count", Integer, nullable=False, default=0),
    _created_at(),
    _updated_at(),
)

job_applications = Table(
    "job_applications", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("job_id", Integer, ForeignKey("job_offers.id", ondelete="CASCADE"), nullable=False, index=True),
    _user_fk(),
    Column("cover_letter", Text),
    Column("resume_url", String(500)),
    Column("status", String(20), nullable=False, default="pending"),
    Column("match_score", Float),
    Column("applied_at", DateTime, server_default=func.now(), nullable=False),
    _updated_at(),
    UniqueConstraint("job_id", "user_id", name="uq_application_job_user"),
)


# Resume sections addressable through /profile/{section}
SECTION_TABLES = {
    "experiences": experiences,
    "education": education,
    "skills": skills,
    "projects": projects,
    "certifications": certifications,
    "languages": languages,
}
