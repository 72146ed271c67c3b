"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from typing import Optional, List, Any
from datetime import date, datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class JobStatus(str, Enum):
    draft = "draft"
    active = "active"
    paused = "paused"
    closed = "closed"


class EmploymentType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    contract = "contract"
    freelance = "freelance"
    internship = "internship"


class ExperienceLevel(str, Enum):
    entry = "entry"
    junior = "junior"
    mid = "mid"
    senior = "senior"
    lead = "lead"
    executive = "executive"


class SalaryPeriod(str, Enum):
    hourly = "hourly"
    monthly = "monthly"
    yearly = "yearly"


class ApplicationStatus(str, Enum):
    pending = "pending"
    reviewing = "reviewing"
    interview = "interview"
    accepted = "accepted"
    rejected = "rejected"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = Field(None, max_length=200)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    first_login: bool

class UserResponse(BaseModel):
    user_id: int
    email: str
    is_active: bool
    created_at: datetime


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    title: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    work_preference: Optional[str] = None

class ProfileResponse(BaseModel):
    user_id: int
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    title: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    work_preference: Optional[str] = None
    profile_picture: Optional[str] = None
    resume_url: Optional[str] = None
    resume_latex: Optional[str] = None
    is_resume_latex: bool = False
    first_login: bool = True
    created_at: datetime
    updated_at: datetime


class ExperienceIn(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    proof_link: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.is_current:
            self.end_date = None
        elif self.end_date is None:
            raise ValueError("Provide an end date or mark the position as current")
        return self

class EducationIn(BaseModel):
    school: str = Field(..., min_length=1)
    degree: str = Field(..., min_length=1)
    field_of_study: Optional[str] = None
    start_year: Optional[int] = Field(None, ge=1900, le=2100)
    end_year: Optional[int] = Field(None, ge=1900, le=2100)
    description: Optional[str] = None

class SkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = None
    proficiency: Optional[str] = None

class ProjectIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    url: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

class CertificationIn(BaseModel):
    name: str = Field(..., min_length=1)
    issuer: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)
    expiry_date: Optional[date] = None
    url: Optional[str] = None

class LanguageIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    proficiency: Optional[str] = None


class PreferencesIn(BaseModel):
    work_environment: Optional[str] = None
    company_size: Optional[str] = None
    industry_preferences: List[str] = []
    role_preferences: List[str] = []
    location_preferences: List[str] = []
    remote_preference: Optional[str] = None
    salary_expectation: Optional[str] = None
    benefits_priorities: List[str] = []
    core_values: List[str] = []
    preferred_culture: Optional[str] = None
    open_to_relocation: bool = False
    career_goals: Optional[str] = None

class PreferencesResponse(PreferencesIn):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


# ============================================================
# ONBOARDING SCHEMAS
# ============================================================

class CompleteOnboardingRequest(BaseModel):
    has_resume: bool = False


# ============================================================
# ORGANIZATION SCHEMAS
# ============================================================

class OrganizationFields(BaseModel):
    description: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)
    contact_email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    logo_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    facebook_url: Optional[str] = None

class OrganizationCreate(OrganizationFields):
    name: Optional[str] = None
    company_culture: List[str] = []
    benefits: List[str] = []

class OrganizationUpdate(OrganizationFields):
    name: Optional[str] = Field(None, min_length=1)
    company_culture: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    is_active: Optional[bool] = None

class OrganizationResponse(OrganizationFields):
    id: int
    owner_id: int
    name: str
    company_culture: List[str] = []
    benefits: List[str] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    organization_id: Optional[int] = None

    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = None

    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    responsibilities: List[str] = []

    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    location: Optional[str] = None
    is_remote: bool = False
    is_hybrid: bool = False

    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    salary_currency: str = "USD"
    salary_period: Optional[SalaryPeriod] = None

    required_skills: List[str] = []
    preferred_skills: List[str] = []
    required_experience_years: Optional[int] = Field(None, ge=0)
    education_requirements: List[str] = []
    language_requirements: Optional[Any] = None

    application_deadline: Optional[datetime] = None
    positions_available: int = Field(1, ge=1)
    application_url: Optional[str] = None
    contact_email: Optional[str] = None

    benefits: List[str] = []
    company_culture: List[str] = []
    work_schedule: Optional[str] = None
    relocation_assistance: bool = False
    visa_sponsorship: bool = False

    status: JobStatus = JobStatus.draft

class JobUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: Optional[JobStatus] = None
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None

class JobResponse(BaseModel):
    id: int
    organization_id: Optional[int] = None
    posted_by: int
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    company_website: Optional[str] = None
    company_description: Optional[str] = None
    title: str
    description: Optional[str] = None
    responsibilities: List[str] = []
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    location: Optional[str] = None
    is_remote: bool
    is_hybrid: bool
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: str
    salary_period: Optional[str] = None
    required_skills: List[str] = []
    preferred_skills: List[str] = []
    required_experience_years: Optional[int] = None
    education_requirements: List[str] = []
    language_requirements: Optional[Any] = None
    application_deadline: Optional[datetime] = None
    positions_available: int
    application_url: Optional[str] = None
    contact_email: Optional[str] = None
    benefits: List[str] = []
    company_culture: List[str] = []
    work_schedule: Optional[str] = None
    relocation_assistance: bool
    visa_sponsorship: bool
    status: str
    published_at: Optional[datetime] = None
    views_count: int = 0
    applications_count: int = 0
    created_at: datetime
    updated_at: datetime

class JobCreatedResponse(BaseModel):
    message: str
    job: JobResponse

class JobListResponse(BaseModel):
    jobs: List[JobResponse]


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    job_id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: Optional[str] = None

class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    user_id: int
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: str
    match_score: Optional[float] = None
    applied_at: datetime
    updated_at: datetime

class ApplicationSubmitResponse(BaseModel):
    success: bool = True
    application: ApplicationResponse


# ============================================================
# AI INTERVIEW SCHEMAS
# ============================================================

class InterviewQuestionResponse(BaseModel):
    question_id: int
    question: str = ""
    type: str = "behavioral"
    answer: Optional[str] = ""
    section: Optional[str] = ""

class EvaluationRequest(BaseModel):
    job_title: Optional[str] = None
    responses: Optional[Any] = None


# ============================================================
# RESUME / WEBHOOK SCHEMAS
# ============================================================

class CompileLatexRequest(BaseModel):
    latex_code: Optional[str] = None

class MatchJobsRequest(BaseModel):
    page: int = Field(0, ge=0)
    page_size: int = Field(10, ge=1, le=100)
    query: Optional[str] = None

    # Optional filters forwarded to the matching workflow
    location: Optional[str] = None
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    is_remote: Optional[bool] = None
    is_hybrid: Optional[bool] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: Optional[str] = None
    company_name: Optional[str] = None
    required_skills: Optional[List[str]] = None
    job_category: Optional[str] = None
    posted_days_ago: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


# ============================================================
# UPLOAD SCHEMAS
# ============================================================

class UploadResponse(BaseModel):
    url: str
    path: str
    message: Optional[str] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
