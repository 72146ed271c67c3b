"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from utopia_hire.api.routes.auth_routes import router as auth_router
from utopia_hire.api.routes.profile_routes import router as profile_router
from utopia_hire.api.routes.onboarding_routes import router as onboarding_router
from utopia_hire.api.routes.organization_routes import router as organization_router
from utopia_hire.api.routes.job_routes import router as job_router
from utopia_hire.api.routes.application_routes import router as application_router
from utopia_hire.api.routes.interview_routes import router as interview_router
from utopia_hire.api.routes.resume_routes import router as resume_router
from utopia_hire.api.routes.upload_routes import router as upload_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(onboarding_router)
api_router.include_router(organization_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(interview_router)
api_router.include_router(resume_router)
api_router.include_router(upload_router)
