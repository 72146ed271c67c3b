"""
Utopia Hire - Main Application

FastAPI backend with:
- PostgreSQL for structured data (profiles, organizations, jobs, applications)
- MongoDB for AI outputs, job knowledge documents and uploaded files (GridFS)
- Gemini AI for mock interviews, feedback and candidate analysis
- n8n webhooks for resume generation/compilation and semantic job matching
- JWT session authentication

Run: uvicorn utopia_hire.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from utopia_hire.api import api_router
from utopia_hire.core.config import get_settings
from utopia_hire.core.errors import register_exception_handlers
from utopia_hire.db.mongodb import init_mongo_indexes, test_mongo_connection
from utopia_hire.db.postgres import init_db, test_postgres_connection

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Utopia Hire",
    description="""
    Job board and applicant tracking with AI assistance.

    ## Features
    - **Authentication**: session cookie / Bearer JWT
    - **Profiles**: basic info, resume sections, values & preferences, AI feedback
    - **Organizations & Jobs**: employer accounts and job postings
    - **Applications**: apply, track status, AI candidate analysis
    - **AI Interviews**: generated mock interviews with evaluated answers
    - **Resumes**: generation, LaTeX compilation and job matching via n8n
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables and MongoDB indexes on startup."""
    init_db()
    logger.info("Database tables ready")
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
