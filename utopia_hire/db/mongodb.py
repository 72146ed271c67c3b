"""
MongoDB Connection Utility

MongoDB stores:
- AI-generated mock interviews and their evaluations
- AI candidate analyses (per application)
- Job knowledge documents written by the n8n workflows (metadata.job_id)
- Uploaded files (avatars, logos, resumes) in GridFS buckets

WHY MongoDB for these?
- Schema-flexible: AI outputs vary in structure
- Document-oriented: each interview/analysis is self-contained
- GridFS gives bucket-style object storage next to the documents
"""
import logging

from gridfs import GridFSBucket
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from utopia_hire.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the documents database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def get_bucket(name: str) -> GridFSBucket:
    """Get a GridFS bucket (see BUCKETS)."""
    return GridFSBucket(get_mongo_db(), bucket_name=name)


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "interviews": "interviews",
    "evaluations": "interview_evaluations",
    "analyses": "candidate_analyses",
    "job_documents": "documents",
}

# Storage bucket names exposed under /api/files/{bucket}/...
BUCKETS = {
    "avatars": "avatars",
    "company_logos": "company_logos",
    "resumes": "resumes",
    "uploads": "uploads",
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["interviews"]].create_index([("user_id", 1), ("job_id", 1)])
    db[COLLECTIONS["evaluations"]].create_index([("user_id", 1), ("job_id", 1)])
    db[COLLECTIONS["analyses"]].create_index("application_id")
    db[COLLECTIONS["job_documents"]].create_index("metadata.job_id")

    logger.info("MongoDB indexes created successfully")
