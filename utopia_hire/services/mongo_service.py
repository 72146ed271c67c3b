"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. interviews            - AI-generated mock interviews (per user + job)
2. interview_evaluations - AI feedback on submitted interview answers
3. candidate_analyses    - AI analyses of applications, for the employer
4. documents             - job knowledge documents written by n8n
                           (linked through metadata.job_id)
"""

from datetime import datetime, timezone
from typing import List
from pymongo.collection import Collection

from utopia_hire.db.mongodb import get_collection, COLLECTIONS


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# INTERVIEWS COLLECTION
# ============================================================

class InterviewService:
    """Stores generated mock interviews."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["interviews"])

    def insert(self, user_id: int, job_id: int, interview: dict) -> str:
        doc = {
            "user_id": user_id,
            "job_id": job_id,
            "interview": interview,
            "created_at": _now(),
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)


# ============================================================
# INTERVIEW EVALUATIONS COLLECTION
# ============================================================

class EvaluationService:
    """Stores AI feedback for interview answers."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["evaluations"])

    def insert(self, user_id: int, job_id: int, responses: List[dict], evaluations: List[dict]) -> str:
        doc = {
            "user_id": user_id,
            "job_id": job_id,
            "responses": responses,
            "evaluations": evaluations,
            "created_at": _now(),
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)


# ============================================================
# CANDIDATE ANALYSES COLLECTION
# ============================================================

class AnalysisService:
    """Stores AI candidate analyses (latest wins per application)."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["analyses"])

    def upsert(self, application_id: int, job_id: int, analysis: dict) -> None:
        self.collection.update_one(
            {"application_id": application_id},
            {"$set": {"job_id": job_id, "analysis": analysis, "analyzed_at": _now()}},
            upsert=True
        )


# ============================================================
# JOB KNOWLEDGE DOCUMENTS COLLECTION
# ============================================================

class JobDocumentService:
    """Documents produced by the n8n job ingestion workflow."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["job_documents"])

    def delete_for_job(self, job_id: int) -> int:
        result = self.collection.delete_many({"metadata.job_id": {"$in": [job_id, str(job_id)]}})
        return result.deleted_count


class DocumentStore:
    """All document collections behind one object (one dependency for routes)."""

    def __init__(self):
        self.interviews = InterviewService()
        self.evaluations = EvaluationService()
        self.analyses = AnalysisService()
        self.job_documents = JobDocumentService()


# Singleton instance
_document_store: DocumentStore = None


def get_document_store() -> DocumentStore:
    """Get or create the document store (singleton pattern)"""
    global _document_store
    if _document_store is None:
        _document_store = DocumentStore()
    return _document_store
