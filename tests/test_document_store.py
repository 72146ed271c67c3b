from datetime import datetime
from unittest.mock import patch

import mongomock
import pytest

from utopia_hire.db.mongodb import COLLECTIONS
from utopia_hire.services.mongo_service import DocumentStore


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient().db


@pytest.fixture
def store(mongo_db):
    with patch("utopia_hire.services.mongo_service.get_collection", side_effect=lambda name: mongo_db[name]):
        yield DocumentStore()


def test_interview_insert(store, mongo_db):
    inserted_id = store.interviews.insert(4, 9, {"sections": []})

    doc = mongo_db[COLLECTIONS["interviews"]].find_one()
    assert str(doc["_id"]) == inserted_id
    assert doc["user_id"] == 4
    assert doc["job_id"] == 9
    assert doc["interview"] == {"sections": []}
    assert isinstance(doc["created_at"], datetime)


def test_evaluation_insert(store, mongo_db):
    responses = [{"question_id": 1, "answer": "A"}]
    evaluations = [{"question_id": 1, "ai_feedback": {}}]

    store.evaluations.insert(4, 9, responses, evaluations)

    doc = mongo_db[COLLECTIONS["evaluations"]].find_one({"user_id": 4})
    assert doc["responses"] == responses
    assert doc["evaluations"] == evaluations


def test_analysis_upsert_keeps_latest(store, mongo_db):
    store.analyses.upsert(11, 9, {"quickSummary": "first"})
    store.analyses.upsert(11, 9, {"quickSummary": "second"})
    store.analyses.upsert(12, 9, {"quickSummary": "other"})

    collection = mongo_db[COLLECTIONS["analyses"]]
    assert collection.count_documents({}) == 2
    assert collection.find_one({"application_id": 11})["analysis"] == {"quickSummary": "second"}


def test_delete_for_job_matches_int_and_string_ids(store, mongo_db):
    collection = mongo_db[COLLECTIONS["job_documents"]]
    collection.insert_many([
        {"content": "a", "metadata": {"job_id": 5}},
        {"content": "b", "metadata": {"job_id": "5"}},
        {"content": "c", "metadata": {"job_id": 6}},
        {"content": "d", "metadata": {}},
    ])

    assert store.job_documents.delete_for_job(5) == 2
    assert sorted(d["content"] for d in collection.find()) == ["c", "d"]
    assert store.job_documents.delete_for_job(5) == 0
