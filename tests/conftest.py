import os
import tempfile

# Settings are cached on first use, so the environment must be ready before
# anything from utopia_hire is imported.
_db_dir = tempfile.mkdtemp(prefix="utopia-hire-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["N8N_API_KEY"] = "test-n8n-key"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from utopia_hire.db.postgres import engine
from utopia_hire.db.tables import metadata
from utopia_hire.main import app
from utopia_hire.services.ai_service import get_ai_service
from utopia_hire.services.mongo_service import get_document_store
from utopia_hire.services.storage_service import FileStorage, get_file_storage
from utopia_hire.services.webhook_client import get_webhook_client

PASSWORD = "secret-pass-123"


class StoredFile:
    """Minimal stand-in for a GridOut: iterable bytes plus metadata."""

    def __init__(self, data: bytes, content_type: str):
        self.data = data
        self.metadata = {"content_type": content_type}

    def __iter__(self):
        yield self.data


class InMemoryStorage(FileStorage):
    """FileStorage keeping files in a dict instead of GridFS."""

    def __init__(self):
        self.files = {}

    def upload(self, bucket, path, data, content_type=None):
        self.files[(bucket, path)] = StoredFile(data, content_type)
        return self.public_url(bucket, path)

    def remove(self, bucket, paths):
        removed = 0
        for path in paths:
            if self.files.pop((bucket, path), None) is not None:
                removed += 1
        return removed

    def open(self, bucket, path):
        return self.files.get((bucket, path))


@pytest.fixture(autouse=True)
def database():
    metadata.create_all(engine)
    yield
    metadata.drop_all(engine)


@pytest.fixture
def ai():
    return MagicMock()


@pytest.fixture
def webhooks():
    mock = MagicMock()
    mock.is_configured = True
    return mock


@pytest.fixture
def documents():
    mock = MagicMock()
    mock.job_documents.delete_for_job.return_value = 0
    return mock


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def client(ai, webhooks, documents, storage):
    app.dependency_overrides[get_ai_service] = lambda: ai
    app.dependency_overrides[get_webhook_client] = lambda: webhooks
    app.dependency_overrides[get_document_store] = lambda: documents
    app.dependency_overrides[get_file_storage] = lambda: storage
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, email, full_name="Test User"):
    """Register a user and return Bearer headers for it (cookies are cleared)."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": PASSWORD, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client, "alice@example.com", "Alice Martin")


@pytest.fixture
def other_headers(client):
    return register_and_login(client, "bob@example.com", "Bob Stone")


def create_job(client, headers, **overrides):
    payload = {"title": "Backend Engineer", "status": "active"}
    payload.update(overrides)
    response = client.post("/api/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["job"]


def apply(client, headers, job_id, **overrides):
    payload = {"job_id": job_id, "email": "candidate@example.com", "phone": "+216 555 0101"}
    payload.update(overrides)
    return client.post("/api/applications", json=payload, headers=headers)
