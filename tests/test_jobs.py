from conftest import create_job


def test_create_job_defaults_and_webhook(client, webhooks, auth_headers):
    response = client.post("/api/jobs", json={"title": "Data Analyst"}, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Job offer created successfully"
    job = body["job"]
    assert job["status"] == "draft"
    assert job["salary_currency"] == "USD"
    assert job["positions_available"] == 1
    assert job["required_skills"] == []
    assert job["published_at"] is None
    webhooks.notify_job_created.assert_called_once_with(job["id"])


def test_active_job_gets_published_at(client, auth_headers):
    job = create_job(client, auth_headers, status="active")
    assert job["published_at"] is not None


def test_create_job_fills_company_from_organization(client, auth_headers):
    org = client.post(
        "/api/organizations",
        json={"name": "Acme", "logo_url": "http://testserver/logo.png", "description": "We build things"},
        headers=auth_headers,
    ).json()

    job = create_job(client, auth_headers, organization_id=org["id"], company_website="https://jobs.acme.example")

    assert job["company_name"] == "Acme"
    assert job["company_logo"] == "http://testserver/logo.png"
    assert job["company_description"] == "We build things"
    assert job["company_website"] == "https://jobs.acme.example"


def test_create_job_for_foreign_or_missing_organization(client, auth_headers, other_headers):
    org = client.post("/api/organizations", json={"name": "Acme"}, headers=auth_headers).json()

    response = client.post("/api/jobs", json={"title": "Role", "organization_id": org["id"]}, headers=other_headers)
    assert response.status_code == 403

    response = client.post("/api/jobs", json={"title": "Role", "organization_id": 4242}, headers=auth_headers)
    assert response.status_code == 404


def test_create_job_requires_auth(client):
    assert client.post("/api/jobs", json={"title": "Role"}).status_code == 401


def test_list_jobs_filters(client, auth_headers):
    create_job(client, auth_headers, title="Remote Python", employment_type="full-time", is_remote=True, location="Tunis")
    create_job(client, auth_headers, title="Onsite Java", employment_type="contract", location="Paris")
    create_job(client, auth_headers, title="Hidden draft", status="draft", location="Tunis")

    def titles(query=""):
        return {j["title"] for j in client.get(f"/api/jobs{query}").json()["jobs"]}

    assert titles() == {"Remote Python", "Onsite Java"}
    assert titles("?status=draft") == {"Hidden draft"}
    assert titles("?employment_type=contract") == {"Onsite Java"}
    assert titles("?is_remote=true") == {"Remote Python"}
    assert titles("?location=tUN") == {"Remote Python"}
    assert len(client.get("/api/jobs?limit=1").json()["jobs"]) == 1
    assert len(client.get("/api/jobs?limit=1&offset=1").json()["jobs"]) == 1
    assert client.get("/api/jobs?offset=2").json()["jobs"] == []


def test_get_job_counts_views(client, auth_headers, other_headers):
    job = create_job(client, auth_headers)

    client.get(f"/api/jobs/{job['id']}", headers=other_headers)
    second = client.get(f"/api/jobs/{job['id']}", headers=other_headers)

    assert second.status_code == 200
    assert second.json()["views_count"] == 1
    assert client.get(f"/api/jobs/{job['id']}", headers=other_headers).json()["views_count"] == 2
    assert client.get("/api/jobs/9999", headers=auth_headers).status_code == 404


def test_patch_job(client, auth_headers, other_headers):
    job = create_job(client, auth_headers, status="draft")

    response = client.patch(f"/api/jobs/{job['id']}", json={"status": "active", "title": "New title"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert response.json()["title"] == "New title"
    assert response.json()["published_at"] is not None

    assert client.patch(f"/api/jobs/{job['id']}", json={"title": "Hijack"}, headers=other_headers).status_code == 403
    assert client.patch("/api/jobs/9999", json={"title": "Nope"}, headers=auth_headers).status_code == 404

    response = client.patch(f"/api/jobs/{job['id']}", json={"salary_min": 10}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No valid fields to update"}


def test_delete_job_removes_documents(client, documents, auth_headers, other_headers):
    job = create_job(client, auth_headers)

    assert client.delete(f"/api/jobs/{job['id']}", headers=other_headers).status_code == 404
    documents.job_documents.delete_for_job.assert_not_called()

    assert client.delete(f"/api/jobs/{job['id']}", headers=auth_headers).status_code == 200
    documents.job_documents.delete_for_job.assert_called_once_with(job["id"])
    assert client.get(f"/api/jobs/{job['id']}", headers=auth_headers).status_code == 404


def test_delete_job_continues_when_document_cleanup_fails(client, documents, auth_headers):
    documents.job_documents.delete_for_job.side_effect = RuntimeError("mongo down")
    job = create_job(client, auth_headers)

    assert client.delete(f"/api/jobs/{job['id']}", headers=auth_headers).status_code == 200


def test_my_jobs(client, auth_headers, other_headers):
    create_job(client, auth_headers, title="Mine active")
    create_job(client, auth_headers, title="Mine closed", status="closed")
    create_job(client, other_headers, title="Not mine")

    mine = client.get("/api/my-jobs", headers=auth_headers).json()
    assert {j["title"] for j in mine} == {"Mine active", "Mine closed"}

    closed = client.get("/api/my-jobs?status=closed", headers=auth_headers).json()
    assert [j["title"] for j in closed] == ["Mine closed"]
    assert len(client.get("/api/my-jobs?status=all", headers=auth_headers).json()) == 2
