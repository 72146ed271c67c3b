import pytest

from conftest import apply, create_job


def test_update_profile_is_idempotent(client, auth_headers):
    payload = {"full_name": "Alice M.", "phone": "+216 20 000 000", "location": "Tunis", "title": "Data Engineer"}

    first = client.put("/api/profile", json=payload, headers=auth_headers)
    second = client.put("/api/profile", json=payload, headers=auth_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    for key, value in payload.items():
        assert second.json()[key] == value
    assert first.json()["user_id"] == second.json()["user_id"]


def test_partial_update_keeps_other_fields(client, auth_headers):
    client.put("/api/profile", json={"location": "Sfax", "bio": "Hello"}, headers=auth_headers)
    profile = client.put("/api/profile", json={"bio": "Updated"}, headers=auth_headers).json()
    assert profile["location"] == "Sfax"
    assert profile["bio"] == "Updated"


def test_experience_crud(client, auth_headers):
    created = client.post(
        "/api/profile/experiences",
        json={"title": "Engineer", "company": "Acme", "start_date": "2021-03-01", "end_date": "2023-01-31"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    item = created.json()
    assert item["company"] == "Acme"

    updated = client.put(
        f"/api/profile/experiences/{item['id']}",
        json={"title": "Senior Engineer", "company": "Acme", "start_date": "2021-03-01", "is_current": True},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Senior Engineer"
    assert updated.json()["end_date"] is None

    listed = client.get("/api/profile/experiences", headers=auth_headers).json()
    assert [e["title"] for e in listed] == ["Senior Engineer"]

    assert client.delete(f"/api/profile/experiences/{item['id']}", headers=auth_headers).status_code == 200
    assert client.get("/api/profile/experiences", headers=auth_headers).json() == []


def test_current_experience_clears_end_date(client, auth_headers):
    response = client.post(
        "/api/profile/experiences",
        json={
            "title": "Engineer", "company": "Acme", "start_date": "2022-01-01",
            "end_date": "2023-01-01", "is_current": True,
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["end_date"] is None


@pytest.mark.parametrize("payload", [
    {"company": "Acme", "start_date": "2022-01-01", "is_current": True},
    {"title": "Engineer", "company": "Acme", "is_current": True},
    {"title": "Engineer", "company": "Acme", "start_date": "2022-01-01"},
])
def test_experience_validation(client, auth_headers, payload):
    response = client.post("/api/profile/experiences", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert "error" in response.json()


def test_section_rows_of_other_user_are_not_found(client, auth_headers, other_headers):
    skill = client.post("/api/profile/skills", json={"name": "Python"}, headers=auth_headers).json()

    assert client.put(f"/api/profile/skills/{skill['id']}", json={"name": "Go"}, headers=other_headers).status_code == 404
    assert client.delete(f"/api/profile/skills/{skill['id']}", headers=other_headers).status_code == 404
    assert client.get("/api/profile/skills", headers=other_headers).json() == []


def test_unknown_section(client, auth_headers):
    assert client.get("/api/profile/hobbies", headers=auth_headers).status_code == 404


def test_preferences_upsert_keeps_one_row(client, auth_headers):
    assert client.get("/api/profile/preferences", headers=auth_headers).json() is None

    first = client.put(
        "/api/profile/preferences",
        json={"work_environment": "remote", "core_values": ["ownership"]},
        headers=auth_headers,
    ).json()
    second = client.put(
        "/api/profile/preferences",
        json={"work_environment": "hybrid", "core_values": ["ownership", "learning"]},
        headers=auth_headers,
    ).json()

    assert first["id"] == second["id"]
    assert second["work_environment"] == "hybrid"
    assert second["core_values"] == ["ownership", "learning"]


def test_full_profile_collects_sections(client, auth_headers):
    client.post("/api/profile/skills", json={"name": "SQL"}, headers=auth_headers)
    client.post("/api/profile/languages", json={"name": "French", "proficiency": "fluent"}, headers=auth_headers)
    client.post(
        "/api/profile/education",
        json={"school": "INSAT", "degree": "Engineering", "start_year": 2015, "end_year": 2020},
        headers=auth_headers,
    )

    full = client.get("/api/profile/full", headers=auth_headers).json()

    assert full["profile"]["full_name"] == "Alice Martin"
    assert [s["name"] for s in full["skills"]] == ["SQL"]
    assert full["languages"][0]["proficiency"] == "fluent"
    assert full["education"][0]["school"] == "INSAT"
    assert full["experiences"] == []
    assert full["preferences"] is None


def test_profile_feedback(client, ai, auth_headers, other_headers):
    job = create_job(client, other_headers)
    apply(client, auth_headers, job["id"])
    ai.profile_feedback.return_value = "## Profile Score: 4/5"

    response = client.post("/api/profile-feedback", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"feedback": "## Profile Score: 4/5"}
    context = ai.profile_feedback.call_args.args[0]
    assert context["application_count"] == 1
    assert context["profile"]["full_name"] == "Alice Martin"


def test_profile_feedback_ai_failure(client, ai, auth_headers):
    ai.profile_feedback.side_effect = RuntimeError("quota exceeded")
    response = client.post("/api/profile-feedback", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate feedback"}
