import io

from docx import Document

from utopia_hire.utils.file_upload import file_suffix

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _docx_bytes():
    buffer = io.BytesIO()
    document = Document()
    document.add_paragraph("Alice Martin - Backend Engineer")
    document.save(buffer)
    return buffer.getvalue()


DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def test_upload_avatar_validation(client, auth_headers):
    response = client.post(
        "/api/upload-avatar", files={"avatar": ("me.gif", b"GIF89a", "image/gif")}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Only JPEG, PNG, and WebP are allowed"}

    too_big = b"\x00" * (2 * 1024 * 1024 + 1)
    response = client.post(
        "/api/upload-avatar", files={"avatar": ("me.png", too_big, "image/png")}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json() == {"error": "File size too large. Maximum size is 2MB"}

    assert client.post("/api/upload-avatar", headers=auth_headers).json() == {"error": "No file provided"}


def test_upload_avatar_replaces_previous(client, storage, auth_headers):
    first = client.post(
        "/api/upload-avatar", files={"avatar": ("me.png", PNG_BYTES, "image/png")}, headers=auth_headers
    ).json()
    assert first["url"] == f"http://testserver/api/files/avatars/{first['path']}"
    assert client.get("/api/profile", headers=auth_headers).json()["profile_picture"] == first["url"]

    second = client.post(
        "/api/upload-avatar", files={"avatar": ("me2.webp", b"RIFFxxxxWEBP", "image/webp")}, headers=auth_headers
    ).json()

    assert second["path"].endswith(".webp")
    assert ("avatars", first["path"]) not in storage.files or first["path"] == second["path"]
    assert ("avatars", second["path"]) in storage.files
    assert client.get("/api/profile", headers=auth_headers).json()["profile_picture"] == second["url"]


def test_delete_avatar(client, storage, auth_headers, other_headers):
    uploaded = client.post(
        "/api/upload-avatar", files={"avatar": ("me.png", PNG_BYTES, "image/png")}, headers=auth_headers
    ).json()

    response = client.delete(f"/api/upload-avatar?path={uploaded['path']}", headers=other_headers)
    assert response.status_code == 403

    response = client.delete(f"/api/upload-avatar?path={uploaded['path']}", headers=auth_headers)
    assert response.json() == {"success": True}
    assert ("avatars", uploaded["path"]) not in storage.files
    assert client.get("/api/profile", headers=auth_headers).json()["profile_picture"] is None


def test_upload_and_delete_logo(client, storage, auth_headers, other_headers):
    svg = b'<svg xmlns="http://www.w3.org/2000/svg"></svg>'
    uploaded = client.post(
        "/api/upload-logo", files={"logo": ("logo.svg", svg, "image/svg+xml")}, headers=auth_headers
    ).json()
    assert uploaded["message"] == "Logo uploaded successfully"
    assert uploaded["path"].startswith("logos/")

    assert client.delete("/api/upload-logo", headers=auth_headers).json() == {"error": "No file path provided"}
    assert client.delete(f"/api/upload-logo?path={uploaded['path']}", headers=other_headers).status_code == 403

    response = client.delete(f"/api/upload-logo?path={uploaded['path']}", headers=auth_headers)
    assert response.json() == {"message": "Logo deleted successfully"}
    assert storage.files == {}


def test_upload_resume_updates_profile(client, storage, auth_headers):
    response = client.post(
        "/api/upload-resume", files={"file": ("cv.docx", _docx_bytes(), DOCX_TYPE)}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["path"].startswith("resumes/")
    assert ("resumes", body["path"]) in storage.files

    profile = client.get("/api/profile", headers=auth_headers).json()
    assert profile["resume_url"] == body["url"]
    assert profile["is_resume_latex"] is False
    assert profile["first_login"] is False


def test_upload_resume_rejects_bad_files(client, auth_headers):
    response = client.post(
        "/api/upload-resume", files={"file": ("cv.txt", b"plain text", "text/plain")}, headers=auth_headers
    )
    assert response.json() == {"error": "Only PDF, DOC, and DOCX files are allowed"}

    response = client.post(
        "/api/upload-resume", files={"file": ("cv.pdf", b"this is not a pdf", "application/pdf")}, headers=auth_headers
    )
    assert response.status_code == 400


def test_upload_temp_resume_leaves_profile(client, auth_headers):
    response = client.post(
        "/api/upload-temp-resume", files={"file": ("cv.doc", b"\xd0\xcf\x11\xe0", "application/msword")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["path"].startswith("temp/")
    assert client.get("/api/profile", headers=auth_headers).json()["resume_url"] is None


def test_generic_upload_and_download(client, auth_headers):
    uploaded = client.post(
        "/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")}, headers=auth_headers
    ).json()
    assert uploaded["path"].endswith("-notes.txt")

    response = client.get(f"/api/files/uploads/{uploaded['path']}")
    assert response.status_code == 200
    assert response.content == b"hello"
    assert response.headers["content-type"].startswith("text/plain")

    assert client.get("/api/files/uploads/missing.txt").status_code == 404


def test_upload_without_extension_has_no_trailing_dot(client, storage, auth_headers):
    uploaded = client.post(
        "/api/upload-avatar", files={"avatar": ("avatar", PNG_BYTES, "image/png")}, headers=auth_headers
    ).json()

    assert not uploaded["path"].endswith(".")
    assert "." not in uploaded["path"]
    assert ("avatars", uploaded["path"]) in storage.files


def test_file_suffix():
    assert file_suffix("cv.PDF") == ".pdf"
    assert file_suffix("archive.tar.gz") == ".gz"
    assert file_suffix("avatar") == ""
    assert file_suffix("") == ""
